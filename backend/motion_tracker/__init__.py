"""Motion Tracker: video-based motion analysis backend."""

__version__ = "1.0.0"
