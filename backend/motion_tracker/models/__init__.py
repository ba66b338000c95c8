"""Database models."""

from motion_tracker.models.base import Base
from motion_tracker.models.project import Project, ProjectSettings
from motion_tracker.models.data_point import DataPoint

__all__ = [
    "Base",
    "Project",
    "ProjectSettings",
    "DataPoint",
]
