"""
Tracked point set with bounded undo/redo history.

Each point is one manual measurement: the pixel location of the tracked
object on a given frame. Points are immutable values; edits replace a
point in the set.

UNDO MODEL:
- Every add/update/delete that changes the set pushes one snapshot
- History is capped (oldest snapshots silently dropped)
- Any new mutation clears the redo stack
- hydrate() loads a new baseline and clears both stacks
- Selection is UI state and is never recorded
"""

import uuid
import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Deque, Dict, Iterable, Iterator, List, Optional, Tuple

from motion_tracker.measurement.geometry import Point2D

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 50


@dataclass(frozen=True)
class TrackedPoint:
    """One manual measurement on one frame."""
    id: str
    frame_number: int
    time: float  # seconds
    pixel_x: float
    pixel_y: float

    @property
    def pixel(self) -> Point2D:
        return Point2D(self.pixel_x, self.pixel_y)


Snapshot = Tuple[TrackedPoint, ...]


class TrackedPointSet:
    """
    Ordered-by-insertion collection of tracked points.

    Consumers that need time order must use sorted_points(); storage order
    is insertion order.
    """

    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self.history_limit = history_limit
        self._points: List[TrackedPoint] = []
        self._selected_id: Optional[str] = None
        self._undo: Deque[Snapshot] = deque(maxlen=history_limit)
        self._redo: List[Snapshot] = []

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrackedPoint]:
        return iter(list(self._points))

    def __contains__(self, point_id: str) -> bool:
        return self.get(point_id) is not None

    @property
    def points(self) -> List[TrackedPoint]:
        return list(self._points)

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    def get(self, point_id: str) -> Optional[TrackedPoint]:
        for point in self._points:
            if point.id == point_id:
                return point
        return None

    def get_by_frame(self, frame_number: int) -> Optional[TrackedPoint]:
        for point in self._points:
            if point.frame_number == frame_number:
                return point
        return None

    def sorted_points(self) -> List[TrackedPoint]:
        """Points by frame number; ties keep insertion order."""
        return sorted(self._points, key=lambda p: p.frame_number)

    # Mutations (each one undoable)

    def add(
        self,
        frame_number: int,
        time: float,
        pixel_x: float,
        pixel_y: float,
    ) -> Optional[TrackedPoint]:
        """
        Add a point with a fresh id.

        Returns None without recording history when the frame already
        has a point; one sample per frame keeps the kinematics neighbours
        meaningful.
        """
        if self.get_by_frame(frame_number) is not None:
            logger.warning(f"Frame {frame_number} already has a tracked point, ignoring add")
            return None

        point = TrackedPoint(
            id=str(uuid.uuid4()),
            frame_number=frame_number,
            time=time,
            pixel_x=pixel_x,
            pixel_y=pixel_y,
        )
        self._record()
        self._points.append(point)
        return point

    def update(self, point_id: str, position: Point2D) -> Optional[TrackedPoint]:
        """Move a point. Only its pixel position changes."""
        for i, point in enumerate(self._points):
            if point.id == point_id:
                moved = replace(point, pixel_x=position.x, pixel_y=position.y)
                self._record()
                self._points[i] = moved
                return moved

        logger.warning(f"Update for unknown point {point_id} ignored")
        return None

    def delete(self, point_id: str) -> bool:
        if self.get(point_id) is None:
            logger.warning(f"Delete for unknown point {point_id} ignored")
            return False

        self._record()
        self._points = [p for p in self._points if p.id != point_id]
        if self._selected_id == point_id:
            self._selected_id = None
        return True

    def hydrate(self, points: Iterable[TrackedPoint]) -> None:
        """Replace the whole set with stored points. Not undoable."""
        self._points = list(points)
        self._selected_id = None
        self._undo.clear()
        self._redo.clear()
        logger.debug(f"Hydrated {len(self._points)} tracked points")

    def reset(self) -> None:
        self.hydrate([])

    # UI state

    def select(self, point_id: Optional[str]) -> None:
        self._selected_id = point_id

    # History

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(tuple(self._points))
        self._restore(self._undo.pop())
        logger.debug(f"Undo, {len(self._undo)} steps left")
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(tuple(self._points))
        self._restore(self._redo.pop())
        logger.debug(f"Redo, {len(self._redo)} steps left")
        return True

    def clear_history(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def _record(self) -> None:
        self._undo.append(tuple(self._points))
        self._redo.clear()

    def _restore(self, snapshot: Snapshot) -> None:
        self._points = list(snapshot)
        if self._selected_id is not None and self.get(self._selected_id) is None:
            self._selected_id = None

    def to_dicts(self) -> List[Dict[str, Any]]:
        """Stored fields only, in insertion order."""
        return [
            {
                "id": p.id,
                "frame_number": p.frame_number,
                "time": p.time,
                "pixel_x": p.pixel_x,
                "pixel_y": p.pixel_y,
            }
            for p in self._points
        ]
