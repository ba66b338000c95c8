"""Measurement session: the two state containers of one editing session."""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from motion_tracker.measurement.coordinates import CoordinateSystem
from motion_tracker.measurement.regression import RegressionResult
from motion_tracker.measurement.table import (
    DerivedRow, GraphType, TableColumn, assemble_table, regression_for,
)
from motion_tracker.measurement.tracking import DEFAULT_HISTORY_LIMIT, TrackedPoint, TrackedPointSet

logger = logging.getLogger(__name__)


class MeasurementSession:
    """
    Owns one CoordinateSystem and one TrackedPointSet.

    Both containers are injectable so several sessions can live side by
    side (one per request on the server). Derived data is never cached:
    table() and regression() recompute from current state each call.

    Usage:
        session = MeasurementSession()
        session.coordinates.set_scale_point1(Point2D(0, 0))
        session.coordinates.set_scale_point2(Point2D(100, 0))
        session.coordinates.set_scale_distance(1.0)
        session.points.add(frame_number=0, time=0.0, pixel_x=10, pixel_y=20)
        rows = session.table()
    """

    def __init__(
        self,
        coordinates: Optional[CoordinateSystem] = None,
        points: Optional[TrackedPointSet] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ):
        self.coordinates = coordinates if coordinates is not None else CoordinateSystem()
        self.points = points if points is not None else TrackedPointSet(history_limit)

    @classmethod
    def from_stored(
        cls,
        coordinate_system: Optional[Mapping[str, Any]],
        points: Iterable[TrackedPoint],
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> "MeasurementSession":
        """Baseline load from storage; nothing here is undoable."""
        session = cls(history_limit=history_limit)
        if coordinate_system:
            session.coordinates.hydrate(coordinate_system)
        session.points.hydrate(points)
        return session

    def table(self) -> List[DerivedRow]:
        return assemble_table(self.points, self.coordinates)

    def regression(
        self,
        x: TableColumn = TableColumn.TIME,
        y: TableColumn = TableColumn.WORLD_X,
    ) -> Optional[RegressionResult]:
        return regression_for(self.table(), x, y)

    def graph_regression(self, graph: GraphType) -> Optional[RegressionResult]:
        x, y = GraphType(graph).columns
        return self.regression(x, y)
