"""
Measurement pipeline: pixel marks to world kinematics.

PIPELINE COMPONENTS:
1. Geometry: Point2D, distance, rotation
2. CoordinateSystem: calibration, origin, rotation, Y-axis convention
3. TrackedPointSet: manual marks per frame, with undo/redo
4. Kinematics: central-difference velocity and acceleration
5. Regression: least-squares line fit with R²
6. Table: one derived row per tracked point
7. Export: CSV of the derived table

Every stage is pure apart from the two state containers (CoordinateSystem,
TrackedPointSet). Values that cannot be computed (no calibration, sequence
ends, zero time steps, too few points) are None rather than errors.

Usage:
    from motion_tracker.measurement import MeasurementSession, Point2D

    session = MeasurementSession()
    session.coordinates.set_scale_point1(Point2D(0, 0))
    session.coordinates.set_scale_point2(Point2D(100, 0))
    session.coordinates.set_scale_distance(1.0)
    for frame, (x, y) in enumerate(clicks):
        session.points.add(frame, frame / fps, x, y)
    for row in session.table():
        print(row.time, row.world_x, row.vx)
"""

from motion_tracker.measurement.geometry import Point2D, distance, rotate
from motion_tracker.measurement.coordinates import (
    CoordinateSystem, ScaleUnit, calculate_pixels_per_unit,
    pixel_to_world, world_to_pixel,
)
from motion_tracker.measurement.tracking import TrackedPoint, TrackedPointSet
from motion_tracker.measurement.kinematics import (
    WorldSample, Velocity, Acceleration,
    calculate_velocity, calculate_acceleration, compute_kinematics,
)
from motion_tracker.measurement.regression import RegressionResult, linear_regression
from motion_tracker.measurement.table import (
    DerivedRow, TableColumn, GraphType,
    assemble_table, column_pairs, regression_for,
)
from motion_tracker.measurement.session import MeasurementSession
from motion_tracker.measurement.export import generate_csv, table_to_csv, export_filename

__all__ = [
    # Geometry
    "Point2D",
    "distance",
    "rotate",

    # Coordinate system
    "CoordinateSystem",
    "ScaleUnit",
    "calculate_pixels_per_unit",
    "pixel_to_world",
    "world_to_pixel",

    # Tracking
    "TrackedPoint",
    "TrackedPointSet",

    # Kinematics
    "WorldSample",
    "Velocity",
    "Acceleration",
    "calculate_velocity",
    "calculate_acceleration",
    "compute_kinematics",

    # Regression
    "RegressionResult",
    "linear_regression",

    # Table
    "DerivedRow",
    "TableColumn",
    "GraphType",
    "assemble_table",
    "column_pairs",
    "regression_for",

    # Session
    "MeasurementSession",

    # Export
    "generate_csv",
    "table_to_csv",
    "export_filename",
]
