"""
Derived measurement table.

Joins tracked pixel points, the current coordinate system and the
kinematics engine into one row per tracked point. The table is rebuilt in
full on every call, so it always reflects the latest calibration; nothing
derived is stored.

ASSEMBLY:
1. Sort points by frame number (stable)
2. Transform each to world coordinates (None when uncalibrated)
3. Run kinematics over the rows that have world coordinates
4. Attach each row's velocity/acceleration by its index in that sequence
5. Number rows from 1 in sorted order
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from motion_tracker.measurement.coordinates import CoordinateSystem, ScaleUnit, pixel_to_world
from motion_tracker.measurement.kinematics import WorldSample, compute_kinematics
from motion_tracker.measurement.regression import RegressionResult, linear_regression
from motion_tracker.measurement.tracking import TrackedPoint


@dataclass(frozen=True)
class DerivedRow:
    """One fully computed table row. None means not computable here."""
    id: str
    row_number: int
    frame_number: int
    time: float
    pixel_x: float
    pixel_y: float
    world_x: Optional[float] = None
    world_y: Optional[float] = None
    vx: Optional[float] = None
    vy: Optional[float] = None
    speed: Optional[float] = None
    ax: Optional[float] = None
    ay: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class TableColumn(str, Enum):
    """Numeric columns that can be charted or fitted."""
    FRAME_NUMBER = "frame_number"
    TIME = "time"
    PIXEL_X = "pixel_x"
    PIXEL_Y = "pixel_y"
    WORLD_X = "world_x"
    WORLD_Y = "world_y"
    VX = "vx"
    VY = "vy"
    SPEED = "speed"
    AX = "ax"
    AY = "ay"

    @classmethod
    def all(cls) -> List[str]:
        return [column.value for column in cls]

    def label(self, unit: ScaleUnit) -> str:
        """Axis label carrying the scale unit."""
        u = ScaleUnit(unit).value
        return {
            TableColumn.FRAME_NUMBER: "frame",
            TableColumn.TIME: "t (s)",
            TableColumn.PIXEL_X: "x (px)",
            TableColumn.PIXEL_Y: "y (px)",
            TableColumn.WORLD_X: f"x ({u})",
            TableColumn.WORLD_Y: f"y ({u})",
            TableColumn.VX: f"vx ({u}/s)",
            TableColumn.VY: f"vy ({u}/s)",
            TableColumn.SPEED: f"|v| ({u}/s)",
            TableColumn.AX: f"ax ({u}/s²)",
            TableColumn.AY: f"ay ({u}/s²)",
        }[self]


class GraphType(str, Enum):
    """Preset charts: vertical axis vs horizontal axis."""
    X_T = "x-t"
    Y_T = "y-t"
    VX_T = "vx-t"
    VY_T = "vy-t"
    Y_X = "y-x"

    @property
    def display_name(self) -> str:
        return {
            GraphType.X_T: "Position X vs Time",
            GraphType.Y_T: "Position Y vs Time",
            GraphType.VX_T: "Velocity X vs Time",
            GraphType.VY_T: "Velocity Y vs Time",
            GraphType.Y_X: "Position Y vs X",
        }[self]

    @property
    def columns(self) -> Tuple[TableColumn, TableColumn]:
        """(x column, y column)"""
        return {
            GraphType.X_T: (TableColumn.TIME, TableColumn.WORLD_X),
            GraphType.Y_T: (TableColumn.TIME, TableColumn.WORLD_Y),
            GraphType.VX_T: (TableColumn.TIME, TableColumn.VX),
            GraphType.VY_T: (TableColumn.TIME, TableColumn.VY),
            GraphType.Y_X: (TableColumn.WORLD_X, TableColumn.WORLD_Y),
        }[self]


def assemble_table(
    points: Iterable[TrackedPoint],
    system: CoordinateSystem,
) -> List[DerivedRow]:
    """Build the derived table for the given points and coordinate system."""
    sorted_points = sorted(points, key=lambda p: p.frame_number)

    worlds = [pixel_to_world(p.pixel, system) for p in sorted_points]

    # Kinematics input: only rows with world coordinates, in time order.
    # kinematics_index maps a row position to its index in that sequence.
    samples: List[WorldSample] = []
    kinematics_index: Dict[int, int] = {}
    for i, (point, world) in enumerate(zip(sorted_points, worlds)):
        if world is None:
            continue
        kinematics_index[i] = len(samples)
        samples.append(WorldSample(time=point.time, x=world.x, y=world.y))

    derivatives = compute_kinematics(samples)

    rows: List[DerivedRow] = []
    for i, (point, world) in enumerate(zip(sorted_points, worlds)):
        velocity = acceleration = None
        if i in kinematics_index:
            velocity, acceleration = derivatives[kinematics_index[i]]

        rows.append(DerivedRow(
            id=point.id,
            row_number=i + 1,
            frame_number=point.frame_number,
            time=point.time,
            pixel_x=point.pixel_x,
            pixel_y=point.pixel_y,
            world_x=world.x if world else None,
            world_y=world.y if world else None,
            vx=velocity.vx if velocity else None,
            vy=velocity.vy if velocity else None,
            speed=velocity.speed if velocity else None,
            ax=acceleration.ax if acceleration else None,
            ay=acceleration.ay if acceleration else None,
        ))

    return rows


def column_pairs(
    rows: Iterable[DerivedRow],
    x: TableColumn,
    y: TableColumn,
) -> List[Tuple[float, float]]:
    """(x, y) values for rows where both columns are computable."""
    x_key = TableColumn(x).value
    y_key = TableColumn(y).value
    pairs = []
    for row in rows:
        x_val = getattr(row, x_key)
        y_val = getattr(row, y_key)
        if x_val is not None and y_val is not None:
            pairs.append((float(x_val), float(y_val)))
    return pairs


def regression_for(
    rows: Iterable[DerivedRow],
    x: TableColumn,
    y: TableColumn,
) -> Optional[RegressionResult]:
    """Least-squares fit of column y against column x."""
    return linear_regression(column_pairs(rows, x, y))
