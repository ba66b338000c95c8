"""
User-defined coordinate system and the pixel <-> world transform.

CALIBRATION:
Two pixel points marking a known real-world distance give the scale
(pixels per unit). Until both points and a positive distance are set,
the system is uncalibrated and every world value is None.

TRANSFORM ORDER (pixel -> world):
1. Translate: subtract the origin pixel
2. Rotate: by -rotation degrees, de-rotating the tilted axes
3. Y-flip: negate Y when the Y axis points up (screen Y grows downward)
4. Scale: divide by pixels per unit

world -> pixel applies the inverse steps in reverse order.
"""

import math
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from motion_tracker.measurement.geometry import Point2D, distance, rotate

logger = logging.getLogger(__name__)


class ScaleUnit(str, Enum):
    """Unit label attached to the scale. Never converted between."""
    METER = "m"
    CENTIMETER = "cm"
    MILLIMETER = "mm"
    FOOT = "ft"
    INCH = "in"

    @classmethod
    def all(cls) -> List[str]:
        return [unit.value for unit in cls]


def calculate_pixels_per_unit(
    point1: Optional[Point2D],
    point2: Optional[Point2D],
    scale_distance: Optional[float],
) -> Optional[float]:
    """Pixel length of one world unit, or None if calibration is incomplete."""
    if point1 is None or point2 is None or scale_distance is None:
        return None
    if not math.isfinite(scale_distance) or scale_distance <= 0:
        return None
    return distance(point1, point2) / scale_distance


def _point_from(value: Any) -> Optional[Point2D]:
    if value is None or isinstance(value, Point2D):
        return value
    return Point2D(float(value["x"]), float(value["y"]))


@dataclass
class CoordinateSystem:
    """
    Calibration, origin, rotation and axis convention for one session.

    pixels_per_unit is derived on every read from the three calibration
    fields, so it can never go stale.
    """
    scale_point1: Optional[Point2D] = None
    scale_point2: Optional[Point2D] = None
    scale_distance: Optional[float] = None
    scale_unit: ScaleUnit = ScaleUnit.METER
    origin: Point2D = field(default_factory=lambda: Point2D(0.0, 0.0))
    rotation: float = 0.0
    y_axis_up: bool = True

    @property
    def pixels_per_unit(self) -> Optional[float]:
        return calculate_pixels_per_unit(
            self.scale_point1, self.scale_point2, self.scale_distance
        )

    @property
    def is_calibrated(self) -> bool:
        ppu = self.pixels_per_unit
        return ppu is not None and ppu != 0

    # Setters used by the calibration surface

    def set_scale_point1(self, point: Optional[Point2D]) -> None:
        self.scale_point1 = point

    def set_scale_point2(self, point: Optional[Point2D]) -> None:
        self.scale_point2 = point

    def set_scale_distance(self, value: Optional[float]) -> None:
        self.scale_distance = value

    def set_scale_unit(self, unit: ScaleUnit) -> None:
        self.scale_unit = ScaleUnit(unit)

    def set_origin(self, point: Point2D) -> None:
        self.origin = point

    def set_rotation(self, degrees: float) -> None:
        self.rotation = degrees

    def toggle_y_axis(self) -> None:
        self.y_axis_up = not self.y_axis_up

    def hydrate(self, data: Mapping[str, Any]) -> None:
        """
        Apply a stored coordinate system.

        Only keys present in data are applied, so a partial mapping
        leaves the other fields untouched.
        """
        if "scale_point1" in data:
            self.scale_point1 = _point_from(data["scale_point1"])
        if "scale_point2" in data:
            self.scale_point2 = _point_from(data["scale_point2"])
        if "scale_distance" in data:
            value = data["scale_distance"]
            self.scale_distance = float(value) if value is not None else None
        if "scale_unit" in data and data["scale_unit"] is not None:
            self.scale_unit = ScaleUnit(data["scale_unit"])
        if "origin" in data and data["origin"] is not None:
            self.origin = _point_from(data["origin"])
        if "rotation" in data and data["rotation"] is not None:
            self.rotation = float(data["rotation"])
        if "y_axis_up" in data and data["y_axis_up"] is not None:
            self.y_axis_up = bool(data["y_axis_up"])
        logger.debug(f"Coordinate system hydrated, pixels_per_unit={self.pixels_per_unit}")

    def reset(self) -> None:
        self.hydrate(CoordinateSystem().to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Stored fields only; pixels_per_unit is never serialized."""
        return {
            "scale_point1": self.scale_point1.to_dict() if self.scale_point1 else None,
            "scale_point2": self.scale_point2.to_dict() if self.scale_point2 else None,
            "scale_distance": self.scale_distance,
            "scale_unit": self.scale_unit.value,
            "origin": self.origin.to_dict(),
            "rotation": self.rotation,
            "y_axis_up": self.y_axis_up,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "CoordinateSystem":
        system = cls()
        if data:
            system.hydrate(data)
        return system


def pixel_to_world(pixel: Point2D, system: CoordinateSystem) -> Optional[Point2D]:
    """Convert a pixel location to world units. None when uncalibrated."""
    ppu = system.pixels_per_unit
    if ppu is None or ppu == 0:
        return None

    translated = pixel - system.origin
    rotated = rotate(translated, -system.rotation)
    flipped = Point2D(rotated.x, -rotated.y if system.y_axis_up else rotated.y)
    return Point2D(flipped.x / ppu, flipped.y / ppu)


def world_to_pixel(world: Point2D, system: CoordinateSystem) -> Optional[Point2D]:
    """Exact inverse of pixel_to_world."""
    ppu = system.pixels_per_unit
    if ppu is None or ppu == 0:
        return None

    scaled = world.scaled(ppu)
    unflipped = Point2D(scaled.x, -scaled.y if system.y_axis_up else scaled.y)
    rotated = rotate(unflipped, system.rotation)
    return rotated + system.origin
