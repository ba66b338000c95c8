"""2D geometry primitives shared by pixel space and world space."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point2D:
    """
    A plain 2D coordinate.

    Whether it lives in pixel space or world space is decided by context;
    the two are only ever connected through a CoordinateSystem transform.
    """
    x: float
    y: float

    def __add__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "Point2D":
        return Point2D(self.x * factor, self.y * factor)

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


def distance(a: Point2D, b: Point2D) -> float:
    """Euclidean distance between two points."""
    return math.hypot(b.x - a.x, b.y - a.y)


def rotate(point: Point2D, degrees: float) -> Point2D:
    """Rotate a vector counter-clockwise (in a y-up frame) about the origin."""
    theta = math.radians(degrees)
    cos = math.cos(theta)
    sin = math.sin(theta)
    return Point2D(
        point.x * cos - point.y * sin,
        point.x * sin + point.y * cos,
    )
