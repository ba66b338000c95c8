"""Coordinate system and project settings schemas."""

import math
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from motion_tracker.measurement.coordinates import ScaleUnit


class Point2DSchema(BaseModel):
    """A pixel (or world) location."""
    x: float = Field(..., allow_inf_nan=False)
    y: float = Field(..., allow_inf_nan=False)


class CoordinateSystemSchema(BaseModel):
    """
    Stored coordinate system.
    
    pixels_per_unit is deliberately absent: it is derived from the scale
    points and distance whenever the project is read.
    """
    scale_point1: Optional[Point2DSchema] = None
    scale_point2: Optional[Point2DSchema] = None
    scale_distance: Optional[float] = None
    scale_unit: str = ScaleUnit.METER.value
    origin: Point2DSchema = Field(default_factory=lambda: Point2DSchema(x=0.0, y=0.0))
    rotation: float = Field(0.0, allow_inf_nan=False)  # degrees
    y_axis_up: bool = True
    
    @field_validator("scale_unit")
    @classmethod
    def validate_scale_unit(cls, v: str) -> str:
        if v not in ScaleUnit.all():
            raise ValueError(f"scale_unit must be one of: {ScaleUnit.all()}")
        return v
    
    @field_validator("scale_distance")
    @classmethod
    def validate_scale_distance(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and (not math.isfinite(v) or v < 0):
            raise ValueError("scale_distance must be a finite, non-negative number")
        return v


class VideoMetadataSchema(BaseModel):
    """Metadata of the analysed video, supplied by the upload collaborator."""
    storage_url: str
    file_name: str
    duration: float
    frame_rate: float = Field(..., gt=0)
    width: int
    height: int
    total_frames: Optional[int] = None
    thumbnail_url: Optional[str] = None


class UISettingsSchema(BaseModel):
    """Overlay preferences."""
    trail_length: int = Field(10, ge=0)
    point_size: int = Field(6, ge=1)
    point_color: str = "#22d3ee"
    show_path: bool = True
    auto_advance: bool = True
