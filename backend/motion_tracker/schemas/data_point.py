"""Tracked data point schemas."""

from typing import List
from pydantic import BaseModel, Field


class DataPointCreate(BaseModel):
    """One manual mark: pixel position on a frame at a playback time."""
    frame_number: int = Field(..., ge=0)
    time_seconds: float = Field(..., allow_inf_nan=False)
    pixel_x: float = Field(..., allow_inf_nan=False)
    pixel_y: float = Field(..., allow_inf_nan=False)


class DataPointsCreate(BaseModel):
    points: List[DataPointCreate] = Field(..., min_length=1)


class DataPointMove(BaseModel):
    """New pixel position for an existing point."""
    pixel_x: float = Field(..., allow_inf_nan=False)
    pixel_y: float = Field(..., allow_inf_nan=False)


class DataPointsDelete(BaseModel):
    point_ids: List[str] = Field(..., min_length=1)


class DataPointResponse(BaseModel):
    id: str
    frame_number: int
    time_seconds: float
    pixel_x: float
    pixel_y: float
    
    class Config:
        from_attributes = True
