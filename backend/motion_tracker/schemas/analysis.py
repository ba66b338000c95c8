"""Derived table and regression schemas."""

from typing import Optional, List
from pydantic import BaseModel


class DerivedRowResponse(BaseModel):
    """
    One derived table row.
    
    Null world/kinematic values mean "not computable here" (no calibration,
    sequence boundary, zero time step), never zero.
    """
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
    
    class Config:
        from_attributes = True


class TableResponse(BaseModel):
    project_id: str
    scale_unit: str
    pixels_per_unit: Optional[float]
    calibrated: bool
    rows: List[DerivedRowResponse]


class RegressionResultSchema(BaseModel):
    slope: float
    intercept: float
    r_squared: float
    
    class Config:
        from_attributes = True


class RegressionResponse(BaseModel):
    """Best fit of y against x. result is null when no fit exists."""
    project_id: str
    x: str
    y: str
    x_label: str
    y_label: str
    title: Optional[str] = None
    point_count: int
    result: Optional[RegressionResultSchema]


class SharedProjectResponse(BaseModel):
    """Read-only public view of a project."""
    id: str
    name: str
    scale_unit: str
    rows: List[DerivedRowResponse]
