"""Project schemas."""

from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field

from motion_tracker.schemas.coordinates import (
    CoordinateSystemSchema,
    VideoMetadataSchema,
    UISettingsSchema,
)
from motion_tracker.schemas.data_point import DataPointResponse


class ProjectCreate(BaseModel):
    """Schema for creating a project."""
    name: str = Field(..., min_length=1, max_length=500)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only supplied fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    coordinate_system: Optional[CoordinateSystemSchema] = None
    video_metadata: Optional[VideoMetadataSchema] = None
    ui_settings: Optional[UISettingsSchema] = None


class ProjectResponse(BaseModel):
    """Schema for project list response."""
    id: str
    name: str
    is_public: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class ProjectSettingsResponse(BaseModel):
    video_metadata: Optional[VideoMetadataSchema] = None
    coordinate_system: Optional[CoordinateSystemSchema] = None
    ui_settings: Optional[UISettingsSchema] = None
    
    class Config:
        from_attributes = True


class ProjectDetailResponse(ProjectResponse):
    """Project with settings and all tracked points (frame order)."""
    settings: Optional[ProjectSettingsResponse] = None
    data_points: List[DataPointResponse]


class ShareResponse(BaseModel):
    project_id: str
    share_token: str
    is_public: bool
