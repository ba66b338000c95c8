"""Pydantic schemas for API request/response models."""

from motion_tracker.schemas.coordinates import (
    Point2DSchema,
    CoordinateSystemSchema,
    VideoMetadataSchema,
    UISettingsSchema,
)
from motion_tracker.schemas.data_point import (
    DataPointCreate,
    DataPointsCreate,
    DataPointMove,
    DataPointsDelete,
    DataPointResponse,
)
from motion_tracker.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectSettingsResponse,
    ProjectDetailResponse,
    ShareResponse,
)
from motion_tracker.schemas.analysis import (
    DerivedRowResponse,
    TableResponse,
    RegressionResultSchema,
    RegressionResponse,
    SharedProjectResponse,
)

__all__ = [
    "Point2DSchema",
    "CoordinateSystemSchema",
    "VideoMetadataSchema",
    "UISettingsSchema",
    "DataPointCreate",
    "DataPointsCreate",
    "DataPointMove",
    "DataPointsDelete",
    "DataPointResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectSettingsResponse",
    "ProjectDetailResponse",
    "ShareResponse",
    "DerivedRowResponse",
    "TableResponse",
    "RegressionResultSchema",
    "RegressionResponse",
    "SharedProjectResponse",
]
