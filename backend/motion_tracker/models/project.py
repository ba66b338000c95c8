"""Project and project settings models."""

import uuid
import json
from typing import List, Optional
from sqlalchemy import String, Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motion_tracker.models.base import Base, TimestampMixin


def _load_json(value: Optional[str]) -> Optional[dict]:
    if value:
        return json.loads(value)
    return None


def _dump_json(value: Optional[dict]) -> Optional[str]:
    if value is not None:
        return json.dumps(value)
    return None


class Project(Base, TimestampMixin):
    """
    One motion analysis project: a video, its calibration and the points
    tracked on it.
    
    Only raw inputs are stored (pixel positions and the coordinate system).
    World coordinates and kinematics are recomputed on every read, so a
    recalibration never requires re-tracking.
    """
    
    __tablename__ = "projects"
    
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    
    # Public sharing
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    share_token: Mapped[Optional[str]] = mapped_column(
        String(64),
        unique=True,
        nullable=True
    )
    
    # Relationships
    settings: Mapped["ProjectSettings"] = relationship(
        "ProjectSettings",
        back_populates="project",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin"
    )
    data_points: Mapped[List["DataPoint"]] = relationship(
        "DataPoint",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="DataPoint.frame_number",
        lazy="selectin"
    )
    
    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name}, points={len(self.data_points)})>"


class ProjectSettings(Base):
    """Per-project JSON settings: video metadata, coordinate system, UI."""
    
    __tablename__ = "project_settings"
    
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        primary_key=True
    )
    
    # Stored as JSON strings
    _video_metadata: Mapped[Optional[str]] = mapped_column("video_metadata", Text, nullable=True)
    _coordinate_system: Mapped[Optional[str]] = mapped_column("coordinate_system", Text, nullable=True)
    _ui_settings: Mapped[Optional[str]] = mapped_column("ui_settings", Text, nullable=True)
    
    project: Mapped["Project"] = relationship("Project", back_populates="settings")
    
    @property
    def video_metadata(self) -> Optional[dict]:
        return _load_json(self._video_metadata)
    
    @video_metadata.setter
    def video_metadata(self, value: Optional[dict]):
        self._video_metadata = _dump_json(value)
    
    @property
    def coordinate_system(self) -> Optional[dict]:
        return _load_json(self._coordinate_system)
    
    @coordinate_system.setter
    def coordinate_system(self, value: Optional[dict]):
        self._coordinate_system = _dump_json(value)
    
    @property
    def ui_settings(self) -> Optional[dict]:
        return _load_json(self._ui_settings)
    
    @ui_settings.setter
    def ui_settings(self, value: Optional[dict]):
        self._ui_settings = _dump_json(value)
    
    def __repr__(self) -> str:
        return f"<ProjectSettings(project_id={self.project_id})>"
