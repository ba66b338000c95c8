"""Tracked data point model."""

import uuid
from datetime import datetime
from sqlalchemy import String, Integer, Float, ForeignKey, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from motion_tracker.models.base import Base, utcnow
from motion_tracker.measurement.tracking import TrackedPoint


class DataPoint(Base):
    """
    One manually tracked pixel location on one frame.
    
    Pixel coordinates are the source of truth; world values are derived.
    """
    
    __tablename__ = "data_points"
    __table_args__ = (
        Index("data_points_frame_number_idx", "project_id", "frame_number"),
    )
    
    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4())
    )
    project_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    frame_number: Mapped[int] = mapped_column(Integer, nullable=False)
    time_seconds: Mapped[float] = mapped_column(Float, nullable=False)
    pixel_x: Mapped[float] = mapped_column(Float, nullable=False)
    pixel_y: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False
    )
    
    project: Mapped["Project"] = relationship("Project", back_populates="data_points")
    
    def to_tracked_point(self) -> TrackedPoint:
        """Convert to the measurement pipeline's point type."""
        return TrackedPoint(
            id=self.id,
            frame_number=self.frame_number,
            time=self.time_seconds,
            pixel_x=self.pixel_x,
            pixel_y=self.pixel_y,
        )
    
    def __repr__(self) -> str:
        return (
            f"<DataPoint(id={self.id}, frame={self.frame_number}, "
            f"px=({self.pixel_x}, {self.pixel_y}))>"
        )
