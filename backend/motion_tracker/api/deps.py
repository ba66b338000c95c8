"""Shared API dependencies and project loading helpers."""

from typing import Optional

from fastapi import Header, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from motion_tracker.config import get_settings
from motion_tracker.measurement import MeasurementSession
from motion_tracker.models.project import Project

settings = get_settings()


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """
    Caller identity.
    
    Authentication happens upstream; the gateway forwards the user id in
    the X-User-Id header.
    """
    return x_user_id or settings.default_user_id


async def get_user_project(db: AsyncSession, project_id: str, user_id: str) -> Project:
    """Load a project owned by user_id, with settings and points, or 404."""
    result = await db.execute(
        select(Project).where(
            Project.id == project_id,
            Project.user_id == user_id
        )
    )
    project = result.scalar_one_or_none()
    
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )
    
    return project


def build_session(project: Project) -> MeasurementSession:
    """Hydrate a measurement session from a stored project."""
    coordinate_system = project.settings.coordinate_system if project.settings else None
    if not coordinate_system:
        coordinate_system = {"scale_unit": settings.default_scale_unit}
    return MeasurementSession.from_stored(
        coordinate_system,
        [p.to_tracked_point() for p in project.data_points],
        history_limit=settings.undo_history_limit
    )

