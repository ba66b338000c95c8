"""Project API endpoints."""

import logging
import secrets
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from motion_tracker.api.deps import get_current_user_id, get_user_project
from motion_tracker.database import get_db
from motion_tracker.models.base import utcnow
from motion_tracker.models.project import Project, ProjectSettings
from motion_tracker.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectDetailResponse,
    ShareResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """List the caller's projects, most recently updated first."""
    logger.info(f"Listing projects for user {user_id}")

    result = await db.execute(
        select(Project)
        .where(Project.user_id == user_id)
        .order_by(desc(Project.updated_at))
    )
    projects = result.scalars().all()

    return [ProjectResponse.model_validate(p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    body: ProjectCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Create an empty project with an empty settings record."""
    logger.info(f"Creating project '{body.name}' for user {user_id}")

    project = Project(
        user_id=user_id,
        name=body.name,
        settings=ProjectSettings(),
        data_points=[]
    )

    db.add(project)
    await db.commit()

    return ProjectResponse.model_validate(project)


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Get a project with its settings and tracked points in frame order."""
    project = await get_user_project(db, project_id, user_id)
    return ProjectDetailResponse.model_validate(project)


@router.put("/{project_id}", response_model=ProjectDetailResponse)
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Update project name and settings.

    Changing the coordinate system never touches the tracked points; the
    derived table picks up the new calibration on its next read.
    """
    project = await get_user_project(db, project_id, user_id)
    logger.info(f"Updating project {project_id}")

    if body.name is not None:
        project.name = body.name

    if project.settings is None:
        project.settings = ProjectSettings()

    if body.coordinate_system is not None:
        project.settings.coordinate_system = body.coordinate_system.model_dump()
    if body.video_metadata is not None:
        project.settings.video_metadata = body.video_metadata.model_dump()
    if body.ui_settings is not None:
        project.settings.ui_settings = body.ui_settings.model_dump()

    project.updated_at = utcnow()
    await db.commit()

    return ProjectDetailResponse.model_validate(project)


@router.delete("/{project_id}")
async def delete_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Delete a project with its settings and points."""
    project = await get_user_project(db, project_id, user_id)
    logger.info(f"Deleting project {project_id}")

    await db.delete(project)
    await db.commit()

    return {"message": "Project deleted successfully", "id": project_id}


@router.post("/{project_id}/share", response_model=ShareResponse)
async def share_project(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Make a project publicly readable and return its share token."""
    project = await get_user_project(db, project_id, user_id)

    if not project.share_token:
        project.share_token = secrets.token_urlsafe(16)
    project.is_public = True
    project.updated_at = utcnow()
    await db.commit()

    logger.info(f"Project {project_id} shared")

    return ShareResponse(
        project_id=project.id,
        share_token=project.share_token,
        is_public=project.is_public
    )
