"""Tracked data point API endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from motion_tracker.api.deps import build_session, get_current_user_id, get_user_project
from motion_tracker.database import get_db
from motion_tracker.measurement import Point2D
from motion_tracker.models.base import utcnow
from motion_tracker.models.data_point import DataPoint
from motion_tracker.schemas.data_point import (
    DataPointsCreate,
    DataPointMove,
    DataPointsDelete,
    DataPointResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/{project_id}/points",
    response_model=List[DataPointResponse],
    status_code=status.HTTP_201_CREATED
)
async def add_points(
    project_id: str,
    body: DataPointsCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Add tracked points.

    Each frame holds at most one point: a frame number already used by a
    stored point, or repeated within the batch, rejects the whole request.
    """
    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)

    logger.info(f"Adding {len(body.points)} data points to project {project_id}")

    created: List[DataPoint] = []
    for p in body.points:
        point = session.points.add(p.frame_number, p.time_seconds, p.pixel_x, p.pixel_y)
        if point is None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Frame {p.frame_number} already has a tracked point"
            )
        created.append(DataPoint(
            id=point.id,
            project_id=project.id,
            frame_number=point.frame_number,
            time_seconds=point.time,
            pixel_x=point.pixel_x,
            pixel_y=point.pixel_y
        ))

    db.add_all(created)
    project.updated_at = utcnow()
    await db.commit()

    return [DataPointResponse.model_validate(dp) for dp in created]


@router.patch("/{project_id}/points/{point_id}", response_model=DataPointResponse)
async def move_point(
    project_id: str,
    point_id: str,
    body: DataPointMove,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Move a tracked point. Frame number and time never change."""
    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)

    moved = session.points.update(point_id, Point2D(body.pixel_x, body.pixel_y))
    if moved is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Data point not found"
        )

    data_point = next(dp for dp in project.data_points if dp.id == point_id)
    data_point.pixel_x = moved.pixel_x
    data_point.pixel_y = moved.pixel_y
    project.updated_at = utcnow()
    await db.commit()

    return DataPointResponse.model_validate(data_point)


@router.delete("/{project_id}/points")
async def delete_points(
    project_id: str,
    body: DataPointsDelete,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Delete tracked points by id. Unknown ids are ignored."""
    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)

    logger.info(f"Deleting {len(body.point_ids)} data points from project {project_id}")

    deleted_ids = [pid for pid in body.point_ids if session.points.delete(pid)]
    for data_point in [dp for dp in project.data_points if dp.id in deleted_ids]:
        project.data_points.remove(data_point)

    project.updated_at = utcnow()
    await db.commit()

    return {"message": "Data points deleted", "deleted": deleted_ids}
