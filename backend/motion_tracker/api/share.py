"""Public read-only access to shared projects."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from motion_tracker.api.deps import build_session
from motion_tracker.database import get_db
from motion_tracker.models.project import Project
from motion_tracker.schemas.analysis import DerivedRowResponse, SharedProjectResponse

router = APIRouter()


@router.get("/{share_token}", response_model=SharedProjectResponse)
async def get_shared_project(
    share_token: str,
    db: AsyncSession = Depends(get_db)
):
    """Get a public project's derived table by its share token."""
    result = await db.execute(
        select(Project).where(
            Project.share_token == share_token,
            Project.is_public.is_(True)
        )
    )
    project = result.scalar_one_or_none()

    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shared project not found"
        )

    session = build_session(project)

    return SharedProjectResponse(
        id=project.id,
        name=project.name,
        scale_unit=session.coordinates.scale_unit.value,
        rows=[DerivedRowResponse.model_validate(r) for r in session.table()]
    )
