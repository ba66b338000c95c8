"""Derived table, regression and export endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from motion_tracker.api.deps import build_session, get_current_user_id, get_user_project
from motion_tracker.database import get_db
from motion_tracker.measurement import (
    GraphType,
    TableColumn,
    column_pairs,
    export_filename,
    linear_regression,
    table_to_csv,
)
from motion_tracker.schemas.analysis import (
    DerivedRowResponse,
    RegressionResponse,
    RegressionResultSchema,
    TableResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_column(value: str, name: str) -> TableColumn:
    try:
        return TableColumn(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be one of: {TableColumn.all()}"
        )


@router.get("/{project_id}/table", response_model=TableResponse)
async def get_table(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Get the derived measurement table.

    Recomputed from the stored pixel points and the current coordinate
    system on every request.
    """
    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)
    rows = session.table()

    return TableResponse(
        project_id=project.id,
        scale_unit=session.coordinates.scale_unit.value,
        pixels_per_unit=session.coordinates.pixels_per_unit,
        calibrated=session.coordinates.is_calibrated,
        rows=[DerivedRowResponse.model_validate(r) for r in rows]
    )


@router.get("/{project_id}/regression", response_model=RegressionResponse)
async def get_regression(
    project_id: str,
    x: str = Query(TableColumn.TIME.value),
    y: str = Query(TableColumn.WORLD_X.value),
    graph: Optional[str] = Query(None, description="Preset chart, overrides x/y: x-t, y-t, vx-t, vy-t, y-x"),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """
    Least-squares line through two table columns.

    Only rows where both columns are computable take part. result is null
    with fewer than two such rows or when every x value is identical.
    """
    title = None
    if graph is not None:
        try:
            graph_type = GraphType(graph)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"graph must be one of: {[g.value for g in GraphType]}"
            )
        x_column, y_column = graph_type.columns
        title = graph_type.display_name
    else:
        x_column = _parse_column(x, "x")
        y_column = _parse_column(y, "y")

    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)
    unit = session.coordinates.scale_unit

    pairs = column_pairs(session.table(), x_column, y_column)
    result = linear_regression(pairs)

    return RegressionResponse(
        project_id=project.id,
        x=x_column.value,
        y=y_column.value,
        x_label=x_column.label(unit),
        y_label=y_column.label(unit),
        title=title,
        point_count=len(pairs),
        result=RegressionResultSchema.model_validate(result) if result else None
    )


@router.get("/{project_id}/export")
async def export_csv(
    project_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db)
):
    """Download the derived table as CSV."""
    project = await get_user_project(db, project_id, user_id)
    session = build_session(project)

    csv_text = table_to_csv(session.table(), session.coordinates.scale_unit)
    filename = export_filename(project.name)

    logger.info(f"Exporting {len(session.points)} rows from project {project_id}")

    return Response(
        content=csv_text,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
