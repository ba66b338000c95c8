"""API routes."""

from fastapi import APIRouter

from motion_tracker.api import projects, points, analysis, share

api_router = APIRouter()

api_router.include_router(projects.router, prefix="/projects", tags=["Projects"])
api_router.include_router(points.router, prefix="/projects", tags=["Data Points"])
api_router.include_router(analysis.router, prefix="/projects", tags=["Analysis"])
api_router.include_router(share.router, prefix="/share", tags=["Sharing"])
