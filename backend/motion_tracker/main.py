"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from motion_tracker import __version__
from motion_tracker.config import get_settings
from motion_tracker.api import api_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {settings.app_name}")
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="""
    Motion Tracker API
    
    Video-based motion analysis: mark an object's pixel position frame by
    frame, calibrate a coordinate system, and get position, velocity and
    acceleration in real-world units.
    
    ## Key Features
    
    - **Frame-by-Frame Tracking**: One manual mark per frame, stored as pixels
    - **Calibration**: Scale from two reference points, origin, axis rotation, Y-axis direction
    - **Kinematics**: Central-difference velocity and acceleration
    - **Linear Regression**: Best-fit lines with R² over any two columns
    - **CSV Export**: The full derived table
    
    ## Measurement Principle
    
    **Pixels are the source of truth.**
    
    World coordinates and derivatives are recomputed on every read, so
    recalibrating never requires re-tracking.
    """,
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "docs": "/docs",
        "health": "/health"
    }
