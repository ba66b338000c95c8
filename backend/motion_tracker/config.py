"""Application configuration."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    app_name: str = "Motion Tracker"
    debug: bool = False
    api_prefix: str = "/api"
    cors_origins: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    
    # Database (SQLite for local dev, PostgreSQL for production)
    database_url: str = "sqlite+aiosqlite:///./motion_tracker.db"
    database_url_sync: str = "sqlite:///./motion_tracker.db"
    
    # Caller identity used when no X-User-Id header is sent
    default_user_id: str = "local-user"
    
    # Measurement
    undo_history_limit: int = 50  # Undo steps kept per tracking session
    default_scale_unit: str = "m"
    
    class Config:
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
