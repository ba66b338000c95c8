"""Initialize SQLite database for local development."""

from motion_tracker.database import sync_engine
from motion_tracker.models import Base


def init_db():
    """Create all tables in the database."""
    Base.metadata.create_all(bind=sync_engine)
    print("Database tables created successfully!")

if __name__ == "__main__":
    init_db()
