"""
Database configuration and session management.
"""

import logging
from datetime import datetime, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from app.config import settings

logger = logging.getLogger("appsuite.database")

# Create SQLAlchemy Base
Base = declarative_base()


def _engine_options(url: str) -> dict:
    """SQLite (tests, local runs) needs one shared connection across threads."""
    if url.startswith("sqlite"):
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {"pool_pre_ping": True}


# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    future=True,
    **_engine_options(settings.database_url),
)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form every timestamp column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def init_database():
    """Initialize database schema"""
    # Import model modules so every table is registered on Base.metadata
    import domain.models  # noqa: F401

    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
    logger.info("Database tables created successfully")


def get_db_session():
    """Get database session (for FastAPI dependency injection)"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
