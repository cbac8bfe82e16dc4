"""Database connection and session management.

This module handles the database connection using SQLAlchemy. Tables and
indexes are created by ``init_db``, which the application calls once at
startup.
"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config import DATA_DIR, DATABASE_URL
from models.base import Base
# Import models to ensure they are registered with Base.metadata
import models  # noqa: F401

logger = logging.getLogger(__name__)


def build_engine(url: str = DATABASE_URL):
    """Create an engine for the given SQLAlchemy URL.

    SQLite needs ``check_same_thread`` disabled for FastAPI's threadpool, and
    in-memory databases must share a single connection.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    else:
        # Ensure data directory exists
        DATA_DIR.mkdir(parents=True, exist_ok=True)
    return create_engine(url, **kwargs)


engine = build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db() -> None:
    """Ensure all tables and indexes exist. Safe to call repeatedly."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables and indexes initialized")


def get_db():
    """Dependency for getting a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
