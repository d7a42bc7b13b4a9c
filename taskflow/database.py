"""Database initialization and session management.

Provides engine construction, table setup, session management and a
health check for the task database.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from .config import DatabaseSettings, get_settings
from .schemas.database import Task

logger = logging.getLogger(__name__)


def build_engine(database: DatabaseSettings | None = None) -> Engine:
    """Create a SQLAlchemy engine for the task database.

    In-memory databases use a single shared connection so every session sees
    the same data.
    """
    if database is None:
        database = get_settings().database

    connect_args = {"check_same_thread": False}
    if database.is_memory:
        return create_engine(
            "sqlite://",
            echo=database.echo_sql,
            connect_args=connect_args,
            poolclass=StaticPool,
        )
    return create_engine(
        database.url, echo=database.echo_sql, connect_args=connect_args
    )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Get the cached engine built from global settings."""
    return build_engine()


def create_db_and_tables(engine: Engine | None = None) -> None:
    """Create all tables.

    Safe to call multiple times - only creates tables that don't exist.
    """
    engine = engine or get_engine()
    SQLModel.metadata.create_all(engine)
    logger.info(f"Database initialized at: {engine.url}")


@contextmanager
def get_session_context(engine: Engine | None = None) -> Generator[Session, None, None]:
    """Context manager for database sessions with automatic cleanup.

    Usage:
        with get_session_context(engine) as session:
            # Use session here
            pass

    Commits on success, rolls back and re-raises on error.
    """
    session = Session(engine or get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def verify_database(engine: Engine | None = None) -> bool:
    """Verify the task table is reachable.

    Returns:
        True if database is healthy, False otherwise

    """
    try:
        with get_session_context(engine) as session:
            task_count = session.exec(select(func.count()).select_from(Task)).one()
            logger.debug(f"Database verification successful: {task_count} tasks")
            return True
    except SQLAlchemyError as e:
        logger.error(f"Database verification failed: {e}")
        return False


__all__ = [
    "build_engine",
    "create_db_and_tables",
    "get_engine",
    "get_session_context",
    "verify_database",
]
