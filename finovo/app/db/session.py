"""
Database session management.
Handles SQLite connection and session lifecycle with async support.
"""
from pathlib import Path
from typing import AsyncGenerator

import structlog
from sqlalchemy import create_engine, event, Engine
from sqlalchemy.pool import NullPool
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlmodel import SQLModel

from finovo.app.config import get_settings

logger = structlog.get_logger(__name__)

settings = get_settings()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.
    This is required for proper referential integrity.

    Note: This event listener applies to ALL sync engines (including the one backing async).
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _ensure_sqlite_directory(db_url: str) -> None:
    if db_url.startswith("sqlite:///"):
        db_path = db_url.replace("sqlite:///", "", 1)
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)


def get_sync_engine():
    """
    Create and configure a SYNC database engine for non-async operations.

    Used by:
    - Schema bootstrap (ensure_database_exists)
    - user_cli.py
    - Test fixtures

    Returns:
        Engine: SQLAlchemy sync engine configured for SQLite
    """
    db_url = settings.DATABASE_URL
    _ensure_sqlite_directory(db_url)

    engine = create_engine(
        db_url,
        echo=False,
        poolclass=NullPool,
        )
    return engine


def get_async_engine():
    """
    Create and configure the async database engine.

    Returns:
        AsyncEngine: SQLAlchemy async engine configured for SQLite with aiosqlite
    """
    db_url = settings.DATABASE_URL
    _ensure_sqlite_directory(db_url)

    # Convert sqlite:/// to sqlite+aiosqlite:/// for async
    async_db_url = db_url.replace("sqlite:///", "sqlite+aiosqlite:///")

    engine = create_async_engine(
        async_db_url,
        echo=False,
        # NullPool for SQLite - each connection is independent
        poolclass=NullPool,
        )
    return engine


# Create engine instances
sync_engine = get_sync_engine()  # For bootstrap, CLI
async_engine = get_async_engine()  # For FastAPI app


def ensure_database_exists() -> None:
    """
    Create every table that does not exist yet.

    Safe to call repeatedly: existing tables and rows are left untouched.
    """
    # Register all tables on the metadata before create_all
    import finovo.app.db.base  # noqa: F401

    SQLModel.metadata.create_all(sync_engine)
    logger.info("Database schema ensured", database_url=settings.DATABASE_URL)


async def get_session_generator() -> AsyncGenerator[AsyncSession, None]:
    """
    Get an async database session for dependency injection.

    Usage in FastAPI:
        @router.get("/")
        async def endpoint(session: AsyncSession = Depends(get_session_generator)):
            result = await session.execute(select(Model))
            ...

    Yields:
        AsyncSession: SQLModel async session
    """
    async with AsyncSession(async_engine, expire_on_commit=False) as session:
        yield session
