"""
QuickNotes Backend - Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine/session factory builders and the per-request
       session dependency.
Why:   Centralizes all database connection logic in one place.
How:   create_engine_from_settings() builds an async engine for the configured
       URL; the session dependency pulls the factory out of the AppContext
       stored on the application, so no engine lives at module level.
Who:   Used by create_app() (builders) and route handlers (get_db_session).
When:  Engine is created once per application; sessions are created per-request.

Architecture Decision:
    Async SQLAlchemy with the aiosqlite driver keeps queries off the event
    loop thread while the storage stays a single SQLite file.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, used both by init_models() at startup
    and by Alembic for migrations.
    """
    pass


# ── Engine & Session Factory ──────────────────────────────────────────────
def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    Build the async engine for the configured database.

    Pool sizing only applies to server databases; SQLite gets SQLAlchemy's
    default pool for its driver.
    """
    options: Dict[str, Any] = {
        # Echo SQL queries in DEBUG mode for development visibility
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        options.update(pool_pre_ping=True, pool_recycle=3600)

    return create_async_engine(settings.database_url, **options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Creates new AsyncSession instances with consistent configuration.

    expire_on_commit=False: note attributes stay readable after the
    service commits, without a lazy reload outside the session.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """
    Create the notes table if it does not exist yet.

    Equivalent to CREATE TABLE IF NOT EXISTS: create_all() checks for each
    table first and leaves existing ones (and their rows) untouched.
    """
    # Import registers the model with Base.metadata
    from app.models.note import Note  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the application's session factory
        2. Yields it to the route handler (the service performs the query
           and commits its own writes)
        3. On error: rolls back anything left pending
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/note")
        async def detail(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = request.app.state.context.session_factory
    async with session_factory() as session:
        try:
            yield session
        except Exception:
            # Discard partial writes; the global handlers format the response
            await session.rollback()
            raise
        finally:
            await session.close()
