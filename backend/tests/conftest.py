"""
QuickNotes Backend - Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test that touches storage gets its own SQLite file under
       pytest's tmp_path, so tests never share rows.

Fixture Hierarchy (all function-scoped):
    ├── test_settings: Settings pointing at a temporary database
    ├── app_instance: create_app(test_settings)
    ├── test_client: HTTPX AsyncClient with the app's lifespan running
    ├── db_session: AsyncSession on a freshly created schema (service tests)
    ├── mock_db_session: Mock async session (error-path tests)
    └── count_notes: Coroutine returning the number of stored notes
"""

import os
import tempfile

# Override settings for testing BEFORE any app imports
# The module-level app in app.main is built from these
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="quicknotes_test_"), "default.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from app.config import Settings
from app.database import create_engine_from_settings, create_session_factory, init_models
from app.main import create_app
from app.models.note import Note


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated database, one note per page like production."""
    return Settings(
        database_url=sqlite_url(tmp_path / "notes.db"),
        page_size=1,
        log_level="WARNING",
        expose_error_details=True,
    )


@pytest.fixture
def app_instance(test_settings):
    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(app_instance):
    """
    Async HTTP client talking to the app in-process.

    ASGITransport does not send lifespan events, so the lifespan context
    is entered here to create the schema and dispose the engine afterwards.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    async with app_instance.router.lifespan_context(app_instance):
        transport = ASGITransport(app=app_instance)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def count_notes(app_instance):
    """Returns a coroutine function counting rows in the notes table."""
    session_factory = app_instance.state.context.session_factory

    async def _count() -> int:
        async with session_factory() as session:
            return await session.scalar(select(func.count(Note.id)))

    return _count


@pytest_asyncio.fixture
async def db_session(test_settings):
    """A real AsyncSession on an empty notes table."""
    engine = create_engine_from_settings(test_settings)
    await init_models(engine)
    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_note_error(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
            await note_service.get_note(mock_db_session, "1")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_notes():
    """Three notes, in insertion order."""
    return [
        {"title": "First", "content": "Alpha content"},
        {"title": "Second", "content": "Beta content"},
        {"title": "Third", "content": "Gamma content"},
    ]
