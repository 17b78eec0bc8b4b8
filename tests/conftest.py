"""
Notes API — Test Configuration (conftest.py)
============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (SQLite database, API client,
       in-memory repositories).

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── engine:            aiosqlite engine on a per-test file, tables created
    ├── session_factory:   async_sessionmaker bound to that engine
    ├── db_session:        one AsyncSession, for repository tests
    ├── app:               fresh create_app() wired to the test database
    ├── client:            HTTPX AsyncClient talking to `app`
    ├── store:             empty InMemoryStore
    ├── user_repository / note_repository: in-memory repositories on `store`
    └── mock_user_repository / mock_note_repository: AsyncMock repositories
"""

import os

# Override settings for testing BEFORE any app imports
# Why: settings are read once at import time
os.environ["NODE_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_notes.db"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough"
os.environ["LOG_LEVEL"] = "warn"  # Reduce noise during tests
os.environ["RATE_LIMIT_MAX_REQUESTS"] = "10000"

from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from notes_api.database import Base, build_engine, build_session_factory, get_db_session  # noqa: E402
from notes_api.dependencies import get_engine  # noqa: E402
from notes_api.main import create_app  # noqa: E402
from notes_api.models.note import Note  # noqa: E402,F401
from notes_api.repositories.base import NoteRepository, UserRepository  # noqa: E402
from notes_api.repositories.memory import (  # noqa: E402
    InMemoryNoteRepository,
    InMemoryStore,
    InMemoryUserRepository,
)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def engine(tmp_path):
    """A fresh SQLite database file per test, schema created from the models."""
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'notes.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def app(engine, session_factory):
    """
    A fresh application wired to the per-test database.

    Same commit/rollback semantics as notes_api.database.get_db_session.
    """
    application = create_app()

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = override_get_db_session
    application.dependency_overrides[get_engine] = lambda: engine
    return application


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    raise_app_exceptions=False: unexpected errors come back as the 500
    envelope instead of propagating into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


# ══════════════════════════════════════════════════════════════════════════
# Repository Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def user_repository(store) -> InMemoryUserRepository:
    return InMemoryUserRepository(store)


@pytest.fixture
def note_repository(store) -> InMemoryNoteRepository:
    return InMemoryNoteRepository(store)


@pytest.fixture
def mock_user_repository():
    """An AsyncMock honouring the UserRepository interface."""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_note_repository():
    return AsyncMock(spec=NoteRepository)


@pytest.fixture
def api_base() -> str:
    return "/api/v1"
