"""
Notes API — Database Session Management
=======================================

What:  The async engine, the session factory and the per-request session.
Why:   Repositories receive a ready session; nothing else opens connections.
How:   Creates an async engine with connection pooling, provides a session
       dependency that commits on success and rolls back on error.
Who:   Used by route dependencies that build repositories for a request.
When:  Engine is created at module import; sessions are created per-request.

Connection Pooling:
    pool_size / max_overflow come from settings (DB_POOL_SIZE, DB_MAX_OVERFLOW).
    SQLite URLs (used by the test suite) get the dialect's default pool, which
    does not accept the sizing arguments.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from notes_api.config import settings


def build_engine(url: str) -> AsyncEngine:
    """Create an async engine, applying pool sizing where the dialect supports it."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(url, **options)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: objects stay readable after the request commits
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url)
async_session_factory = build_session_factory(engine)


class Base(DeclarativeBase):
    """
    Declarative base shared by User and Note.

    All models inherit from this class to register with the shared metadata
    (used by Alembic for migrations and by the tests to create tables).
    """
    pass


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    One AsyncSession per request, shared by every repository it builds.

    How it works:
        1. Opens a session from async_session_factory
        2. Yields it to the repositories built for the request
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. The context manager closes the session and releases its connection

    Raises:
        Any database exception is propagated to the global error handler.
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    """Closes all pooled connections; called during application shutdown."""
    await engine.dispose()
