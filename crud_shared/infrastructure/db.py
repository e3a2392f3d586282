"""
Database configuration and session management.
Uses the SQLAlchemy 2.0 asyncio extension.

The engine is created lazily so that importing the application does not
require the database driver until the first session is opened.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from crud_shared.config.logging import get_logger
from crud_shared.config.settings import settings

logger = get_logger(__name__)

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Return the process-wide async engine, creating it on first use."""
    global _engine
    if _engine is None:
        logger.info("Creating async DB engine")
        options: dict = {
            "echo": settings.database_echo,
            "pool_pre_ping": True,  # Verify connections before using
        }
        # SQLite uses a single-connection pool that rejects sizing options
        if not settings.database_url.startswith("sqlite"):
            options["pool_size"] = settings.database_pool_size
            options["max_overflow"] = settings.database_max_overflow
            options["pool_recycle"] = 1800
        _engine = create_async_engine(settings.database_url, **options)
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    global _sessionmaker
    if _sessionmaker is None:
        _sessionmaker = async_sessionmaker(
            get_engine(),
            expire_on_commit=False,
            autoflush=False,
        )
    return _sessionmaker


async def dispose_engine() -> None:
    """Close pooled connections. Called on application shutdown."""
    global _engine, _sessionmaker
    if _engine is not None:
        await _engine.dispose()
        logger.info("Async DB engine disposed")
    _engine = None
    _sessionmaker = None


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.get("/items")
        async def get_items(session: AsyncSession = Depends(get_session)):
            ...

    The session is automatically closed after the request completes.
    """
    async with get_sessionmaker()() as session:
        yield session


async def safe_commit(session: AsyncSession) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        await session.commit()
    except Exception:
        await session.rollback()
        logger.warning("DB transaction rolled back")
        raise
