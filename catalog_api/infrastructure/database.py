"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from collections.abc import AsyncGenerator
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from catalog_api.infrastructure.config import settings

logger = structlog.get_logger()


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given database URL.

    SQLite gets foreign key enforcement switched on for every connection,
    and in-memory SQLite databases share a single connection so that all
    sessions see the same data.

    Args:
        database_url: SQLAlchemy database URL.
        echo: Whether to log emitted SQL.

    Returns:
        Configured AsyncEngine.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url.endswith("://"):
            kwargs["poolclass"] = StaticPool

        async_engine = create_async_engine(database_url, echo=echo, **kwargs)

        @event.listens_for(async_engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return async_engine

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# Create async engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory
async_session_factory = build_session_factory(engine)

# Base class for models
Base = declarative_base()


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create database tables if they don't exist.

    Args:
        bind: Engine to use, defaults to the application engine.
    """
    # Register the catalog tables on Base.metadata
    import catalog_api.catalog.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session.

    Repositories commit their own units of work; anything left
    uncommitted when the request fails is rolled back.

    Yields:
        AsyncSession for database operations.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
