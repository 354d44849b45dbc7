"""Shared fixtures.

Every test gets its own in-memory SQLite database.
"""

from collections.abc import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog_api.catalog.repository import CategoryRepository, ProductRepository
from catalog_api.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_tables,
    get_session,
)
from catalog_api.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database with all tables."""
    test_engine = build_engine(TEST_DATABASE_URL)
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return build_session_factory(engine)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with session_factory() as db_session:
        yield db_session


@pytest_asyncio.fixture
async def category_repo(session: AsyncSession) -> CategoryRepository:
    """Category repository on the test session."""
    return CategoryRepository(session)


@pytest_asyncio.fixture
async def product_repo(session: AsyncSession) -> ProductRepository:
    """Product repository on the test session."""
    return ProductRepository(session)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client for the app, wired to the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as db_session:
            try:
                yield db_session
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as http_client:
            yield http_client
    finally:
        app.dependency_overrides.clear()
