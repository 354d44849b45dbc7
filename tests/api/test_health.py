"""Tests for health endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from catalog_api.infrastructure.database import get_session
from catalog_api.main import app


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    """Health reports the service name and version."""
    response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "catalog-api"
    assert "version" in data


@pytest.mark.asyncio
async def test_ready(client: AsyncClient) -> None:
    response = await client.get("/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready"}


@pytest.mark.asyncio
async def test_ready_when_database_is_down(client: AsyncClient) -> None:
    """Readiness fails with 503 when the database does not answer."""
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

    async def unavailable_session():
        yield session

    app.dependency_overrides[get_session] = unavailable_session

    response = await client.get("/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "unavailable"}
