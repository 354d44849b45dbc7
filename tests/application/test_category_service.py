"""Tests for the category application service."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.application.category_service import (
    CATEGORY_NOT_FOUND,
    VALIDATION_ERROR,
    CategoryService,
    get_category_service,
)


@pytest_asyncio.fixture
async def service(session: AsyncSession) -> CategoryService:
    """Category service on the test database."""
    return get_category_service(session)


@pytest.mark.asyncio
async def test_create_trims_name(service: CategoryService) -> None:
    result = await service.create("  Books  ")

    assert result.success
    assert result.category is not None
    assert result.category.name == "Books"


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_create_rejects_blank_name(service: CategoryService, name: str | None) -> None:
    result = await service.create(name)

    assert not result.success
    assert result.error_code == VALIDATION_ERROR
    assert result.errors == {"name": ["Name is required."]}
    assert await service.get_all() == []


@pytest.mark.asyncio
async def test_update(service: CategoryService) -> None:
    created = await service.create("Books")
    assert created.category is not None

    result = await service.update(created.category.id, " Novels ")

    assert result.success
    assert result.category is not None
    assert result.category.name == "Novels"


@pytest.mark.asyncio
async def test_update_blank_name_is_validation_error(service: CategoryService) -> None:
    created = await service.create("Books")
    assert created.category is not None

    result = await service.update(created.category.id, " ")

    assert result.error_code == VALIDATION_ERROR
    fetched = await service.get_by_id(created.category.id)
    assert fetched is not None and fetched.name == "Books"


@pytest.mark.asyncio
async def test_update_missing_is_not_found(service: CategoryService) -> None:
    result = await service.update(99, "Books")

    assert not result.success
    assert result.error_code == CATEGORY_NOT_FOUND


@pytest.mark.asyncio
async def test_get_all_sorted(service: CategoryService) -> None:
    for name in ["Sports", "Books", "Clothing"]:
        await service.create(name)

    assert [c.name for c in await service.get_all()] == ["Books", "Clothing", "Sports"]


@pytest.mark.asyncio
async def test_delete(service: CategoryService) -> None:
    created = await service.create("Books")
    assert created.category is not None

    assert await service.delete(created.category.id) is True
    assert await service.get_by_id(created.category.id) is None
    assert await service.delete(created.category.id) is False
