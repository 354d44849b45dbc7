"""Tests for the product application service."""

from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.application.product_service import (
    INVALID_CATEGORY_IDS,
    PRODUCT_NOT_FOUND,
    VALIDATION_ERROR,
    ProductService,
    get_product_service,
)
from catalog_api.catalog.repository import CategoryRepository
from catalog_api.domain.dto import CategoryDTO, ProductData, ProductDTO
from catalog_api.domain.exceptions import UnknownCategoryError
from catalog_api.domain.stores import CategoryStore, ProductStore


def make_data(
    name: str = "Atlas",
    price: str = "12.50",
    stock_quantity: int = 3,
    category_ids: list[int] | None = None,
    description: str | None = None,
) -> ProductData:
    """Create submitted product fields."""
    return ProductData(
        name=name,
        description=description,
        price=Decimal(price),
        stock_quantity=stock_quantity,
        category_ids=category_ids or [],
    )


@pytest_asyncio.fixture
async def service(session: AsyncSession) -> ProductService:
    """Product service on the test database."""
    return get_product_service(session)


# ============================================================================
# Create
# ============================================================================


class TestCreateProduct:
    """Tests for ProductService.create."""

    @pytest.mark.asyncio
    async def test_create_returns_hydrated_product(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        """Create returns the stored product with resolved categories."""
        books = await category_repo.create("Books")

        result = await service.create(make_data(category_ids=[books.id]))

        assert result.success
        product = result.product
        assert product is not None
        assert product.name == "Atlas"
        assert product.price == Decimal("12.50")
        assert product.stock_quantity == 3
        assert product.categories == [CategoryDTO(id=books.id, name="Books")]
        assert product.created_at is not None
        assert product.created_at == product.updated_at

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        """get_by_id returns exactly what was submitted."""
        a = await category_repo.create("A")
        b = await category_repo.create("B")

        result = await service.create(
            make_data(
                name="Globe",
                price="99.99",
                stock_quantity=0,
                category_ids=[b.id, a.id],
                description="Desk globe",
            )
        )
        assert result.product is not None

        fetched = await service.get_by_id(result.product.id)
        assert fetched is not None
        assert (fetched.name, fetched.price, fetched.stock_quantity, fetched.description) == (
            "Globe",
            Decimal("99.99"),
            0,
            "Desk globe",
        )
        assert set(fetched.category_ids) == {a.id, b.id}

    @pytest.mark.asyncio
    async def test_create_trims_name_and_dedupes_categories(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        books = await category_repo.create("Books")

        result = await service.create(
            make_data(name="  Atlas  ", category_ids=[books.id, books.id])
        )

        assert result.success
        assert result.product is not None
        assert result.product.name == "Atlas"
        assert result.product.category_ids == [books.id]

    @pytest.mark.asyncio
    async def test_create_with_unknown_category_persists_nothing(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        books = await category_repo.create("Books")

        result = await service.create(make_data(category_ids=[books.id, 999]))

        assert not result.success
        assert result.error_code == INVALID_CATEGORY_IDS
        assert result.error == "One or more category IDs are invalid."
        page = await service.get_paged(1, 10)
        assert page.total_count == 0

    @pytest.mark.asyncio
    async def test_create_with_invalid_fields(self, service: ProductService) -> None:
        result = await service.create(make_data(name=" ", price="0", stock_quantity=-1))

        assert not result.success
        assert result.error_code == VALIDATION_ERROR
        assert set(result.errors) == {"name", "price", "stockQuantity"}
        assert (await service.get_paged(1, 10)).total_count == 0

    @pytest.mark.asyncio
    async def test_create_rejects_sub_cent_price(self, service: ProductService) -> None:
        """A price the column would round to 0.00 never reaches the store."""
        result = await service.create(make_data(name="Pin", price="0.001", stock_quantity=1))

        assert not result.success
        assert result.error_code == VALIDATION_ERROR
        assert "price" in result.errors
        assert (await service.get_paged(1, 10)).total_count == 0

    @pytest.mark.asyncio
    async def test_create_keeps_description_as_submitted(
        self,
        service: ProductService,
    ) -> None:
        result = await service.create(make_data(description="  padded  "))
        assert result.product is not None

        fetched = await service.get_by_id(result.product.id)
        assert fetched is not None
        assert fetched.description == "  padded  "

    @pytest.mark.asyncio
    async def test_timestamps_are_utc(self, service: ProductService) -> None:
        result = await service.create(make_data())

        assert result.product is not None
        assert result.product.created_at.utcoffset() == timedelta(0)
        assert result.product.updated_at.utcoffset() == timedelta(0)


# ============================================================================
# Update
# ============================================================================


class TestUpdateProduct:
    """Tests for ProductService.update."""

    @pytest.mark.asyncio
    async def test_update_replaces_categories(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        """{A, B} updated with [C] ends as exactly {C}."""
        a = await category_repo.create("A")
        b = await category_repo.create("B")
        c = await category_repo.create("C")
        created = await service.create(make_data(category_ids=[a.id, b.id]))
        assert created.product is not None

        result = await service.update(created.product.id, make_data(category_ids=[c.id]))

        assert result.success
        fetched = await service.get_by_id(created.product.id)
        assert fetched is not None
        assert fetched.category_ids == [c.id]

    @pytest.mark.asyncio
    async def test_update_preserves_created_at(self, service: ProductService) -> None:
        created = await service.create(make_data())
        assert created.product is not None

        result = await service.update(created.product.id, make_data(price="20.00"))

        assert result.product is not None
        assert result.product.created_at == created.product.created_at
        assert result.product.updated_at >= created.product.updated_at
        assert result.product.price == Decimal("20.00")

    @pytest.mark.asyncio
    async def test_update_missing_product(self, service: ProductService) -> None:
        """Missing product is not-found and no row is created."""
        result = await service.update(42, make_data())

        assert not result.success
        assert result.error_code == PRODUCT_NOT_FOUND
        assert (await service.get_paged(1, 10)).total_count == 0

    @pytest.mark.asyncio
    async def test_update_missing_product_wins_over_bad_categories(
        self,
        service: ProductService,
    ) -> None:
        result = await service.update(42, make_data(category_ids=[999]))
        assert result.error_code == PRODUCT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_update_with_unknown_category(
        self,
        service: ProductService,
        category_repo: CategoryRepository,
    ) -> None:
        books = await category_repo.create("Books")
        created = await service.create(make_data(category_ids=[books.id]))
        assert created.product is not None

        result = await service.update(
            created.product.id, make_data(name="Changed", category_ids=[999])
        )

        assert result.error_code == INVALID_CATEGORY_IDS
        fetched = await service.get_by_id(created.product.id)
        assert fetched is not None
        assert fetched.name == "Atlas"
        assert fetched.category_ids == [books.id]


# ============================================================================
# Scenario
# ============================================================================


@pytest.mark.asyncio
async def test_books_atlas_scenario(
    service: ProductService,
    category_repo: CategoryRepository,
) -> None:
    """Create, link, then clear the category set."""
    books = await category_repo.create("Books")
    assert books.id == 1

    created = await service.create(
        make_data(name="Atlas", price="12.50", stock_quantity=3, category_ids=[1])
    )
    assert created.product is not None
    product_id = created.product.id

    fetched = await service.get_by_id(product_id)
    assert fetched is not None
    assert fetched.categories == [CategoryDTO(id=1, name="Books")]

    await service.update(product_id, make_data(name="Atlas", category_ids=[]))

    fetched = await service.get_by_id(product_id)
    assert fetched is not None
    assert fetched.categories == []


@pytest.mark.asyncio
async def test_delete(service: ProductService) -> None:
    created = await service.create(make_data())
    assert created.product is not None

    assert await service.delete(created.product.id) is True
    assert await service.get_by_id(created.product.id) is None
    assert await service.delete(created.product.id) is False


# ============================================================================
# Store contracts
# ============================================================================


class TestWithStoreDoubles:
    """The service only talks to the store interfaces."""

    @pytest.fixture
    def products(self) -> MagicMock:
        store = MagicMock(spec=ProductStore)
        store.add = AsyncMock(return_value=7)
        store.update = AsyncMock(return_value=True)
        store.get_by_id = AsyncMock(
            return_value=ProductDTO(
                id=7, name="Atlas", price=Decimal("12.50"), stock_quantity=3
            )
        )
        return store

    @pytest.fixture
    def categories(self) -> MagicMock:
        store = MagicMock(spec=CategoryStore)
        store.exists_all = AsyncMock(return_value=True)
        return store

    @pytest.mark.asyncio
    async def test_empty_category_set_skips_existence_check(
        self, products: MagicMock, categories: MagicMock
    ) -> None:
        service = ProductService(products, categories)

        result = await service.create(make_data())

        assert result.success
        categories.exists_all.assert_not_awaited()
        products.add.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_category_deleted_after_check(
        self, products: MagicMock, categories: MagicMock
    ) -> None:
        """A link write rejected after a passing check fails cleanly."""
        products.add = AsyncMock(side_effect=UnknownCategoryError([1]))
        service = ProductService(products, categories)

        result = await service.create(make_data(category_ids=[1]))

        assert not result.success
        assert result.error_code == INVALID_CATEGORY_IDS
        products.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_product_deleted_during_update(
        self, products: MagicMock, categories: MagicMock
    ) -> None:
        """Store reporting not-found on write is propagated."""
        products.update = AsyncMock(return_value=False)
        service = ProductService(products, categories)

        result = await service.update(7, make_data())

        assert result.error_code == PRODUCT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_create_sets_both_timestamps(
        self, products: MagicMock, categories: MagicMock
    ) -> None:
        service = ProductService(products, categories)

        await service.create(make_data(category_ids=[3, 3, 1]))

        row, category_ids = products.add.await_args.args
        assert category_ids == [3, 1]
        assert row.created_at is not None
        assert row.created_at == row.updated_at
        categories.exists_all.assert_awaited_once_with([3, 1])
