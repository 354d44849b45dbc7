"""Product application service.

Orchestrates product management:
- Normalising and validating product fields
- Checking that referenced categories exist
- Writing through the ProductStore and returning hydrated records
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.repository import CategoryRepository, ProductRepository
from catalog_api.domain.dto import PagedResult, ProductData, ProductDTO, ProductRow
from catalog_api.domain.exceptions import UnknownCategoryError, ValidationError
from catalog_api.domain.stores import CategoryStore, ProductStore
from catalog_api.domain.validation import distinct_ids, normalize_product_fields

logger = structlog.get_logger()


VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_CATEGORY_IDS = "INVALID_CATEGORY_IDS"
PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"


# ============================================================================
# Service Result Types
# ============================================================================


@dataclass
class ProductResult:
    """Result of creating or updating a product."""

    product: ProductDTO | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @classmethod
    def failure(
        cls,
        error_code: str,
        error: str,
        errors: dict[str, list[str]] | None = None,
    ) -> "ProductResult":
        """Build a failed result."""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors or {},
        )


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Application service for products.

    Example usage:
        service = ProductService(ProductRepository(session), CategoryRepository(session))
        result = await service.create(
            ProductData(name="Atlas", price=Decimal("12.50"), stock_quantity=3, category_ids=[1])
        )
        if result.success:
            print(result.product.categories)
    """

    def __init__(self, products: ProductStore, categories: CategoryStore) -> None:
        """Initialize service.

        Args:
            products: Product storage.
            categories: Category storage, used for reference checks.
        """
        self.products = products
        self.categories = categories

    async def get_paged(
        self,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> PagedResult[ProductDTO]:
        """Get a page of products, optionally filtered by name."""
        return await self.products.get_paged(page, page_size, search)

    async def get_by_id(self, product_id: int) -> ProductDTO | None:
        """Get a product by ID."""
        return await self.products.get_by_id(product_id)

    async def create(self, data: ProductData) -> ProductResult:
        """Create a product and link it to its categories.

        Args:
            data: Submitted product fields.

        Returns:
            Result with the hydrated product, or the reason it was rejected.
        """
        try:
            row, category_ids = await self._prepare(data)
        except ValidationError as e:
            logger.info("Product create rejected", errors=e.errors)
            return ProductResult.failure(VALIDATION_ERROR, e.message, e.errors)
        except UnknownCategoryError as e:
            logger.info("Product create rejected", category_ids=e.category_ids)
            return self._invalid_categories(e)

        row.created_at = row.updated_at

        try:
            product_id = await self.products.add(row, category_ids)
        except UnknownCategoryError as e:
            return self._invalid_categories(e)

        product = await self.products.get_by_id(product_id)
        logger.info(
            "Product created",
            product_id=product_id,
            category_ids=category_ids,
        )
        return ProductResult(product=product)

    async def update(self, product_id: int, data: ProductData) -> ProductResult:
        """Replace a product's fields and its whole category set.

        The original ``created_at`` is kept.

        Args:
            product_id: Product ID.
            data: Submitted product fields.

        Returns:
            Result with the hydrated product, or the reason it was rejected.
        """
        if await self.products.get_by_id(product_id) is None:
            return self._not_found(product_id)

        try:
            row, category_ids = await self._prepare(data)
        except ValidationError as e:
            logger.info("Product update rejected", product_id=product_id, errors=e.errors)
            return ProductResult.failure(VALIDATION_ERROR, e.message, e.errors)
        except UnknownCategoryError as e:
            logger.info(
                "Product update rejected",
                product_id=product_id,
                category_ids=e.category_ids,
            )
            return self._invalid_categories(e)

        try:
            updated = await self.products.update(product_id, row, category_ids)
        except UnknownCategoryError as e:
            return self._invalid_categories(e)

        # Deleted between the existence check and the write
        if not updated:
            return self._not_found(product_id)

        product = await self.products.get_by_id(product_id)
        logger.info(
            "Product updated",
            product_id=product_id,
            category_ids=category_ids,
        )
        return ProductResult(product=product)

    async def delete(self, product_id: int) -> bool:
        """Delete a product; False if it did not exist."""
        deleted = await self.products.delete(product_id)
        if deleted:
            logger.info("Product deleted", product_id=product_id)
        return deleted

    async def _prepare(self, data: ProductData) -> tuple[ProductRow, list[int]]:
        """Validate submitted fields and referenced categories.

        Raises:
            ValidationError: If a field is invalid.
            UnknownCategoryError: If a category ID does not exist.
        """
        name, price, stock_quantity = normalize_product_fields(
            data.name, data.price, data.stock_quantity
        )
        category_ids = distinct_ids(data.category_ids)
        if category_ids and not await self.categories.exists_all(category_ids):
            raise UnknownCategoryError(category_ids)

        row = ProductRow(
            name=name,
            description=data.description,
            price=price,
            stock_quantity=stock_quantity,
            updated_at=datetime.now(timezone.utc),
        )
        return row, category_ids

    @staticmethod
    def _invalid_categories(error: UnknownCategoryError) -> ProductResult:
        return ProductResult.failure(
            INVALID_CATEGORY_IDS,
            error.message,
            {"categoryIds": [error.message]},
        )

    @staticmethod
    def _not_found(product_id: int) -> ProductResult:
        return ProductResult.failure(
            PRODUCT_NOT_FOUND,
            f"Product not found: {product_id}",
        )


def get_product_service(session: AsyncSession) -> ProductService:
    """Get a product service backed by the SQL repositories.

    Args:
        session: Request-scoped database session.

    Returns:
        ProductService instance.
    """
    return ProductService(
        products=ProductRepository(session),
        categories=CategoryRepository(session),
    )
