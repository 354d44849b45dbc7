"""Category application service."""

from dataclasses import dataclass, field

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.repository import CategoryRepository
from catalog_api.domain.dto import CategoryDTO
from catalog_api.domain.exceptions import InvalidCategoryError
from catalog_api.domain.stores import CategoryStore
from catalog_api.domain.validation import normalize_category_name

logger = structlog.get_logger()


VALIDATION_ERROR = "VALIDATION_ERROR"
CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"


@dataclass
class CategoryResult:
    """Result of creating or updating a category."""

    category: CategoryDTO | None = None
    success: bool = True
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)


class CategoryService:
    """Application service for categories."""

    def __init__(self, categories: CategoryStore) -> None:
        self.categories = categories

    async def get_all(self) -> list[CategoryDTO]:
        """Get all categories ordered by name."""
        return await self.categories.list_all()

    async def get_by_id(self, category_id: int) -> CategoryDTO | None:
        """Get a category by ID."""
        return await self.categories.get_by_id(category_id)

    async def create(self, name: str | None) -> CategoryResult:
        """Create a category.

        Args:
            name: Submitted name; surrounding whitespace is removed.

        Returns:
            Result with the created category, or a validation failure.
        """
        try:
            clean_name = normalize_category_name(name)
        except InvalidCategoryError as e:
            logger.info("Category create rejected", errors=e.errors)
            return CategoryResult(
                success=False,
                error=e.message,
                error_code=VALIDATION_ERROR,
                errors=e.errors,
            )

        category = await self.categories.create(clean_name)
        logger.info("Category created", category_id=category.id, name=category.name)
        return CategoryResult(category=category)

    async def update(self, category_id: int, name: str | None) -> CategoryResult:
        """Rename a category.

        Args:
            category_id: Category ID.
            name: Submitted name; surrounding whitespace is removed.

        Returns:
            Result with the updated category, or why it failed.
        """
        try:
            clean_name = normalize_category_name(name)
        except InvalidCategoryError as e:
            logger.info("Category update rejected", category_id=category_id, errors=e.errors)
            return CategoryResult(
                success=False,
                error=e.message,
                error_code=VALIDATION_ERROR,
                errors=e.errors,
            )

        category = await self.categories.update(category_id, clean_name)
        if category is None:
            return CategoryResult(
                success=False,
                error=f"Category not found: {category_id}",
                error_code=CATEGORY_NOT_FOUND,
            )

        logger.info("Category updated", category_id=category_id, name=clean_name)
        return CategoryResult(category=category)

    async def delete(self, category_id: int) -> bool:
        """Delete a category; its product links are removed with it."""
        deleted = await self.categories.delete(category_id)
        if deleted:
            logger.info("Category deleted", category_id=category_id)
        return deleted


def get_category_service(session: AsyncSession) -> CategoryService:
    """Get a category service backed by the SQL repository.

    Args:
        session: Request-scoped database session.

    Returns:
        CategoryService instance.
    """
    return CategoryService(CategoryRepository(session))
