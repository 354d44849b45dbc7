"""Catalog repositories for database operations.

SQL implementations of the CategoryStore and ProductStore contracts.
Reads return plain DTOs; writes are explicit statements committed as
one transaction per operation.
"""

from collections.abc import Iterable
from datetime import datetime, timezone

import structlog
from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_api.catalog.models import Category, Product, ProductCategory
from catalog_api.domain.dto import CategoryDTO, PagedResult, ProductDTO, ProductRow
from catalog_api.domain.exceptions import UnknownCategoryError
from catalog_api.domain.stores import CategoryStore, ProductStore

logger = structlog.get_logger()


def category_to_dto(category: Category) -> CategoryDTO:
    """Convert a Category row to CategoryDTO."""
    return CategoryDTO(id=category.id, name=category.name)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to timestamps read back naive (SQLite)."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def product_to_dto(product: Product) -> ProductDTO:
    """Convert a Product row with loaded categories to ProductDTO."""
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        categories=[category_to_dto(c) for c in product.categories],
        created_at=as_utc(product.created_at),
        updated_at=as_utc(product.updated_at),
    )


class CategoryRepository(CategoryStore):
    """Repository for Category database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = CategoryRepository(session)
            books = await repo.create("Books")
            assert await repo.exists_all([books.id])
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def list_all(self) -> list[CategoryDTO]:
        """Get all categories sorted by name.

        Returns:
            Categories ordered by name, then id.
        """
        query = select(Category).order_by(Category.name.asc(), Category.id.asc())
        result = await self.session.execute(query)
        return [category_to_dto(c) for c in result.scalars().all()]

    async def get_by_id(self, category_id: int) -> CategoryDTO | None:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            Category if found, None otherwise.
        """
        query = (
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        category = result.scalar_one_or_none()
        return category_to_dto(category) if category else None

    async def create(self, name: str) -> CategoryDTO:
        """Insert a category.

        Args:
            name: Trimmed, non-empty category name.

        Returns:
            Created category with its assigned ID.
        """
        category_id = await self.session.scalar(
            insert(Category).values(name=name).returning(Category.id)
        )
        await self.session.commit()
        return CategoryDTO(id=category_id, name=name)

    async def update(self, category_id: int, name: str) -> CategoryDTO | None:
        """Rename a category.

        Args:
            category_id: Category ID.
            name: Trimmed, non-empty category name.

        Returns:
            Updated category, or None if it does not exist.
        """
        result = await self.session.execute(
            update(Category).where(Category.id == category_id).values(name=name)
        )
        if result.rowcount == 0:
            await self.session.rollback()
            return None

        await self.session.commit()
        return CategoryDTO(id=category_id, name=name)

    async def delete(self, category_id: int) -> bool:
        """Delete a category.

        Links to products go with it (ON DELETE CASCADE); the products stay.

        Args:
            category_id: Category ID.

        Returns:
            True if a category was deleted.
        """
        result = await self.session.execute(
            delete(Category).where(Category.id == category_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def exists_all(self, category_ids: Iterable[int]) -> bool:
        """Check that every given category exists.

        Args:
            category_ids: Candidate IDs (duplicates are ignored).

        Returns:
            True if all exist, or if no IDs were given.
        """
        ids = set(category_ids)
        if not ids:
            return True

        query = select(func.count(Category.id)).where(Category.id.in_(ids))
        result = await self.session.execute(query)
        return result.scalar_one() == len(ids)


class ProductRepository(ProductStore):
    """Repository for Product database operations.

    Handles paging and name search, and keeps the product_categories
    links in step with product writes.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            page = await repo.get_paged(page=1, page_size=10, search="watch")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def get_paged(
        self,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> PagedResult[ProductDTO]:
        """Get a page of products, optionally filtered by name.

        The name filter is a case-insensitive substring match on every
        backend; LIKE wildcards in the search text match literally.

        Args:
            page: Page number (1-based).
            page_size: Items per page.
            search: Text to look for in product names.

        Returns:
            Products ordered by ID with the total matching count.
        """
        conditions = []
        if search and search.strip():
            conditions.append(Product.name.icontains(search.strip(), autoescape=True))

        count_query = select(func.count(Product.id))
        query = select(Product)
        if conditions:
            count_query = count_query.where(and_(*conditions))
            query = query.where(and_(*conditions))

        total = (await self.session.execute(count_query)).scalar_one()

        offset = (page - 1) * page_size
        if offset >= total:
            # Past the last page; also keeps huge offsets away from the database
            return PagedResult(items=[], total_count=total, page=page, page_size=page_size)

        query = (
            query.order_by(Product.id.asc())
            .limit(page_size)
            .offset(offset)
            .options(selectinload(Product.categories))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)

        return PagedResult(
            items=[product_to_dto(p) for p in result.scalars().all()],
            total_count=total,
            page=page,
            page_size=page_size,
        )

    async def get_by_id(self, product_id: int) -> ProductDTO | None:
        """Get product by ID with its categories.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.categories))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        product = result.scalar_one_or_none()
        return product_to_dto(product) if product else None

    async def add(self, row: ProductRow, category_ids: list[int]) -> int:
        """Insert a product and its category links in one transaction.

        Args:
            row: Scalar product values.
            category_ids: Distinct IDs of categories to link.

        Returns:
            The new product ID.

        Raises:
            UnknownCategoryError: If a link references a missing category.
            IntegrityError: If any other constraint rejects the write.
        """
        try:
            product_id = await self.session.scalar(
                insert(Product)
                .values(
                    name=row.name,
                    description=row.description,
                    price=row.price,
                    stock_quantity=row.stock_quantity,
                    created_at=row.created_at or row.updated_at,
                    updated_at=row.updated_at,
                )
                .returning(Product.id)
            )
            await self._insert_links(product_id, category_ids)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if await self._categories_present(category_ids):
                raise
            logger.warning(
                "Product insert rejected",
                category_ids=category_ids,
                error=str(exc.orig),
            )
            raise UnknownCategoryError(category_ids) from exc

        return product_id

    async def update(
        self,
        product_id: int,
        row: ProductRow,
        category_ids: list[int],
    ) -> bool:
        """Overwrite a product and replace all of its category links.

        ``created_at`` is never touched.

        Args:
            product_id: Product ID.
            row: Scalar product values.
            category_ids: Distinct IDs of the new category set.

        Returns:
            False if the product does not exist.

        Raises:
            UnknownCategoryError: If a link references a missing category.
            IntegrityError: If any other constraint rejects the write.
        """
        try:
            result = await self.session.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(
                    name=row.name,
                    description=row.description,
                    price=row.price,
                    stock_quantity=row.stock_quantity,
                    updated_at=row.updated_at,
                )
            )
            if result.rowcount == 0:
                await self.session.rollback()
                return False

            await self.session.execute(
                delete(ProductCategory).where(ProductCategory.product_id == product_id)
            )
            await self._insert_links(product_id, category_ids)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            if await self._categories_present(category_ids):
                raise
            logger.warning(
                "Product update rejected",
                product_id=product_id,
                category_ids=category_ids,
                error=str(exc.orig),
            )
            raise UnknownCategoryError(category_ids) from exc

        return True

    async def delete(self, product_id: int) -> bool:
        """Delete a product; its category links are removed by cascade.

        Args:
            product_id: Product ID.

        Returns:
            True if a product was deleted.
        """
        result = await self.session.execute(
            delete(Product).where(Product.id == product_id)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def _categories_present(self, category_ids: list[int]) -> bool:
        """Re-check link targets after a rejected write.

        True means the failure came from another constraint and must not
        be reported as unknown categories.
        """
        if not category_ids:
            return True
        query = select(func.count(Category.id)).where(Category.id.in_(category_ids))
        return (await self.session.execute(query)).scalar_one() == len(set(category_ids))

    async def _insert_links(self, product_id: int, category_ids: list[int]) -> None:
        """Insert one product_categories row per category."""
        if not category_ids:
            return
        await self.session.execute(
            insert(ProductCategory),
            [{"product_id": product_id, "category_id": cid} for cid in category_ids],
        )
