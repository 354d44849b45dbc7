"""Storage contracts for the catalog.

Services depend only on these interfaces, so the SQL repositories can be
swapped for another storage engine without touching service logic.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from catalog_api.domain.dto import CategoryDTO, PagedResult, ProductDTO, ProductRow


class CategoryStore(ABC):
    """Persistence operations for categories."""

    @abstractmethod
    async def list_all(self) -> list[CategoryDTO]:
        """Return all categories ordered by name."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> CategoryDTO | None:
        """Return a category, or None if it does not exist."""

    @abstractmethod
    async def create(self, name: str) -> CategoryDTO:
        """Insert a category with an already-normalised name."""

    @abstractmethod
    async def update(self, category_id: int, name: str) -> CategoryDTO | None:
        """Rename a category, or return None if it does not exist."""

    @abstractmethod
    async def delete(self, category_id: int) -> bool:
        """Delete a category; True if a row was removed."""

    @abstractmethod
    async def exists_all(self, category_ids: Iterable[int]) -> bool:
        """True iff every id exists. An empty input is vacuously true."""


class ProductStore(ABC):
    """Persistence operations for products and their category links."""

    @abstractmethod
    async def get_paged(
        self,
        page: int,
        page_size: int,
        search: str | None = None,
    ) -> PagedResult[ProductDTO]:
        """Return one page of hydrated products ordered by id."""

    @abstractmethod
    async def get_by_id(self, product_id: int) -> ProductDTO | None:
        """Return a hydrated product, or None if it does not exist."""

    @abstractmethod
    async def add(self, row: ProductRow, category_ids: list[int]) -> int:
        """Insert a product and its category links atomically.

        Returns:
            The new product id.

        Raises:
            UnknownCategoryError: If a category link cannot be written.
        """

    @abstractmethod
    async def update(
        self,
        product_id: int,
        row: ProductRow,
        category_ids: list[int],
    ) -> bool:
        """Overwrite a product and replace its category links atomically.

        Returns:
            False if the product does not exist.

        Raises:
            UnknownCategoryError: If a category link cannot be written.
        """

    @abstractmethod
    async def delete(self, product_id: int) -> bool:
        """Delete a product and its links; True if a row was removed."""
