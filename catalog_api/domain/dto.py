"""Catalog data transfer objects.

Plain values passed between repositories, services and the API layer.
Nothing here is tracked by the ORM session.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CategoryDTO:
    """Category data transfer object."""

    id: int
    name: str


@dataclass
class ProductDTO:
    """Hydrated product: scalar fields plus resolved categories."""

    id: int
    name: str
    price: Decimal
    stock_quantity: int
    description: str | None = None
    categories: list[CategoryDTO] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def category_ids(self) -> list[int]:
        """Ids of the associated categories."""
        return [c.id for c in self.categories]


@dataclass
class ProductData:
    """Writable product fields, as submitted for create or update.

    Attributes:
        name: Product name.
        price: Unit price, must be positive.
        stock_quantity: Units in stock, must not be negative.
        description: Optional free text.
        category_ids: Categories to associate (full replacement on update).
    """

    name: str
    price: Decimal
    stock_quantity: int
    description: str | None = None
    category_ids: list[int] = field(default_factory=list)


@dataclass
class ProductRow:
    """Scalar values written to the products table."""

    name: str
    price: Decimal
    stock_quantity: int
    description: str | None
    updated_at: datetime
    created_at: datetime | None = None


@dataclass
class PagedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items on the requested page.
        total_count: Number of items matching the query across all pages.
        page: Current page (1-based).
        page_size: Items per page.
    """

    items: list[T]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        if self.page_size <= 0:
            return 0
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1
