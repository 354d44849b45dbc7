"""Domain layer for the product catalog.

Contains the transfer objects, storage contracts, field rules and
domain exceptions. No framework or database code lives here.
"""

from catalog_api.domain.dto import (
    CategoryDTO,
    PagedResult,
    ProductData,
    ProductDTO,
    ProductRow,
)
from catalog_api.domain.exceptions import (
    DomainError,
    InvalidCategoryError,
    InvalidProductError,
    UnknownCategoryError,
    ValidationError,
)
from catalog_api.domain.stores import CategoryStore, ProductStore

__all__ = [
    # DTOs
    "CategoryDTO",
    "PagedResult",
    "ProductData",
    "ProductDTO",
    "ProductRow",
    # Stores
    "CategoryStore",
    "ProductStore",
    # Exceptions
    "DomainError",
    "InvalidCategoryError",
    "InvalidProductError",
    "UnknownCategoryError",
    "ValidationError",
]
