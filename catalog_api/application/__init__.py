"""Application layer module.

Contains application services (use cases) that orchestrate
domain rules and the catalog stores.
"""

from catalog_api.application.category_service import (
    CategoryResult,
    CategoryService,
    get_category_service,
)
from catalog_api.application.product_service import (
    ProductResult,
    ProductService,
    get_product_service,
)

__all__ = [
    "CategoryResult",
    "CategoryService",
    "get_category_service",
    "ProductResult",
    "ProductService",
    "get_product_service",
]
