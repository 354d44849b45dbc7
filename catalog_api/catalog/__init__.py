"""Product Catalog persistence.

Provides the SQLAlchemy models, the SQL repositories behind the store
contracts, and the reference seed data.
"""

from catalog_api.catalog.models import Category, Product, ProductCategory
from catalog_api.catalog.repository import CategoryRepository, ProductRepository
from catalog_api.catalog.seed import seed_catalog

__all__ = [
    # Models
    "Category",
    "Product",
    "ProductCategory",
    # Repositories
    "CategoryRepository",
    "ProductRepository",
    # Seed
    "seed_catalog",
]
