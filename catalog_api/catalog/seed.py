"""Reference catalog data.

Wipes the catalog tables and loads a small, fixed data set used for
demos and local development.
"""

from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.catalog.models import Category, Product, ProductCategory, utcnow

logger = structlog.get_logger()


SEED_CATEGORIES = [
    "Electronics",
    "Clothing",
    "Home & Garden",
    "Sports",
    "Books",
]

# (name, description, price, stock_quantity)
SEED_PRODUCTS = [
    ("Wireless Headphones", "Noise-cancelling over-ear headphones with 30hr battery.", "129.99", 50),
    ("Smart Watch", "Fitness tracking, heart rate, GPS. Water resistant.", "249.99", 30),
    ("USB-C Hub", "7-in-1 adapter with HDMI, USB 3.0, SD card reader.", "45.00", 100),
    ("Cotton T-Shirt", "Organic cotton, unisex, multiple colors.", "24.99", 200),
    ("Running Shorts", "Lightweight, moisture-wicking, reflective trim.", "34.99", 80),
    ("Winter Jacket", "Insulated, water-resistant, hooded.", "159.99", 40),
    ("Desk Lamp", "LED, adjustable brightness, USB port.", "39.99", 60),
    ("Plant Pot Set", "Ceramic, 3 sizes, with drainage holes.", "29.99", 75),
    ("Yoga Mat", "Non-slip, 6mm thick, eco-friendly material.", "32.00", 90),
    ("Dumbbells 5kg Pair", "Rubber coated, hex shape, no roll.", "44.99", 45),
    ("Programming Guide", "Learn Python web development from scratch.", "49.99", 120),
    ("Cookbook", "100 quick weekday recipes.", "19.99", 85),
    ("Bluetooth Speaker", "Portable, 12hr battery, waterproof.", "59.99", 55),
    ("Keyboard Mechanical", "RGB, Cherry MX switches, wired.", "89.99", 35),
    ("Garden Hose", "25m expandable, kink-free, with nozzle.", "36.99", 40),
]

# (product name, category name)
SEED_LINKS = [
    ("Wireless Headphones", "Electronics"),
    ("Smart Watch", "Electronics"),
    ("USB-C Hub", "Electronics"),
    ("Cotton T-Shirt", "Clothing"),
    ("Running Shorts", "Clothing"),
    ("Running Shorts", "Sports"),
    ("Winter Jacket", "Clothing"),
    ("Desk Lamp", "Home & Garden"),
    ("Plant Pot Set", "Home & Garden"),
    ("Yoga Mat", "Sports"),
    ("Dumbbells 5kg Pair", "Sports"),
    ("Programming Guide", "Books"),
    ("Cookbook", "Books"),
    ("Bluetooth Speaker", "Electronics"),
    ("Keyboard Mechanical", "Electronics"),
    ("Garden Hose", "Home & Garden"),
]


async def seed_catalog(session: AsyncSession) -> dict[str, Any]:
    """Replace the catalog contents with the reference data set.

    Args:
        session: Async SQLAlchemy session.

    Returns:
        Seeding result with counts.
    """
    await session.execute(delete(ProductCategory))
    await session.execute(delete(Product))
    await session.execute(delete(Category))

    categories = {name: Category(name=name) for name in SEED_CATEGORIES}
    session.add_all(categories.values())

    now = utcnow()
    products = {
        name: Product(
            name=name,
            description=description,
            price=Decimal(price),
            stock_quantity=stock,
            created_at=now,
            updated_at=now,
        )
        for name, description, price, stock in SEED_PRODUCTS
    }
    session.add_all(products.values())
    await session.flush()

    session.add_all(
        ProductCategory(
            product_id=products[product_name].id,
            category_id=categories[category_name].id,
        )
        for product_name, category_name in SEED_LINKS
    )
    await session.commit()

    result = {
        "categories_created": len(categories),
        "products_created": len(products),
        "links_created": len(SEED_LINKS),
    }
    logger.info("Catalog seeded", **result)
    return result
