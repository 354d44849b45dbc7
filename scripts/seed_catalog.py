#!/usr/bin/env python3
"""Seed product catalog script.

Replaces the catalog contents with the reference data set
(5 categories, 15 products).

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///./demo.db
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog_api.catalog.seed import seed_catalog
from catalog_api.infrastructure.config import settings
from catalog_api.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_tables,
)
from catalog_api.infrastructure.logging_config import configure_logging


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with reference data",
    )
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (default: DATABASE_URL from settings)",
    )
    parser.add_argument(
        "--no-create",
        action="store_true",
        help="Don't create missing tables before seeding",
    )
    args = parser.parse_args()

    configure_logging(json_output=False)

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print()

    engine = build_engine(args.database_url)
    try:
        if not args.no_create:
            print("Creating database tables...")
            await create_tables(engine)
            print("Tables ready.")
            print()

        async with build_session_factory(engine)() as session:
            result = await seed_catalog(session)
    finally:
        await engine.dispose()

    print(f"  ✓ Categories: {result['categories_created']}")
    print(f"  ✓ Products: {result['products_created']}")
    print(f"  ✓ Links: {result['links_created']}")
    print()
    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
