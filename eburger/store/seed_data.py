#!/usr/bin/env python3
"""
seed_data.py

Default menu used when no catalog has been saved yet, plus a small command to
write (or reset) that menu into the configured data directory.

Run:
  python -m eburger.store.seed_data --force
"""

from __future__ import annotations

import argparse
from typing import List, Optional

from ..config import get_config
from ..data.interface import PRODUCTS_KEY
from ..data.models import Product
from ..data.util import get_persistence
from ..logging import get_logger

DEFAULT_PRODUCTS = [
    {
        "id": "1",
        "name": "Classic Cheeseburger",
        "price": "12.50",
        "category": "Beef",
        "description": "Juicy beef patty, cheddar cheese, lettuce, tomato, and house sauce.",
        "image": "https://picsum.photos/id/292/400/300",
    },
    {
        "id": "2",
        "name": "Spicy Chicken Deluxe",
        "price": "14.00",
        "category": "Chicken",
        "description": "Crispy fried chicken, spicy mayo, slaw, and pickles.",
        "image": "https://picsum.photos/id/835/400/300",
    },
    {
        "id": "3",
        "name": "Double Trouble",
        "price": "18.90",
        "category": "Beef",
        "description": "Two beef patties, double cheese, caramelized onions, and BBQ sauce.",
        "image": "https://picsum.photos/id/488/400/300",
    },
]

# Categories offered by the operator's product form
MENU_CATEGORIES = ["Beef", "Chicken", "Fish", "Veggie"]


def default_products() -> List[Product]:
    return [Product(**row) for row in DEFAULT_PRODUCTS]


def main(argv: Optional[List[str]] = None) -> int:
    from .catalog import CatalogStore

    parser = argparse.ArgumentParser(description="Write the default menu to local storage.")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing catalog")
    args = parser.parse_args(argv)

    logger = get_logger(__name__)
    persistence = get_persistence()

    if persistence.load(PRODUCTS_KEY) is not None and not args.force:
        logger.warning("A catalog is already saved; pass --force to reset it")
        return 1

    catalog = CatalogStore(persistence)
    catalog.replace_all(default_products())
    logger.info(f"Seeded {len(catalog)} products into {get_config().data_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
