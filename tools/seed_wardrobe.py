"""Seed a wardrobe database with a small sample closet."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List

from models.wardrobe_item import from_raw_metadata
from stylist_app.config import AppConfig
from stylist_app.logging_config import configure_logging, get_logger, log_event
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore

LOGGER = get_logger(__name__)

SAMPLE_ITEMS: List[Dict[str, object]] = [
    # Tops
    {"name": "White Cotton T-Shirt", "category": "top", "color": "white", "tags": ["casual", "comfortable", "summer"]},
    {"name": "Navy Blue Blazer", "category": "outerwear", "color": "navy", "tags": ["formal", "professional", "business"]},
    {"name": "Grey Sweater", "category": "top", "color": "grey", "tags": ["casual", "comfortable", "winter"]},
    {"name": "Black Polo Shirt", "category": "top", "color": "black", "tags": ["business-casual", "versatile"]},
    {"name": "Red Cardigan", "category": "outerwear", "color": "red", "tags": ["casual", "comfortable", "winter"]},
    # Bottoms
    {"name": "Blue Jeans", "category": "bottom", "color": "blue", "tags": ["casual", "comfortable", "versatile"]},
    {"name": "Black Dress Pants", "category": "bottom", "color": "black", "tags": ["formal", "professional", "business"]},
    {"name": "Khaki Chinos", "category": "bottom", "color": "khaki", "tags": ["business-casual", "versatile"]},
    {"name": "Grey Slacks", "category": "bottom", "color": "grey", "tags": ["formal", "professional"]},
    # Shoes
    {"name": "White Sneakers", "category": "shoes", "color": "white", "tags": ["casual", "comfortable", "sporty"]},
    {"name": "Black Oxford Shoes", "category": "shoes", "color": "black", "tags": ["formal", "professional", "business"]},
    {"name": "Brown Loafers", "category": "shoes", "color": "brown", "tags": ["business-casual", "comfortable"]},
    # Accessories
    {"name": "Black Leather Belt", "category": "accessory", "color": "black", "tags": ["formal", "professional"]},
    {"name": "Silver Watch", "category": "accessory", "color": "silver", "tags": ["versatile", "elegant"]},
    {"name": "Blue Scarf", "category": "accessory", "color": "blue", "tags": ["casual", "winter", "stylish"]},
]


def seed_wardrobe(store: WardrobeStore, force: bool = False) -> int:
    """Insert the sample items and return how many were created.

    A wardrobe that already holds items is left untouched unless ``force``.
    """

    existing = len(store.list_items())
    if existing and not force:
        log_event(LOGGER, logging.INFO, "seed_skipped", existing_items=existing)
        return 0
    for metadata in SAMPLE_ITEMS:
        store.create_item(from_raw_metadata(metadata))
    log_event(LOGGER, logging.INFO, "seed_completed", created_items=len(SAMPLE_ITEMS))
    return len(SAMPLE_ITEMS)


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the wardrobe database with sample items")
    parser.add_argument(
        "--database",
        default=None,
        help="Path to the SQLite database (defaults to WARDROBE_DB_PATH or data/wardrobe.db).",
    )
    parser.add_argument("--force", action="store_true", help="Seed even if the wardrobe is not empty.")
    args = parser.parse_args(argv)

    config = AppConfig.from_env()
    configure_logging(config.log_level)
    db_path = Path(args.database or config.database_path)
    created = seed_wardrobe(SQLiteWardrobeStore(db_path), force=args.force)
    if created:
        print(f"Seeded {created} wardrobe items into {db_path}")
    else:
        print(f"Wardrobe at {db_path} already has items; use --force to seed anyway")


if __name__ == "__main__":
    main()
