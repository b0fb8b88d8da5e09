"""Wardrobe storage abstractions with SQLite and in-memory implementations."""
from __future__ import annotations

import contextlib
import json
import sqlite3
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from models.wardrobe_item import WardrobeItem


class WardrobeStore:
    """Persistence interface for wardrobe items.

    ``list_items`` returns the most recently created item first; the outfit
    selector relies on that order to decide which item is "first".
    """

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        raise NotImplementedError

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def list_items(self) -> List[WardrobeItem]:
        raise NotImplementedError

    def update_item(self, item_id: str, item: WardrobeItem) -> Optional[WardrobeItem]:
        raise NotImplementedError

    def delete_item(self, item_id: str) -> bool:
        raise NotImplementedError

    def ping(self) -> bool:
        return True


def serialise_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def deserialise_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(raw)


class SQLiteDatabase:
    """Connection helper shared by the SQLite-backed stores."""

    def __init__(self, database_path: str | Path) -> None:
        self.database_path = Path(database_path)
        if self.database_path.parent and not self.database_path.parent.exists():
            self.database_path.parent.mkdir(parents=True, exist_ok=True)

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def ping(self) -> bool:
        with self._connect() as conn:
            return conn.execute("SELECT 1").fetchone()[0] == 1

    @staticmethod
    def _serialise_list(values: Optional[List[object]]) -> str:
        return json.dumps(list(values or []))

    @staticmethod
    def _deserialise_list(raw: Optional[str]) -> List[object]:
        return json.loads(raw) if raw else []


class SQLiteWardrobeStore(SQLiteDatabase, WardrobeStore):
    """Local SQLite-backed store for wardrobe items."""

    _COLUMNS = (
        "item_id", "name", "category", "color", "tags", "subcategory", "brand", "size",
        "material", "pattern", "fit", "season", "style", "occasion", "condition", "warmth",
        "waterproof", "price", "purchase_date", "notes", "image_url", "created_at",
    )

    def __init__(self, database_path: str | Path = "data/wardrobe.db") -> None:
        super().__init__(database_path)
        self._ensure_tables()

    def _ensure_tables(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS wardrobe_items (
                    item_id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    color TEXT,
                    tags TEXT,
                    subcategory TEXT,
                    brand TEXT,
                    size TEXT,
                    material TEXT,
                    pattern TEXT,
                    fit TEXT,
                    season TEXT,
                    style TEXT,
                    occasion TEXT,
                    condition TEXT,
                    warmth INTEGER,
                    waterproof INTEGER NOT NULL DEFAULT 0,
                    price REAL,
                    purchase_date TEXT,
                    notes TEXT,
                    image_url TEXT,
                    created_at TEXT NOT NULL
                );
                """
            )
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_wardrobe_items_created_at ON wardrobe_items (created_at)"
            )

    def _item_values(self, item: WardrobeItem) -> tuple:
        return (
            item.item_id,
            item.name,
            item.category,
            item.color,
            self._serialise_list(item.tags),
            item.subcategory,
            item.brand,
            item.size,
            item.material,
            item.pattern,
            item.fit,
            self._serialise_list(item.season),
            self._serialise_list(item.style),
            self._serialise_list(item.occasion),
            item.condition,
            item.warmth,
            int(item.waterproof),
            item.price,
            item.purchase_date,
            item.notes,
            item.image_url,
            serialise_timestamp(item.created_at),
        )

    def _row_to_item(self, row: sqlite3.Row) -> WardrobeItem:
        return WardrobeItem(
            item_id=row["item_id"],
            name=row["name"],
            category=row["category"],
            color=row["color"] or "",
            tags=self._deserialise_list(row["tags"]),
            subcategory=row["subcategory"],
            brand=row["brand"],
            size=row["size"],
            material=row["material"],
            pattern=row["pattern"],
            fit=row["fit"],
            season=self._deserialise_list(row["season"]),
            style=self._deserialise_list(row["style"]),
            occasion=self._deserialise_list(row["occasion"]),
            condition=row["condition"],
            warmth=row["warmth"],
            waterproof=bool(row["waterproof"]),
            price=row["price"],
            purchase_date=row["purchase_date"],
            notes=row["notes"],
            image_url=row["image_url"],
            created_at=deserialise_timestamp(row["created_at"]),
        )

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        placeholders = ", ".join("?" for _ in self._COLUMNS)
        with self._connect() as conn:
            conn.execute(
                f"INSERT INTO wardrobe_items ({', '.join(self._COLUMNS)}) VALUES ({placeholders})",
                self._item_values(item),
            )
        return item

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT * FROM wardrobe_items WHERE item_id = ?", (item_id,))
            row = cursor.fetchone()
            return self._row_to_item(row) if row else None

    def list_items(self) -> List[WardrobeItem]:
        with self._connect() as conn:
            cursor = conn.execute("SELECT * FROM wardrobe_items ORDER BY created_at DESC, rowid DESC")
            return [self._row_to_item(row) for row in cursor.fetchall()]

    def update_item(self, item_id: str, item: WardrobeItem) -> Optional[WardrobeItem]:
        current = self.get_item(item_id)
        if not current:
            return None

        replacement = replace(item, item_id=current.item_id, created_at=current.created_at)
        mutable_columns = self._COLUMNS[1:-1]
        assignments = ", ".join(f"{column} = ?" for column in mutable_columns)
        values = self._item_values(replacement)[1:-1]
        with self._connect() as conn:
            cursor = conn.execute(
                f"UPDATE wardrobe_items SET {assignments} WHERE item_id = ?",
                (*values, item_id),
            )
        # Deleted between the read above and this write.
        if cursor.rowcount == 0:
            return None
        return replacement

    def delete_item(self, item_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM wardrobe_items WHERE item_id = ?", (item_id,))
            return cursor.rowcount > 0


class InMemoryWardrobeStore(WardrobeStore):
    """Dictionary-backed store for fixtures and evaluation runs."""

    def __init__(self, items: Optional[List[WardrobeItem]] = None) -> None:
        self._items: Dict[str, WardrobeItem] = {}
        self._order: List[str] = []
        for item in items or []:
            self.create_item(item)

    def create_item(self, item: WardrobeItem) -> WardrobeItem:
        if item.item_id in self._items:
            raise ValueError(f"Duplicate item_id '{item.item_id}'")
        self._items[item.item_id] = replace(item)
        self._order.insert(0, item.item_id)
        return item

    def get_item(self, item_id: str) -> Optional[WardrobeItem]:
        item = self._items.get(item_id)
        return replace(item) if item else None

    def list_items(self) -> List[WardrobeItem]:
        """Return items newest first; equal timestamps keep the latest insert first."""

        ordered = [self._items[item_id] for item_id in self._order]
        ordered.sort(key=lambda item: item.created_at, reverse=True)
        return [replace(item) for item in ordered]

    def update_item(self, item_id: str, item: WardrobeItem) -> Optional[WardrobeItem]:
        current = self._items.get(item_id)
        if not current:
            return None
        replacement = replace(item, item_id=current.item_id, created_at=current.created_at)
        self._items[item_id] = replacement
        return replace(replacement)

    def delete_item(self, item_id: str) -> bool:
        if item_id not in self._items:
            return False
        del self._items[item_id]
        self._order.remove(item_id)
        return True


__all__ = [
    "WardrobeStore",
    "SQLiteDatabase",
    "SQLiteWardrobeStore",
    "InMemoryWardrobeStore",
    "serialise_timestamp",
    "deserialise_timestamp",
]
