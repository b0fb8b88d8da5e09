"""Service wrapper exposing wardrobe storage operations as plain payloads."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from logic.validation import WardrobeItemInput
from models.wardrobe_item import WardrobeItem
from tools.observability import instrument_operation
from tools.wardrobe_store import SQLiteWardrobeStore, WardrobeStore, serialise_timestamp


def _default_store() -> SQLiteWardrobeStore:
    return SQLiteWardrobeStore()


def item_to_payload(item: WardrobeItem) -> Dict[str, Any]:
    """Plain dict view of an item with ``created_at`` rendered as a UTC ISO string."""

    payload = asdict(item)
    payload["created_at"] = serialise_timestamp(item.created_at)
    return payload


class WardrobeTools:
    """Thin wrapper over a WardrobeStore that validates payloads and logs calls."""

    def __init__(self, store: Optional[WardrobeStore] = None) -> None:
        self.store = store or _default_store()

    @instrument_operation("add_wardrobe_item", input_model=WardrobeItemInput)
    def add_wardrobe_item(self, payload: WardrobeItemInput) -> Dict[str, Any]:
        stored = self.store.create_item(payload.to_item())
        return item_to_payload(stored)

    @instrument_operation("get_wardrobe_item")
    def get_wardrobe_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        item = self.store.get_item(item_id)
        return item_to_payload(item) if item else None

    @instrument_operation("list_wardrobe_items")
    def list_wardrobe_items(self) -> List[Dict[str, Any]]:
        return [item_to_payload(item) for item in self.store.list_items()]

    @instrument_operation("replace_wardrobe_item", input_model=WardrobeItemInput)
    def replace_wardrobe_item(self, item_id: str, payload: WardrobeItemInput) -> Optional[Dict[str, Any]]:
        updated = self.store.update_item(item_id, payload.to_item(item_id=item_id))
        return item_to_payload(updated) if updated else None

    @instrument_operation("delete_wardrobe_item")
    def delete_wardrobe_item(self, item_id: str) -> bool:
        return self.store.delete_item(item_id)

    @instrument_operation("snapshot_wardrobe")
    def snapshot(self) -> List[WardrobeItem]:
        """Return the current items, newest first, for outfit selection."""

        return self.store.list_items()


__all__ = ["WardrobeTools", "item_to_payload"]
