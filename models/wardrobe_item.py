"""Wardrobe item data model and helpers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.taxonomy import normalise_tags, validate_category


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def _optional_text(value: Any) -> Optional[str]:
    """Trim a free-text value, collapsing blanks to ``None``."""

    if value is None:
        return None
    trimmed = str(value).strip()
    return trimmed or None


def new_id() -> str:
    return uuid.uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | str) -> datetime:
    """Coerce an ISO string or datetime to an aware UTC datetime; naive values are taken as UTC."""

    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise ValueError(f"created_at must be a datetime or ISO string, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class WardrobeItem:
    """Represents an item in the user's wardrobe.

    Only ``category`` and ``tags`` influence recommendations; the extended
    attributes are catalog metadata carried through storage and the API.
    """

    item_id: str
    name: str
    category: str
    color: str
    tags: List[str] = field(default_factory=list)
    subcategory: Optional[str] = None
    brand: Optional[str] = None
    size: Optional[str] = None
    material: Optional[str] = None
    pattern: Optional[str] = None
    fit: Optional[str] = None
    season: List[str] = field(default_factory=list)
    style: List[str] = field(default_factory=list)
    occasion: List[str] = field(default_factory=list)
    condition: Optional[str] = None
    warmth: Optional[int] = None
    waterproof: bool = False
    price: Optional[float] = None
    purchase_date: Optional[str] = None
    notes: Optional[str] = None
    image_url: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.name = str(self.name).strip()
        if not self.name:
            raise ValueError("WardrobeItem name must not be empty")
        self.category = validate_category(self.category)
        self.color = str(self.color).strip()
        self.tags = normalise_tags(_ensure_list(self.tags))
        self.season = normalise_tags(_ensure_list(self.season))
        self.style = normalise_tags(_ensure_list(self.style))
        self.occasion = normalise_tags(_ensure_list(self.occasion))
        for attr in ("subcategory", "brand", "size", "material", "pattern", "fit", "condition", "purchase_date", "notes", "image_url"):
            setattr(self, attr, _optional_text(getattr(self, attr)))
        if self.warmth is not None:
            self.warmth = int(self.warmth)
            if not 1 <= self.warmth <= 5:
                raise ValueError(f"Warmth must be between 1 and 5, got {self.warmth}")
        if self.price is not None:
            self.price = float(self.price)
        self.waterproof = bool(self.waterproof)
        self.created_at = as_utc(self.created_at)


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from a loose payload.

    A fresh ``item_id`` is minted when the payload does not carry one.
    """

    required_fields = ["name", "category"]
    missing = [field for field in required_fields if not metadata.get(field)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    extra: Dict[str, Any] = {}
    if metadata.get("created_at"):
        extra["created_at"] = metadata["created_at"]

    return WardrobeItem(
        item_id=str(metadata.get("item_id") or new_id()),
        name=str(metadata["name"]),
        category=str(metadata["category"]),
        color=str(metadata.get("color") or ""),
        tags=_ensure_list(metadata.get("tags")),
        subcategory=metadata.get("subcategory"),
        brand=metadata.get("brand"),
        size=metadata.get("size"),
        material=metadata.get("material"),
        pattern=metadata.get("pattern"),
        fit=metadata.get("fit"),
        season=_ensure_list(metadata.get("season")),
        style=_ensure_list(metadata.get("style")),
        occasion=_ensure_list(metadata.get("occasion")),
        condition=metadata.get("condition"),
        warmth=metadata.get("warmth"),
        waterproof=bool(metadata.get("waterproof", False)),
        price=metadata.get("price"),
        purchase_date=metadata.get("purchase_date"),
        notes=metadata.get("notes"),
        image_url=metadata.get("image_url"),
        **extra,
    )


__all__ = ["WardrobeItem", "from_raw_metadata", "new_id", "utc_now", "as_utc"]
