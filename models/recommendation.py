"""Recommendation request, outfit and feedback records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence, Tuple

from models.wardrobe_item import WardrobeItem, new_id, utc_now


@dataclass(frozen=True)
class RecommendationRequest:
    """A validated request for outfit suggestions.

    Constraints are stored and echoed back but never used for filtering.
    """

    occasion: str
    style: str
    formality: str
    comfort: int
    budget: str
    constraints: Tuple[str, ...] = ()
    request_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class Outfit:
    """A persisted outfit suggestion linked to exactly one request.

    Items are held by identifier, in the order they were chosen.
    """

    request_id: str
    item_ids: Tuple[str, ...]
    score: int
    rationale: str
    outfit_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if not self.item_ids:
            raise ValueError("An outfit needs at least one item")
        if len(set(self.item_ids)) != len(self.item_ids):
            raise ValueError(f"Outfit repeats an item: {list(self.item_ids)}")

    @classmethod
    def from_items(
        cls, request_id: str, items: Sequence[WardrobeItem], score: int, rationale: str
    ) -> "Outfit":
        return cls(
            request_id=request_id,
            item_ids=tuple(item.item_id for item in items),
            score=score,
            rationale=rationale,
        )


@dataclass(frozen=True)
class Feedback:
    """A user's rating of one outfit from one request."""

    request_id: str
    outfit_id: str
    rating: int
    selected: bool = False
    comment: Optional[str] = None
    feedback_id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)


__all__ = ["RecommendationRequest", "Outfit", "Feedback"]
