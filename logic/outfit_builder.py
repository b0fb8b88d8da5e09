"""Deterministic outfit assembly from a wardrobe snapshot."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Collection, List, Optional, Sequence

from logic.outfit_scoring import score_outfit
from logic.rationale import generate_rationale
from models.recommendation import RecommendationRequest
from models.taxonomy import COMFORTABLE_TAG, HIGH_COMFORT_THRESHOLD, formality_prefix
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

MIN_OUTFIT_ITEMS = 2
MAX_OUTFIT_ITEMS = 3
MIN_OUTFITS = 2
MAX_OUTFITS = 3


@dataclass(frozen=True)
class OutfitCandidate:
    items: List[WardrobeItem]
    score: int
    rationale: str
    strategy: str

    @property
    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items]


def _first(
    items: Sequence[WardrobeItem], predicate: Callable[[WardrobeItem], bool]
) -> Optional[WardrobeItem]:
    return next((item for item in items if predicate(item)), None)


def _has_tag_containing(item: WardrobeItem, fragment: str) -> bool:
    return any(fragment in tag for tag in item.tags)


def _filled(*slots: Optional[WardrobeItem]) -> List[WardrobeItem]:
    return [item for item in slots if item is not None]


def _primary_items(all_items: Sequence[WardrobeItem], request: RecommendationRequest) -> List[WardrobeItem]:
    """First formality-tagged top and bottom plus the first pair of shoes."""

    fragment = formality_prefix(request.formality)
    return _filled(
        _first(all_items, lambda item: item.category == "top" and _has_tag_containing(item, fragment)),
        _first(all_items, lambda item: item.category == "bottom" and _has_tag_containing(item, fragment)),
        _first(all_items, lambda item: item.category == "shoes"),
    )


def _secondary_items(all_items: Sequence[WardrobeItem], excluded_ids: Collection[str]) -> List[WardrobeItem]:
    return _filled(
        *(
            _first(all_items, lambda item, cat=category: item.category == cat and item.item_id not in excluded_ids)
            for category in ("top", "bottom", "shoes")
        )
    )


def _comfort_items(all_items: Sequence[WardrobeItem]) -> List[WardrobeItem]:
    return [item for item in all_items if COMFORTABLE_TAG in item.tags][:MAX_OUTFIT_ITEMS]


def _fallback_items(all_items: Sequence[WardrobeItem]) -> List[WardrobeItem]:
    return list(all_items[:MAX_OUTFIT_ITEMS])


def select_outfits(
    all_items: Sequence[WardrobeItem], request: RecommendationRequest
) -> List[OutfitCandidate]:
    """Build up to three scored outfits from ``all_items`` in their given order.

    ``all_items`` must already be in store order (most recently created first);
    "first" always means first in that sequence. Candidates come out in
    generation order: primary, secondary, comfort, fallback. A wardrobe with
    fewer than two items yields an empty list.
    """

    candidates: List[OutfitCandidate] = []

    def record(items: List[WardrobeItem], strategy: str) -> None:
        if len(items) < MIN_OUTFIT_ITEMS:
            logger.info("Skipped %s outfit with %s items", strategy, len(items))
            return
        score = score_outfit(items, request)
        candidates.append(
            OutfitCandidate(
                items=items,
                score=score,
                rationale=generate_rationale(items, request, score),
                strategy=strategy,
            )
        )
        logger.info("Recorded %s outfit %s with score=%s", strategy, [item.item_id for item in items], score)

    primary = _primary_items(all_items, request)
    record(primary, "primary")

    record(_secondary_items(all_items, {item.item_id for item in primary}), "secondary")

    if request.comfort >= HIGH_COMFORT_THRESHOLD:
        record(_comfort_items(all_items), "comfort")

    if len(candidates) < MIN_OUTFITS:
        record(_fallback_items(all_items), "fallback")

    return candidates[:MAX_OUTFITS]


__all__ = [
    "select_outfits",
    "OutfitCandidate",
    "MIN_OUTFIT_ITEMS",
    "MIN_OUTFITS",
    "MAX_OUTFITS",
]
