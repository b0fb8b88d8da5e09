"""Deterministic scoring for candidate outfits."""

from __future__ import annotations

from typing import Sequence

from models.recommendation import RecommendationRequest
from models.taxonomy import (
    COMFORTABLE_TAG,
    HIGH_COMFORT_THRESHOLD,
    formality_target_tags,
    has_required_categories,
)
from models.wardrobe_item import WardrobeItem

BASE_SCORE = 50
WEIGHTS = {
    "formality_tag": 5,
    "comfort": 10,
    "completeness": 15,
}
MIN_SCORE = 0
MAX_SCORE = 100


def _clamp(value: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def count_formality_matches(outfit_items: Sequence[WardrobeItem], formality: str) -> int:
    """Count every tag occurrence, across all items, that the formality tier rewards."""

    targets = set(formality_target_tags(formality))
    return sum(1 for item in outfit_items for tag in item.tags if tag in targets)


def is_complete_outfit(outfit_items: Sequence[WardrobeItem]) -> bool:
    return has_required_categories(item.category for item in outfit_items)


def score_outfit(outfit_items: Sequence[WardrobeItem], request: RecommendationRequest) -> int:
    """Score an outfit between 0 and 100.

    The score starts at 50 and adds 5 per formality-tag match, 10 once when a
    high comfort level meets a ``comfortable`` item and 15 once when the outfit
    has a top, a bottom and shoes. Ordering of ``outfit_items`` does not matter.
    """

    score = BASE_SCORE
    score += count_formality_matches(outfit_items, request.formality) * WEIGHTS["formality_tag"]

    if request.comfort >= HIGH_COMFORT_THRESHOLD and any(
        COMFORTABLE_TAG in item.tags for item in outfit_items
    ):
        score += WEIGHTS["comfort"]

    if is_complete_outfit(outfit_items):
        score += WEIGHTS["completeness"]

    return _clamp(score)


__all__ = ["score_outfit", "count_formality_matches", "is_complete_outfit", "BASE_SCORE", "WEIGHTS"]
