"""Plain-language explanations for scored outfits."""

from __future__ import annotations

from typing import Sequence

from logic.outfit_scoring import is_complete_outfit
from models.recommendation import RecommendationRequest
from models.wardrobe_item import WardrobeItem

EXCELLENT_THRESHOLD = 80
GOOD_THRESHOLD = 60


def _verdict(score: int) -> str:
    if score >= EXCELLENT_THRESHOLD:
        return "Excellent match for your requirements! "
    if score >= GOOD_THRESHOLD:
        return "Good match for your requirements. "
    return "Acceptable match for your requirements. "


def generate_rationale(
    outfit_items: Sequence[WardrobeItem], request: RecommendationRequest, score: int
) -> str:
    """Assemble the rationale text shown next to an outfit suggestion."""

    item_names = ", ".join(item.name for item in outfit_items)
    rationale = f"This outfit combines {item_names}. "
    rationale += _verdict(score)
    if is_complete_outfit(outfit_items):
        rationale += "This is a complete outfit ready to wear. "
    rationale += (
        f"The {request.formality} style and your comfort level of {request.comfort}/10 have been considered."
    )
    return rationale


__all__ = ["generate_rationale"]
