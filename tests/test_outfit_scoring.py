"""Scoring and rationale tests for candidate outfits."""
from __future__ import annotations

import itertools
import sys
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_scoring import count_formality_matches, is_complete_outfit, score_outfit
from logic.rationale import generate_rationale
from models.recommendation import RecommendationRequest
from models.wardrobe_item import WardrobeItem


def _item(item_id: str, category: str, tags: List[str], name: str | None = None) -> WardrobeItem:
    return WardrobeItem(
        item_id=item_id,
        name=name or f"{item_id} {category}",
        category=category,
        color="black",
        tags=tags,
    )


def _request(formality: str = "casual", comfort: int = 5) -> RecommendationRequest:
    return RecommendationRequest(
        occasion="Weekend",
        style="relaxed",
        formality=formality,
        comfort=comfort,
        budget="any",
    )


def test_single_casual_item_builds_up_to_documented_scores() -> None:
    """Formality tags, comfort and completeness add 10, 10 and 15 points."""

    tee = _item("tee", "top", ["casual", "comfortable"])
    assert score_outfit([tee], _request("casual", comfort=5)) == 60
    assert score_outfit([tee], _request("casual", comfort=7)) == 70

    outfit = [tee, _item("jeans", "bottom", []), _item("sneakers", "shoes", [])]
    assert score_outfit(outfit, _request("casual", comfort=8)) == 85


def test_score_floor_is_base_when_nothing_matches() -> None:
    """No tag overlap, low comfort and an incomplete set score exactly 50."""

    items = [_item("belt", "accessory", ["leather"]), _item("watch", "accessory", ["silver"])]
    assert score_outfit(items, _request("formal", comfort=2)) == 50


def test_score_is_clamped_at_one_hundred() -> None:
    """Many matching tags cannot push the score past 100."""

    items = [_item(f"piece-{index}", "top", ["formal", "professional"]) for index in range(12)]
    assert count_formality_matches(items, "formal") == 24
    assert score_outfit(items, _request("formal", comfort=9)) == 100


def test_every_matching_tag_occurrence_counts() -> None:
    """Matches are counted per tag per item, not capped at one per item."""

    items = [
        _item("blazer", "top", ["formal", "professional", "elegant"]),
        _item("slacks", "bottom", ["formal"]),
    ]
    assert count_formality_matches(items, "semi-formal") == 4
    assert count_formality_matches(items, "formal") == 3
    assert score_outfit(items, _request("semi-formal", comfort=3)) == 70


def test_unknown_formality_contributes_nothing() -> None:
    """A tier outside the table yields no formality bonus and no error."""

    items = [_item("tee", "top", ["casual", "formal"]), _item("jeans", "bottom", ["casual"])]
    assert score_outfit(items, _request("black-tie", comfort=3)) == 50


@pytest.mark.parametrize("comfort, expected", [(6, 50), (7, 60), (10, 60)])
def test_comfort_bonus_is_flat_and_thresholded(comfort: int, expected: int) -> None:
    """Comfort adds 10 once when at least one item is tagged comfortable."""

    items = [
        _item("hoodie", "top", ["comfortable"]),
        _item("joggers", "bottom", ["comfortable"]),
    ]
    assert score_outfit(items, _request("formal", comfort=comfort)) == expected


def test_completeness_requires_top_bottom_and_shoes() -> None:
    """Outerwear does not stand in for a top."""

    assert is_complete_outfit(
        [_item("t", "top", []), _item("b", "bottom", []), _item("s", "shoes", [])]
    )
    assert not is_complete_outfit(
        [_item("o", "outerwear", []), _item("b", "bottom", []), _item("s", "shoes", [])]
    )


def test_score_is_permutation_invariant() -> None:
    """Reordering the same items never changes the score."""

    items = [
        _item("polo", "top", ["business-casual", "versatile"]),
        _item("chinos", "bottom", ["business-casual"]),
        _item("loafers", "shoes", ["comfortable"]),
        _item("watch", "accessory", ["versatile"]),
    ]
    request = _request("business-casual", comfort=8)
    scores = {score_outfit(list(order), request) for order in itertools.permutations(items)}
    assert scores == {95}


def test_tag_matching_is_exact_for_scoring() -> None:
    """Scoring compares whole tags, unlike the substring match used for selection."""

    items = [_item("polo", "top", ["business-casual"]), _item("jeans", "bottom", ["casualwear"])]
    assert score_outfit(items, _request("casual", comfort=3)) == 50


def test_rationale_lists_every_item_name_in_order() -> None:
    """The opening clause names each item verbatim, comma separated."""

    items = [
        _item("a", "top", [], name="White Cotton T-Shirt"),
        _item("b", "bottom", [], name="Blue Jeans"),
        _item("c", "accessory", [], name="Silver Watch"),
    ]
    rationale = generate_rationale(items, _request(), 55)
    assert rationale.startswith("This outfit combines White Cotton T-Shirt, Blue Jeans, Silver Watch. ")
    for item in items:
        assert item.name in rationale


@pytest.mark.parametrize(
    "score, verdict",
    [
        (100, "Excellent match for your requirements!"),
        (80, "Excellent match for your requirements!"),
        (79, "Good match for your requirements."),
        (60, "Good match for your requirements."),
        (59, "Acceptable match for your requirements."),
        (0, "Acceptable match for your requirements."),
    ],
)
def test_rationale_verdict_thresholds(score: int, verdict: str) -> None:
    """Verdict wording changes at 80 and 60."""

    items = [_item("a", "top", []), _item("b", "bottom", [])]
    assert verdict in generate_rationale(items, _request(), score)


def test_rationale_full_text_for_complete_outfit() -> None:
    """Complete outfits get the ready-to-wear clause and the closing restatement."""

    items = [
        _item("a", "top", [], name="Grey Sweater"),
        _item("b", "bottom", [], name="Grey Slacks"),
        _item("c", "shoes", [], name="Black Oxford Shoes"),
    ]
    rationale = generate_rationale(items, _request("business-casual", comfort=8), 85)
    assert rationale == (
        "This outfit combines Grey Sweater, Grey Slacks, Black Oxford Shoes. "
        "Excellent match for your requirements! "
        "This is a complete outfit ready to wear. "
        "The business-casual style and your comfort level of 8/10 have been considered."
    )


def test_rationale_omits_complete_clause_for_partial_outfit() -> None:
    items = [_item("a", "top", []), _item("b", "shoes", [])]
    rationale = generate_rationale(items, _request("formal", comfort=3), 50)
    assert "complete outfit" not in rationale
    assert rationale.endswith("The formal style and your comfort level of 3/10 have been considered.")
