"""Evaluation scenarios exercising formality tiers, comfort levels and sparse wardrobes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from tools.seed_wardrobe import SAMPLE_ITEMS


@dataclass
class EvaluationScenario:
    name: str
    description: str
    request: Dict[str, object]
    wardrobe_items: List[Dict[str, object]] = field(default_factory=lambda: list(SAMPLE_ITEMS))
    expectations: Dict[str, object] = field(default_factory=dict)


def _request(formality: str, comfort: int, occasion: str = "Day out", style: str = "classic") -> Dict[str, object]:
    return {
        "occasion": occasion,
        "style": style,
        "formality": formality,
        "comfort": comfort,
        "budget": "any",
        "constraints": [],
    }


SCENARIOS: List[EvaluationScenario] = [
    EvaluationScenario(
        name="casual_high_comfort",
        description="Relaxed weekend plans with comfort as a priority",
        request=_request("casual", 8, occasion="Weekend brunch", style="relaxed"),
        expectations={
            "outfit_count": 3,
            "strategies": ["primary", "secondary", "comfort"],
            "first_outfit_complete": True,
            "scores": [80, 85, 85],
        },
    ),
    EvaluationScenario(
        name="business_casual_office",
        description="Office day where the formality tags line up perfectly",
        request=_request("business-casual", 7, occasion="Office", style="smart"),
        expectations={
            "outfit_count": 3,
            "strategies": ["primary", "secondary", "comfort"],
            "first_outfit_complete": True,
            "scores": [100, 75, 70],
        },
    ),
    EvaluationScenario(
        name="formal_low_comfort",
        description="Formal dinner where no top carries a formal tag",
        request=_request("formal", 3, occasion="Gala dinner", style="elegant"),
        expectations={
            "outfit_count": 2,
            "strategies": ["primary", "secondary"],
            "first_outfit_complete": False,
            "scores": [60, 75],
        },
    ),
    EvaluationScenario(
        name="semi_formal_prefix",
        description="Semi-formal matches no tag prefix so the primary outfit stays incomplete",
        request=_request("semi-formal", 5, occasion="Wedding", style="elegant"),
        expectations={
            "outfit_count": 2,
            "strategies": ["secondary", "fallback"],
            "first_outfit_complete": True,
            "scores": [85, 65],
        },
    ),
    EvaluationScenario(
        name="single_item_wardrobe",
        description="A wardrobe too small to build any outfit",
        request=_request("casual", 9),
        wardrobe_items=[SAMPLE_ITEMS[0]],
        expectations={"outfit_count": 0, "strategies": []},
    ),
]


__all__ = ["EvaluationScenario", "SCENARIOS"]
