"""Lightweight evaluation harness for deterministic scenarios."""

from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Dict, List

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from models.taxonomy import has_required_categories
from models.wardrobe_item import from_raw_metadata
from stylist_app.app import WardrobeStylistApp
from stylist_app.config import AppConfig
from tools.wardrobe_store import WardrobeStore


def _seed_wardrobe(store: WardrobeStore, items: List[Dict[str, object]]) -> None:
    for item in items:
        store.create_item(from_raw_metadata(item))


def _evaluate_expectations(expectations: Dict[str, object], outfits: List[Dict[str, object]]) -> Dict[str, object]:
    checks: Dict[str, bool] = {}
    if "outfit_count" in expectations:
        checks["outfit_count"] = len(outfits) == int(expectations["outfit_count"])
    if "strategies" in expectations:
        checks["strategies"] = [outfit.get("strategy") for outfit in outfits] == expectations["strategies"]
    if "scores" in expectations:
        checks["scores"] = [outfit.get("score") for outfit in outfits] == expectations["scores"]
    if "first_outfit_complete" in expectations and outfits:
        categories = [item["category"] for item in outfits[0].get("items", [])]
        checks["first_outfit_complete"] = has_required_categories(categories) == expectations["first_outfit_complete"]
    checks["no_duplicate_items"] = all(
        len({item["item_id"] for item in outfit["items"]}) == len(outfit["items"]) for outfit in outfits
    )
    return {"passed": all(checks.values()), "checks": checks}


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    with TemporaryDirectory() as tmpdir:
        config = AppConfig(database_path=str(Path(tmpdir) / "wardrobe.db"))
        app = WardrobeStylistApp(config=config)
        _seed_wardrobe(app.wardrobe_store, scenario.wardrobe_items)

        response = app.outfit_stylist.recommend_outfits(scenario.request)
        outfits = response.get("outfits", []) if response.get("status") == "ok" else []
        evaluation = _evaluate_expectations(scenario.expectations, outfits)

    return {
        "scenario": scenario.name,
        "description": scenario.description,
        "status": response.get("status"),
        "outfit_count": len(outfits),
        "strategies": [outfit.get("strategy") for outfit in outfits],
        "scores": [outfit.get("score") for outfit in outfits],
        **evaluation,
    }


def run_evaluation_suite(scenarios: List[EvaluationScenario] | None = None) -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in scenarios or SCENARIOS]


def run_smoke_checks() -> List[str]:
    return [
        f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}"
        for result in run_evaluation_suite()
    ]


__all__ = ["run_evaluation_suite", "run_scenario", "run_smoke_checks"]


if __name__ == "__main__":
    import json

    print(json.dumps(run_evaluation_suite(), indent=2))
