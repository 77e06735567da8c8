"""Replay the canned planner scenarios against a throwaway SQLite wardrobe."""

from __future__ import annotations

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any, Callable, Dict, List, Sequence

from evaluation.scenarios import EvaluationScenario, SCENARIOS
from logic.outfit_planner import OutfitPlanner
from models.outfit import PlannedOutfit
from models.taxonomy import Category
from models.wardrobe_item import from_raw_metadata
from planner_app.config import PlannerConfig
from tools.history_store import InMemoryHistoryStore
from tools.wardrobe_store import SQLiteWardrobeStore
from tools.weather_provider import MockWeatherProvider

Check = Callable[[Any, Sequence[PlannedOutfit]], bool]


def _has_outerwear(outfit: PlannedOutfit) -> bool:
    return any(item.category == Category.OUTERWEAR for item in outfit.items)


def _top_notes(outfits: Sequence[PlannedOutfit]) -> str:
    return " ".join(outfits[0].weather_considerations) if outfits else ""


# Expectation key -> predicate over (expected value, ranked outfits).
CHECKS: Dict[str, Check] = {
    "min_outfits": lambda expected, outfits: len(outfits) >= int(expected),
    "required_item_ids": lambda expected, outfits: bool(outfits)
    and set(expected) <= set(outfits[0].item_ids),
    "excluded_item_ids": lambda expected, outfits: all(
        set(expected).isdisjoint(outfit.item_ids) for outfit in outfits
    ),
    "min_confidence": lambda expected, outfits: bool(outfits) and outfits[0].confidence >= float(expected),
    "requires_outerwear": lambda expected, outfits: not expected
    or (bool(outfits) and all(_has_outerwear(outfit) for outfit in outfits)),
    "weather_notes": lambda expected, outfits: all(fragment in _top_notes(outfits) for fragment in expected),
    "fallback": lambda expected, outfits: bool(outfits) and outfits[0].is_fallback == bool(expected),
}


def check_expectations(expectations: Dict[str, Any], outfits: Sequence[PlannedOutfit]) -> Dict[str, bool]:
    """Evaluate every known expectation; ``min_outfits`` is always checked."""

    wanted = {"min_outfits": 1, **expectations}
    unknown = set(wanted) - set(CHECKS)
    if unknown:
        raise KeyError(f"Unknown scenario expectations: {sorted(unknown)}")
    return {name: CHECKS[name](expected, outfits) for name, expected in wanted.items()}


async def _plan(planner: OutfitPlanner, scenario: EvaluationScenario) -> List[PlannedOutfit]:
    weather = await planner.forecast_for(scenario.event)
    return await planner.suggest_outfits(scenario.event, weather, count=scenario.count)


def run_scenario(scenario: EvaluationScenario) -> Dict[str, object]:
    with TemporaryDirectory() as workdir:
        store = SQLiteWardrobeStore(Path(workdir) / "wardrobe.db")
        for raw in scenario.wardrobe_items:
            store.add_item(from_raw_metadata(raw))
        planner = OutfitPlanner(
            wardrobe_provider=store,
            history_provider=InMemoryHistoryStore(),
            weather_provider=MockWeatherProvider(scenario.weather) if scenario.weather else None,
            config=PlannerConfig(),
        )
        outfits = asyncio.run(_plan(planner, scenario))

    checks = check_expectations(scenario.expectations, outfits)
    return {
        "scenario": scenario.name,
        "passed": all(checks.values()),
        "checks": checks,
        "outfit_count": len(outfits),
        "outfits": [outfit.to_record() for outfit in outfits],
    }


def run_evaluation_suite() -> List[Dict[str, object]]:
    return [run_scenario(scenario) for scenario in SCENARIOS]


def run_smoke_checks() -> List[str]:
    return [
        f"{result['scenario']}: {'passed' if result['passed'] else 'failed'}" for result in run_evaluation_suite()
    ]


__all__ = ["CHECKS", "check_expectations", "run_evaluation_suite", "run_scenario", "run_smoke_checks"]
