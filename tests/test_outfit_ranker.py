"""Ranking, alternatives, weather notes and fallback tests."""

import itertools
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_ranker import (
    FALLBACK_CONFIDENCE,
    FALLBACK_REASONING,
    collect_alternatives,
    fallback_outfit,
    rank_outfits,
    weather_notes,
)
from models.event import EventContext, WeatherForecast
from models.outfit import OutfitCombination
from models.taxonomy import EventType
from models.wardrobe_item import WardrobeItem

FIXED_NOW = datetime(2025, 9, 1, 8, 0)


def _clock():
    return FIXED_NOW


def _ids():
    counter = itertools.count(1)
    return lambda: f"outfit-{next(counter)}"


def _item(item_id, category, **kwargs):
    kwargs.setdefault("name", item_id)
    return WardrobeItem(item_id=item_id, category=category, **kwargs)


def _event():
    start = datetime(2025, 9, 1, 9, 0)
    return EventContext(
        event_id="evt-1",
        title="Planning session",
        start=start,
        end=start + timedelta(hours=1),
        event_type=EventType.WORK_MEETING,
        dress_code="business_casual",
    )


def test_empty_input_returns_fallback() -> None:
    (outfit,) = rank_outfits([], _event(), clock=_clock, id_factory=_ids())

    assert outfit.is_fallback
    assert outfit.confidence == FALLBACK_CONFIDENCE
    assert outfit.reasoning == (FALLBACK_REASONING,)
    assert outfit.outfit_id == "outfit-1"
    assert outfit.created_at == FIXED_NOW
    assert outfit.event_date == _event().start


def test_fallback_outfit_is_standalone() -> None:
    outfit = fallback_outfit(_event(), clock=_clock, id_factory=lambda: "fixed")

    assert outfit.outfit_id == "fixed"
    assert outfit.items == ()
    assert outfit.weather_considerations == ()


def test_outfits_are_sorted_best_first_with_stable_ties() -> None:
    casual = [_item("tee", "top"), _item("jeans", "bottom"), _item("sneakers", "shoes")]
    office = [
        _item("shirt", "top", style="business", occasions=["work"]),
        _item("chinos", "bottom", style="business", occasions=["work"]),
        _item("loafers", "shoes", style="business", occasions=["work"]),
    ]
    casual_twin = [_item("polo", "top"), _item("shorts", "bottom"), _item("sandals", "shoes")]
    combinations = [
        OutfitCombination(items=casual),
        OutfitCombination(items=office),
        OutfitCombination(items=casual_twin),
    ]

    ranked = rank_outfits(combinations, _event(), clock=_clock, id_factory=_ids())

    assert [outfit.item_ids[0] for outfit in ranked] == ["shirt", "tee", "polo"]
    assert ranked[0].score > ranked[1].score == ranked[2].score
    assert ranked[0].confidence == pytest.approx(ranked[0].score / 100)
    assert [outfit.outfit_id for outfit in ranked] == ["outfit-1", "outfit-2", "outfit-3"]
    assert all(outfit.created_at == FIXED_NOW for outfit in ranked)


def test_alternatives_come_from_lower_ranked_outfits() -> None:
    shoes = _item("shoes", "shoes")
    first = [_item("a", "top"), _item("b", "bottom"), shoes]
    second = [_item("c", "top"), _item("b", "bottom"), shoes]
    third = [_item("d", "top"), _item("e", "bottom"), shoes]

    alternatives = collect_alternatives(
        first, [OutfitCombination(items=second), OutfitCombination(items=third)]
    )

    assert [item.item_id for item in alternatives] == ["c", "d", "e"]
    assert collect_alternatives(first, [], limit=5) == []


def test_alternatives_are_capped() -> None:
    base = [_item("a", "top"), _item("b", "bottom")]
    later = [OutfitCombination(items=[_item(f"x{i}", "top"), _item(f"y{i}", "shoes")]) for i in range(4)]

    assert len(collect_alternatives(base, later)) == 5


def test_weather_notes() -> None:
    assert weather_notes(None) == []
    assert weather_notes(WeatherForecast(condition="rainy", temperature=5, precipitation_chance=61)) == [
        "Bundle up - it's cold outside!",
        "Don't forget an umbrella - high chance of rain",
    ]
    assert weather_notes(WeatherForecast(condition="sunny", temperature=26)) == [
        "Stay cool with breathable fabrics"
    ]
    assert weather_notes(WeatherForecast(condition="cloudy", temperature=18, precipitation_chance=60)) == []


def test_ranked_outfits_carry_weather_notes() -> None:
    items = [_item("tee", "top"), _item("jeans", "bottom"), _item("sneakers", "shoes")]
    weather = WeatherForecast(condition="sunny", temperature=30)

    (outfit,) = rank_outfits([OutfitCombination(items=items)], _event(), weather, clock=_clock, id_factory=_ids())

    assert outfit.weather_considerations == ("Stay cool with breathable fabrics",)
    assert outfit.alternatives == ()
