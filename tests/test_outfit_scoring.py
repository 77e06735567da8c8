"""Scoring component and reasoning tests."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_scoring import (
    COMPONENT_CAPS,
    EVENT_TYPE_REASONING,
    apply_score,
    comfort_score,
    event_appropriateness_score,
    generate_reasoning,
    score_combination,
    style_coherence_score,
    weather_suitability_score,
)
from models.event import EventContext, WeatherForecast
from models.outfit import OutfitCombination
from models.taxonomy import EventType
from models.wardrobe_item import WardrobeItem


def _item(item_id, category, **kwargs):
    kwargs.setdefault("name", item_id)
    return WardrobeItem(item_id=item_id, category=category, **kwargs)


def _event(event_type=EventType.WORK_MEETING, hours=1.0):
    start = datetime(2025, 9, 1, 9, 0)
    return EventContext(
        event_id="evt",
        title="event",
        start=start,
        end=start + timedelta(hours=hours),
        event_type=event_type,
    )


def _office_outfit():
    return [
        _item("top", "top", style="business", occasions=["work"]),
        _item("bottom", "bottom", style="business", occasions=["work"]),
        _item("shoes", "shoes", style="business", occasions=["work"]),
    ]


def test_total_is_the_sum_of_components() -> None:
    breakdown = score_combination(OutfitCombination(items=_office_outfit()), _event())

    assert breakdown.components["event"] == 24
    assert breakdown.components["weather"] == 0
    assert breakdown.components["color"] == pytest.approx(10.5)
    assert breakdown.components["style"] == 15
    assert breakdown.components["comfort"] == 4
    assert breakdown.components["versatility"] == 2
    assert breakdown.components["condition"] == 3
    assert breakdown.total == pytest.approx(58.5)
    assert breakdown.reasoning == [
        "Acceptable choice with room for improvement",
        EVENT_TYPE_REASONING[EventType.WORK_MEETING],
    ]


def test_components_respect_their_caps() -> None:
    items = [
        _item(f"piece_{i}", "top", style="business", tags=["professional"], comfort=4, versatility=3, condition=4)
        for i in range(5)
    ]
    event = _event(EventType.JOB_INTERVIEW, hours=6)
    weather = WeatherForecast(condition="snowy", temperature=-5)

    breakdown = score_combination(OutfitCombination(items=items), event, weather)

    for name, cap in COMPONENT_CAPS.items():
        assert breakdown.components[name] <= cap
    assert breakdown.components["event"] == 30
    assert breakdown.components["comfort"] == 10
    assert 0 <= breakdown.total <= 100


def test_event_rules_per_type() -> None:
    video_items = [
        _item("shirt", "top"),
        _item("cardigan", "outerwear", tags=["patterned"]),
        _item("trousers", "bottom"),
    ]
    date_items = [
        _item("dress", "dress", occasions=["social"], tags=["elegant"]),
        _item("heels", "shoes"),
    ]

    assert event_appropriateness_score(video_items, _event(EventType.VIDEO_CALL)) == 18
    assert event_appropriateness_score(date_items, _event(EventType.DATE_NIGHT)) == 8
    assert event_appropriateness_score(date_items, _event(EventType.TRAVEL)) == 15


def test_weather_component_is_zero_without_forecast() -> None:
    assert weather_suitability_score(_office_outfit(), None) == 0


def test_weather_component_rewards_and_penalises() -> None:
    warm = [_item("knit", "top", tags=["wool"]), _item("tank", "top", tags=["sleeveless"])]
    cold = WeatherForecast(condition="cloudy", temperature=2)
    hot = WeatherForecast(condition="sunny", temperature=30)
    wet = WeatherForecast(condition="rainy", temperature=15, precipitation_chance=70)
    rain_items = [_item("coat", "outerwear", tags=["waterproof"]), _item("blouse", "top", tags=["silk"])]

    assert weather_suitability_score(warm, cold) == 1
    assert weather_suitability_score([_item("tee", "top", tags=["linen"])], hot) == 3
    assert weather_suitability_score(rain_items, wet) == 2
    assert weather_suitability_score([_item("thin", "top", tags=["thin"])], cold) == -2


def test_style_coherence() -> None:
    assert style_coherence_score([_item("a", "top", style="minimalist")] * 2) == 15
    assert style_coherence_score([_item("a", "top", style="business"), _item("b", "top", style="classic")]) == 10
    assert style_coherence_score([_item("a", "top", style="casual"), _item("b", "top", style="formal")]) == 5
    assert (
        style_coherence_score(
            [
                _item("a", "top", style="casual"),
                _item("b", "top", style="formal"),
                _item("c", "top", style="modern"),
            ]
        )
        == 0
    )


def test_comfort_multiplier_grows_for_long_events() -> None:
    items = [_item("a", "top", comfort=3), _item("b", "shoes", comfort=3)]

    assert comfort_score(items, _event(hours=4)) == 6
    assert comfort_score(items, _event(hours=4.5)) == 9


def test_reasoning_banner_thresholds() -> None:
    event = _event(EventType.JOB_INTERVIEW)

    assert generate_reasoning(event, 80)[0] == "Excellent match for job interview"
    assert generate_reasoning(event, 79.9)[0] == "Good fit for the occasion"
    assert generate_reasoning(event, 60)[0] == "Good fit for the occasion"
    assert generate_reasoning(event, 59.9)[0] == "Acceptable choice with room for improvement"
    assert all(EVENT_TYPE_REASONING[event_type] for event_type in EventType)


def test_apply_score_fills_the_combination() -> None:
    combination = OutfitCombination(items=_office_outfit())

    scored = apply_score(combination, _event())

    assert scored is combination
    assert combination.score == pytest.approx(58.5)
    assert combination.reasoning[0] == "Acceptable choice with room for improvement"
    assert set(combination.breakdown) == set(COMPONENT_CAPS)
