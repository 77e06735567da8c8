"""Domain model, taxonomy and color harmony tests."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models import (
    Category,
    ComfortLevel,
    DressCode,
    EventContext,
    EventImportance,
    EventType,
    ItemTag,
    OutfitCombination,
    PlannedOutfit,
    WardrobeItem,
    WeatherForecast,
    from_raw_metadata,
)
from models.color_theory import ColorHarmonyEvaluator
from models.taxonomy import normalize_color_name, parse_enum


def test_parse_enum_accepts_loose_spellings() -> None:
    assert parse_enum(EventType, "videoCall") == EventType.VIDEO_CALL
    assert parse_enum(EventType, "Video Call") == EventType.VIDEO_CALL
    assert parse_enum(DressCode, "business-casual") == DressCode.BUSINESS_CASUAL
    assert parse_enum(ItemTag, "water-resistant") == ItemTag.WATER_RESISTANT
    assert parse_enum(ComfortLevel, 4) == ComfortLevel.MAXIMUM
    assert parse_enum(ComfortLevel, "high") == ComfortLevel.HIGH


def test_parse_enum_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="Unsupported Category"):
        parse_enum(Category, "cape")


def test_color_names_fold_spelling_but_keep_shades() -> None:
    assert normalize_color_name(" Grey ") == "gray"
    assert normalize_color_name("Charcoal  Grey") == "charcoal gray"
    assert normalize_color_name("Navy Blue") == "navy blue"
    assert normalize_color_name("ivory") == "ivory"
    item = WardrobeItem(item_id="t1", name="Shirt", category="top", color="Off-White")
    assert item.color == "off-white"


def test_importance_exposes_display_color() -> None:
    assert EventImportance.CRITICAL.display_color == "purple"
    assert EventType.JOB_INTERVIEW.label == "job interview"


def test_from_raw_metadata_requires_core_fields() -> None:
    with pytest.raises(ValueError, match="Missing required fields"):
        from_raw_metadata({"item_id": "x1", "category": "top"})


def test_from_raw_metadata_parses_loose_values() -> None:
    item = from_raw_metadata(
        {
            "item_id": "b1",
            "name": "Wool Trousers",
            "category": "Bottom",
            "tags": ["Warm", "wool"],
            "occasions": "work",
            "style": "businessCasual",
            "comfort": 3,
            "purchase_date": "2024-03-01",
        }
    )
    assert item.category == Category.BOTTOM
    assert item.tags == frozenset({ItemTag.WARM, ItemTag.WOOL})
    assert item.comfort == ComfortLevel.HIGH
    assert item.purchase_date.isoformat() == "2024-03-01"
    assert from_raw_metadata(item.to_record()) == item


def test_matches_keyword_checks_name_category_and_subcategory() -> None:
    item = WardrobeItem(item_id="s1", name="Black Dress Shoes", category="shoes", subcategory="oxfords")
    assert item.matches_keyword("dress shoes")
    assert item.matches_keyword("SHOES")
    assert item.matches_keyword("oxford")
    assert not item.matches_keyword("sneakers")
    assert not item.matches_keyword("  ")


def test_event_rejects_inverted_range() -> None:
    start = datetime(2025, 1, 1, 10)
    with pytest.raises(ValueError):
        EventContext(event_id="e", title="Oops", start=start, end=start - timedelta(hours=1))
    event = EventContext(event_id="e", title="Long", start=start, end=start + timedelta(hours=5))
    assert event.duration_hours == 5


def test_weather_forecast_validates_percentages() -> None:
    with pytest.raises(ValueError, match="precipitation_chance"):
        WeatherForecast(condition="rainy", temperature=12, precipitation_chance=120)


def test_combination_validity_requires_two_distinct_items() -> None:
    top = WardrobeItem(item_id="t", name="Top", category="top")
    shoes = WardrobeItem(item_id="s", name="Shoes", category="shoes")
    assert OutfitCombination(items=[top, shoes]).is_valid()
    assert not OutfitCombination(items=[top]).is_valid()
    assert not OutfitCombination(items=[top, top]).is_valid()


def test_planned_outfit_confidence_bounds_and_record_round_trip() -> None:
    start = datetime(2025, 1, 1, 10)
    with pytest.raises(ValueError):
        PlannedOutfit(
            outfit_id="o",
            event_id="e",
            event_type="casual",
            dress_code="casual",
            items=(),
            confidence=1.2,
        )
    outfit = PlannedOutfit(
        outfit_id="o",
        event_id="e",
        event_type="date_night",
        dress_code="cocktail",
        items=(WardrobeItem(item_id="d", name="Dress", category="dress"),),
        confidence=0.8,
        reasoning=("Good fit for the occasion",),
        created_at=start,
        event_date=start,
        score=80.0,
    )
    restored = PlannedOutfit.from_record(outfit.to_record())
    assert restored == outfit
    assert not restored.is_fallback


def test_color_harmony_uses_first_two_colors() -> None:
    evaluator = ColorHarmonyEvaluator()
    assert evaluator.harmony(["navy", "white", "red"]) == 1.0
    assert evaluator.harmony(["Grey", "black"]) == 1.0
    assert evaluator.harmony(["red", "green"]) == 0.7
    assert evaluator.harmony(["black"]) == 1.0
    assert evaluator.harmony(["brown", "ivory"]) == 0.7
    assert evaluator.harmony(["", "black", "white"]) == 0.7
    assert evaluator.evaluate(["navy", "", "white"]).compared_colors == ["navy", ""]
    result = evaluator.evaluate([])
    assert result.score == 0.7
    assert result.rule_used == "neutral"
