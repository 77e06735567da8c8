"""Hard-constraint filtering tests."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.item_filter import filter_items, is_compatible_with_dress_code
from logic.requirement_analyzer import analyze_requirements
from models.event import EventContext, WeatherForecast
from models.requirements import OutfitRequirements
from models.taxonomy import DressCode, EventType
from models.wardrobe_item import WardrobeItem


def _item(item_id, category, **kwargs):
    kwargs.setdefault("name", item_id.replace("_", " ").title())
    return WardrobeItem(item_id=item_id, category=category, **kwargs)


def _event(event_type, dress_code):
    start = datetime(2025, 6, 2, 14, 0)
    return EventContext(
        event_id="evt",
        title="event",
        start=start,
        end=start + timedelta(hours=1),
        event_type=event_type,
        dress_code=dress_code,
    )


def test_dress_code_predicates() -> None:
    blazer = _item("blazer", "outerwear", style="business")
    jeans = _item("jeans", "bottom", occasions=["casual"])
    dress = _item("dress", "dress", occasions=["social"])
    tank = _item("tank", "top", tags=["athletic"])

    assert is_compatible_with_dress_code(blazer, DressCode.FORMAL)
    assert is_compatible_with_dress_code(blazer, DressCode.BUSINESS)
    assert not is_compatible_with_dress_code(jeans, DressCode.BUSINESS_CASUAL)
    assert is_compatible_with_dress_code(dress, DressCode.COCKTAIL)
    assert is_compatible_with_dress_code(tank, DressCode.ACTIVEWEAR)
    assert not is_compatible_with_dress_code(dress, DressCode.ACTIVEWEAR)
    assert is_compatible_with_dress_code(jeans, DressCode.COMFORTABLE)


def test_video_call_excludes_patterned_white_and_non_work_items() -> None:
    items = [
        _item("striped_shirt", "top", color="blue", occasions=["work"], tags=["striped"]),
        _item("white_shirt", "top", color="white", occasions=["work"], tags=["solid"]),
        _item("navy_shirt", "top", color="navy", occasions=["work"], tags=["solid"]),
        _item("party_top", "top", color="navy", occasions=["social"]),
    ]
    requirements = analyze_requirements(_event(EventType.VIDEO_CALL, DressCode.VIDEO_CALL_OPTIMIZED))

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["navy_shirt"]
    assert result.removed["striped_shirt"] == "busy or bright pattern on camera"
    assert result.removed["white_shirt"] == "color white is avoided"
    assert "dress code" in result.removed["party_top"]
    assert result.debug["video_call_optimized"] is True


def test_video_call_keeps_shades_near_an_avoided_color() -> None:
    items = [
        _item("off_white_shirt", "top", color="Off-White", occasions=["work"]),
        _item("white_shirt", "top", color="White", occasions=["work"]),
    ]
    requirements = analyze_requirements(_event(EventType.VIDEO_CALL, DressCode.VIDEO_CALL_OPTIMIZED))

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["off_white_shirt"]
    assert result.removed == {"white_shirt": "color white is avoided"}


def test_avoided_keywords_match_name_and_subcategory() -> None:
    items = [
        _item("denim", "bottom", name="Dark Jeans", style="business"),
        _item("tee", "top", name="Plain Top", subcategory="t-shirts", style="business"),
        _item("trousers", "bottom", name="Trousers", style="business"),
    ]
    requirements = analyze_requirements(_event(EventType.JOB_INTERVIEW, DressCode.BUSINESS))

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["trousers"]
    assert result.removed["denim"] == "matches avoided item 'jeans'"
    assert result.removed["tee"] == "matches avoided item 't-shirts'"


def test_cold_weather_keeps_only_warm_items() -> None:
    items = [
        _item("knit", "top", tags=["warm"], occasions=["casual"]),
        _item("linen_shirt", "top", tags=["linen"], occasions=["casual"]),
        _item("coat", "outerwear", tags=["insulated"], occasions=["casual"]),
    ]
    requirements = analyze_requirements(
        _event(EventType.CASUAL, DressCode.CASUAL), WeatherForecast(condition="snowy", temperature=-2)
    )

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["knit", "coat"]
    assert result.removed["linen_shirt"] == "not warm enough for cold weather"


def test_rain_excludes_suede_and_delicate() -> None:
    items = [
        _item("loafers", "shoes", name="Tan Loafers", tags=["suede"], occasions=["casual"]),
        _item("blouse", "top", tags=["delicate"], occasions=["casual"]),
        _item("boots", "shoes", tags=["waterproof"], occasions=["casual"]),
    ]
    requirements = analyze_requirements(
        _event(EventType.CASUAL, DressCode.CASUAL),
        WeatherForecast(condition="rainy", temperature=15, precipitation_chance=80),
    )

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["boots"]
    assert result.removed["blouse"] == "not suitable for rain"
    assert result.removed["loafers"] == "not suitable for rain"


def test_must_haves_are_not_enforced_at_filter_time() -> None:
    items = [_item("tee", "top", occasions=["casual"])]
    requirements = OutfitRequirements(must_have_items=("blazer",))

    result = filter_items(items, requirements)

    assert [item.item_id for item in result.items] == ["tee"]
    assert result.debug == {
        "input_count": 1,
        "kept_count": 1,
        "removed_count": 0,
        "dress_code": "casual",
        "video_call_optimized": False,
        "weather_constraints": False,
    }
