"""Deterministic multi-factor scoring for candidate outfits."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from statistics import mean
from typing import Callable, Dict, FrozenSet, List, Optional, Sequence

from models.color_theory import ColorHarmonyEvaluator
from models.event import EventContext, WeatherForecast
from models.outfit import OutfitCombination
from models.taxonomy import UPPER_BODY_CATEGORIES, EventType, ItemTag, Occasion, OutfitStyle
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

COMPONENT_CAPS = {
    "event": 30.0,
    "weather": 20.0,
    "color": 15.0,
    "style": 15.0,
    "comfort": 10.0,
    "versatility": 5.0,
    "condition": 5.0,
}

COLD_SCORING_THRESHOLD_C = 10.0
HOT_SCORING_THRESHOLD_C = 25.0
RAIN_SCORING_THRESHOLD = 50
LONG_EVENT_HOURS = 4.0

EXCELLENT_THRESHOLD = 80.0
GOOD_THRESHOLD = 60.0

COMPATIBLE_STYLE_PAIRS: FrozenSet[FrozenSet[OutfitStyle]] = frozenset(
    {
        frozenset({OutfitStyle.BUSINESS, OutfitStyle.BUSINESS_CASUAL}),
        frozenset({OutfitStyle.CASUAL, OutfitStyle.BOHEMIAN}),
        frozenset({OutfitStyle.MINIMALIST, OutfitStyle.MODERN}),
        frozenset({OutfitStyle.CLASSIC, OutfitStyle.BUSINESS}),
    }
)

EVENT_TYPE_REASONING: Dict[EventType, str] = {
    EventType.VIDEO_CALL: "Optimized for video calls with solid colors and professional upper body focus",
    EventType.JOB_INTERVIEW: "Professional and conservative styling for the best first impression",
    EventType.DATE_NIGHT: "Elegant and flattering combination for a memorable evening",
    EventType.WORK_MEETING: "Polished and comfortable enough for a full working session",
    EventType.SPECIAL_EVENT: "Standout pieces that photograph well for the celebration",
    EventType.FITNESS: "Functional activewear that moves with you",
    EventType.TRAVEL: "Comfortable, layerable pieces that hold up on the road",
    EventType.CASUAL: "Relaxed and easy for a laid-back day",
}

_COLD_FRIENDLY = (ItemTag.WARM, ItemTag.INSULATED, ItemTag.THICK, ItemTag.WOOL, ItemTag.CASHMERE)
_COLD_UNFRIENDLY = (ItemTag.LIGHT, ItemTag.THIN, ItemTag.SLEEVELESS)
_HEAT_FRIENDLY = (ItemTag.BREATHABLE, ItemTag.LIGHT, ItemTag.COTTON, ItemTag.LINEN)
_RAIN_PROTECTION = (ItemTag.WATERPROOF, ItemTag.WATER_RESISTANT)
_RAIN_SENSITIVE = (ItemTag.SUEDE, ItemTag.SILK, ItemTag.DELICATE)

_color_evaluator = ColorHarmonyEvaluator()


@dataclass(frozen=True)
class ScoreBreakdown:
    """Per-component points (already capped), the clamped total and reasoning lines."""

    components: Dict[str, float]
    total: float
    reasoning: List[str] = field(default_factory=list)


def _cap(component: str, raw: float) -> float:
    return min(COMPONENT_CAPS[component], raw)


def _work_meeting_points(items: Sequence[WardrobeItem]) -> float:
    points = 0.0
    for item in items:
        if Occasion.WORK in item.occasions:
            points += 5
        if item.style in (OutfitStyle.BUSINESS, OutfitStyle.BUSINESS_CASUAL):
            points += 3
    return points


def _video_call_points(items: Sequence[WardrobeItem]) -> float:
    points = 0.0
    for item in items:
        if item.category in UPPER_BODY_CATEGORIES:
            points += 8
            if ItemTag.PATTERNED not in item.tags:
                points += 2
    return points


def _date_night_points(items: Sequence[WardrobeItem]) -> float:
    points = 0.0
    for item in items:
        if Occasion.SOCIAL in item.occasions:
            points += 5
        if item.has_any_tag(ItemTag.ELEGANT, ItemTag.FLATTERING, ItemTag.ATTRACTIVE):
            points += 3
    return points


def _job_interview_points(items: Sequence[WardrobeItem]) -> float:
    points = 0.0
    for item in items:
        if item.style == OutfitStyle.BUSINESS:
            points += 6
        if item.has_any_tag(ItemTag.CONSERVATIVE, ItemTag.PROFESSIONAL, ItemTag.CLASSIC):
            points += 2
    return points


EVENT_POINT_RULES: Dict[EventType, Callable[[Sequence[WardrobeItem]], float]] = {
    EventType.WORK_MEETING: _work_meeting_points,
    EventType.VIDEO_CALL: _video_call_points,
    EventType.DATE_NIGHT: _date_night_points,
    EventType.JOB_INTERVIEW: _job_interview_points,
}
GENERAL_APPROPRIATENESS_POINTS = 15.0


def event_appropriateness_score(items: Sequence[WardrobeItem], event: EventContext) -> float:
    rule = EVENT_POINT_RULES.get(event.event_type)
    raw = rule(items) if rule else GENERAL_APPROPRIATENESS_POINTS
    return _cap("event", raw)


def weather_suitability_score(items: Sequence[WardrobeItem], weather: Optional[WeatherForecast]) -> float:
    """Temperature and rain fitness; zero without a forecast and may go negative."""

    if weather is None:
        return 0.0
    raw = 0.0
    if weather.temperature < COLD_SCORING_THRESHOLD_C:
        raw += 3 * sum(1 for item in items if item.has_any_tag(*_COLD_FRIENDLY))
        raw -= 2 * sum(1 for item in items if item.has_any_tag(*_COLD_UNFRIENDLY))
    elif weather.temperature > HOT_SCORING_THRESHOLD_C:
        raw += 3 * sum(1 for item in items if item.has_any_tag(*_HEAT_FRIENDLY))

    if weather.precipitation_chance > RAIN_SCORING_THRESHOLD:
        if any(item.has_any_tag(*_RAIN_PROTECTION) for item in items):
            raw += 5
        raw -= 3 * sum(1 for item in items if item.has_any_tag(*_RAIN_SENSITIVE))
    return _cap("weather", raw)


def color_harmony_score(items: Sequence[WardrobeItem]) -> float:
    return _cap("color", _color_evaluator.harmony([item.color for item in items]) * COMPONENT_CAPS["color"])


def style_coherence_score(items: Sequence[WardrobeItem]) -> float:
    styles = {item.style for item in items}
    if not styles:
        return 0.0
    if len(styles) == 1:
        return 15.0
    if len(styles) == 2:
        return 10.0 if frozenset(styles) in COMPATIBLE_STYLE_PAIRS else 5.0
    return 0.0


def comfort_score(items: Sequence[WardrobeItem], event: EventContext) -> float:
    if not items:
        return 0.0
    multiplier = 3 if event.duration_hours > LONG_EVENT_HOURS else 2
    return _cap("comfort", mean(int(item.comfort) for item in items) * multiplier)


def versatility_score(items: Sequence[WardrobeItem]) -> float:
    if not items:
        return 0.0
    return _cap("versatility", mean(int(item.versatility) for item in items))


def condition_score(items: Sequence[WardrobeItem]) -> float:
    if not items:
        return 0.0
    return _cap("condition", mean(int(item.condition) for item in items))


def generate_reasoning(event: EventContext, total: float) -> List[str]:
    if total >= EXCELLENT_THRESHOLD:
        banner = f"Excellent match for {event.event_type.label}"
    elif total >= GOOD_THRESHOLD:
        banner = "Good fit for the occasion"
    else:
        banner = "Acceptable choice with room for improvement"
    return [banner, EVENT_TYPE_REASONING[event.event_type]]


def score_combination(
    combination: OutfitCombination, event: EventContext, weather: Optional[WeatherForecast] = None
) -> ScoreBreakdown:
    """Score a combination in [0, 100] from six capped components plus color harmony."""

    items = combination.items
    components = {
        "event": event_appropriateness_score(items, event),
        "weather": weather_suitability_score(items, weather),
        "color": color_harmony_score(items),
        "style": style_coherence_score(items),
        "comfort": comfort_score(items, event),
        "versatility": versatility_score(items),
        "condition": condition_score(items),
    }
    total = max(0.0, min(100.0, sum(components.values())))
    logger.debug("Scored combination %s -> %.1f %s", combination.item_ids, total, components)
    return ScoreBreakdown(components=components, total=total, reasoning=generate_reasoning(event, total))


def apply_score(
    combination: OutfitCombination, event: EventContext, weather: Optional[WeatherForecast] = None
) -> OutfitCombination:
    """Fill a combination's score, reasoning and breakdown in place."""

    breakdown = score_combination(combination, event, weather)
    combination.score = breakdown.total
    combination.reasoning = list(breakdown.reasoning)
    combination.breakdown = dict(breakdown.components)
    return combination


__all__ = [
    "COMPONENT_CAPS",
    "EVENT_TYPE_REASONING",
    "ScoreBreakdown",
    "apply_score",
    "color_harmony_score",
    "comfort_score",
    "condition_score",
    "event_appropriateness_score",
    "generate_reasoning",
    "score_combination",
    "style_coherence_score",
    "versatility_score",
    "weather_suitability_score",
]
