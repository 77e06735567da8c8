"""Turns scored combinations into ranked :class:`PlannedOutfit` records."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from logic.outfit_scoring import apply_score
from models.event import EventContext, WeatherForecast
from models.outfit import OutfitCombination, PlannedOutfit
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

FALLBACK_CONFIDENCE = 0.3
FALLBACK_REASONING = "No suitable combinations found - consider adding more wardrobe pieces"
MAX_ALTERNATIVES = 5

COLD_NOTE_THRESHOLD_C = 10.0
HOT_NOTE_THRESHOLD_C = 25.0
UMBRELLA_NOTE_THRESHOLD = 60

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]


def default_id_factory() -> str:
    return str(uuid.uuid4())


def weather_notes(weather: Optional[WeatherForecast]) -> List[str]:
    if weather is None:
        return []
    notes: List[str] = []
    if weather.temperature < COLD_NOTE_THRESHOLD_C:
        notes.append("Bundle up - it's cold outside!")
    elif weather.temperature > HOT_NOTE_THRESHOLD_C:
        notes.append("Stay cool with breathable fabrics")
    if weather.precipitation_chance > UMBRELLA_NOTE_THRESHOLD:
        notes.append("Don't forget an umbrella - high chance of rain")
    return notes


def collect_alternatives(
    outfit_items: Sequence[WardrobeItem], later: Sequence[OutfitCombination], limit: int = MAX_ALTERNATIVES
) -> List[WardrobeItem]:
    """Distinct pieces from lower-ranked combinations that the outfit does not already use."""

    seen = {item.item_id for item in outfit_items}
    alternatives: List[WardrobeItem] = []
    for combination in later:
        for item in combination.items:
            if item.item_id in seen:
                continue
            seen.add(item.item_id)
            alternatives.append(item)
            if len(alternatives) >= limit:
                return alternatives
    return alternatives


def fallback_outfit(
    event: EventContext, clock: Clock = datetime.now, id_factory: IdFactory = default_id_factory
) -> PlannedOutfit:
    """Terminal result when nothing could be assembled; callers should prompt for more items."""

    logger.info("No combinations for event type %s, returning fallback outfit", event.event_type.value)
    return PlannedOutfit(
        outfit_id=id_factory(),
        event_id=event.event_id,
        event_type=event.event_type,
        dress_code=event.dress_code,
        items=(),
        confidence=FALLBACK_CONFIDENCE,
        reasoning=(FALLBACK_REASONING,),
        weather_considerations=(),
        alternatives=(),
        created_at=clock(),
        event_date=event.start,
    )


def rank_outfits(
    combinations: Sequence[OutfitCombination],
    event: EventContext,
    weather: Optional[WeatherForecast] = None,
    clock: Clock = datetime.now,
    id_factory: IdFactory = default_id_factory,
) -> List[PlannedOutfit]:
    """Score every combination and return planned outfits, best first.

    The sort is stable so equal scores keep generator order. An empty input
    yields a single fallback outfit.
    """

    if not combinations:
        return [fallback_outfit(event, clock=clock, id_factory=id_factory)]

    scored = [apply_score(combination, event, weather) for combination in combinations]
    ranked = sorted(scored, key=lambda combination: combination.score, reverse=True)
    notes = tuple(weather_notes(weather))
    created_at = clock()

    planned: List[PlannedOutfit] = []
    for position, combination in enumerate(ranked):
        planned.append(
            PlannedOutfit(
                outfit_id=id_factory(),
                event_id=event.event_id,
                event_type=event.event_type,
                dress_code=event.dress_code,
                items=tuple(combination.items),
                confidence=min(combination.score / 100, 1.0),
                reasoning=tuple(combination.reasoning),
                weather_considerations=notes,
                alternatives=tuple(collect_alternatives(combination.items, ranked[position + 1 :])),
                created_at=created_at,
                event_date=event.start,
                score=combination.score,
            )
        )
    logger.info(
        "Ranked %s outfits; top score %.1f",
        len(planned),
        planned[0].score,
    )
    return planned


__all__ = [
    "FALLBACK_CONFIDENCE",
    "FALLBACK_REASONING",
    "MAX_ALTERNATIVES",
    "collect_alternatives",
    "default_id_factory",
    "fallback_outfit",
    "rank_outfits",
    "weather_notes",
]
