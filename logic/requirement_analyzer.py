"""Deterministic requirement derivation combining event context and weather."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from models.event import EventContext, WeatherForecast
from models.requirements import OutfitRequirements, WeatherRequirements
from models.taxonomy import (
    DressCode,
    EventImportance,
    EventType,
    FocusArea,
    FormalityLevel,
    Level,
    StylePreference,
    WarmthLevel,
)

logger = logging.getLogger(__name__)

COLD_THRESHOLD_C = 10.0
WARM_THRESHOLD_C = 20.0
RAIN_CHANCE_THRESHOLD = 60
WIND_SPEED_THRESHOLD = 20.0
EVENING_START_HOUR = 18

FORMALITY_BY_DRESS_CODE: Dict[DressCode, FormalityLevel] = {
    DressCode.FORMAL: FormalityLevel.FORMAL,
    DressCode.BUSINESS: FormalityLevel.BUSINESS,
    DressCode.BUSINESS_CASUAL: FormalityLevel.BUSINESS_CASUAL,
    DressCode.COCKTAIL: FormalityLevel.BUSINESS_CASUAL,
    DressCode.CASUAL: FormalityLevel.CASUAL,
    DressCode.COMFORTABLE: FormalityLevel.CASUAL,
    DressCode.ACTIVEWEAR: FormalityLevel.ACTIVEWEAR,
    DressCode.VIDEO_CALL_OPTIMIZED: FormalityLevel.BUSINESS_CASUAL,
}


def formality_level(dress_code: DressCode) -> FormalityLevel:
    return FORMALITY_BY_DRESS_CODE[dress_code]


def _video_call(event: EventContext) -> Dict[str, Any]:
    return {
        "video_call_optimized": True,
        "focus_area": FocusArea.UPPER_BODY,
        "avoid_patterns": ("stripes", "small patterns", "busy prints"),
        "preferred_colors": ("navy", "blue", "burgundy", "forest green"),
        "avoid_colors": ("white", "bright colors", "neon"),
    }


def _job_interview(event: EventContext) -> Dict[str, Any]:
    return {
        "conservative_style": True,
        "confidence": Level.HIGH,
        "preferred_colors": ("navy", "charcoal", "black", "white"),
        "must_have_items": ("blazer", "dress shoes"),
        "avoid_items": ("casual shoes", "jeans", "t-shirts"),
    }


def _date_night(event: EventContext) -> Dict[str, Any]:
    return {
        "attractiveness": Level.HIGH,
        "comfort": Level.MEDIUM,
        "style": StylePreference.ROMANTIC,
        "preferred_colors": ("black", "burgundy", "emerald", "navy"),
        "suggested_items": ("dress", "heels", "statement jewelry"),
    }


def _work_meeting(event: EventContext) -> Dict[str, Any]:
    overlay: Dict[str, Any] = {
        "professional": True,
        "comfort": Level.HIGH,
        "versatility": Level.HIGH,
    }
    if event.importance == EventImportance.CRITICAL:
        overlay["formality"] = FormalityLevel.BUSINESS
        overlay["must_have_items"] = ("blazer",)
    return overlay


def _special_event(event: EventContext) -> Dict[str, Any]:
    return {"special_occasion": True, "memorability": Level.HIGH, "photo_ready": True}


def _fitness(event: EventContext) -> Dict[str, Any]:
    return {
        "activewear": True,
        "comfort": Level.MAXIMUM,
        "functionality": Level.HIGH,
        "must_have_items": ("athletic wear", "sneakers"),
    }


def _travel(event: EventContext) -> Dict[str, Any]:
    return {
        "comfort": Level.MAXIMUM,
        "versatility": Level.HIGH,
        "wrinkle_resistant": True,
        "layerable": True,
    }


def _casual(event: EventContext) -> Dict[str, Any]:
    return {"comfort": Level.HIGH, "relaxed": True}


EVENT_OVERLAYS: Dict[EventType, Callable[[EventContext], Dict[str, Any]]] = {
    EventType.VIDEO_CALL: _video_call,
    EventType.JOB_INTERVIEW: _job_interview,
    EventType.DATE_NIGHT: _date_night,
    EventType.WORK_MEETING: _work_meeting,
    EventType.SPECIAL_EVENT: _special_event,
    EventType.FITNESS: _fitness,
    EventType.TRAVEL: _travel,
    EventType.CASUAL: _casual,
}


def analyze_weather_requirements(weather: WeatherForecast) -> WeatherRequirements:
    """Translate a forecast into warmth, protection and layering needs."""

    fields: Dict[str, Any] = {}
    must_have: tuple = ()
    avoid: tuple = ()

    if weather.temperature < COLD_THRESHOLD_C:
        fields["warmth"] = WarmthLevel.HIGH
        fields["layers"] = ("coat", "sweater", "scarf")
        must_have += ("warm coat", "boots")
    elif weather.temperature < WARM_THRESHOLD_C:
        fields["warmth"] = WarmthLevel.MEDIUM
        fields["layers"] = ("jacket", "cardigan")
        fields["suggested_items"] = ("light jacket", "closed shoes")
    else:
        fields["warmth"] = WarmthLevel.LOW
        fields["breathable"] = True
        fields["light_colors"] = True

    if weather.precipitation_chance > RAIN_CHANCE_THRESHOLD:
        fields["waterproof"] = True
        must_have += ("umbrella", "rain coat")
        avoid += ("suede", "light colors")

    if weather.wind_speed > WIND_SPEED_THRESHOLD:
        fields["wind_resistant"] = True
        avoid += ("loose scarves", "flowing dresses")

    return WeatherRequirements(must_have_items=must_have, avoid_items=avoid, **fields)


def analyze_requirements(event: EventContext, weather: Optional[WeatherForecast] = None) -> OutfitRequirements:
    """Reduce an event and optional forecast into a fresh :class:`OutfitRequirements`."""

    fields: Dict[str, Any] = {
        "dress_code": event.dress_code,
        "formality": formality_level(event.dress_code),
    }
    fields.update(EVENT_OVERLAYS[event.event_type](event))
    if weather is not None:
        fields["weather"] = analyze_weather_requirements(weather)
    if event.start.hour >= EVENING_START_HOUR:
        fields["evening_appropriate"] = True

    requirements = OutfitRequirements(**fields)
    logger.debug(
        "Derived requirements for %s: formality=%s must_have=%s avoid=%s weather=%s",
        event.event_type.value,
        requirements.formality.name,
        requirements.all_must_have_items,
        requirements.all_avoid_items,
        requirements.weather is not None,
    )
    return requirements


__all__ = [
    "FORMALITY_BY_DRESS_CODE",
    "analyze_requirements",
    "analyze_weather_requirements",
    "formality_level",
]
