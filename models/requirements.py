"""Outfit requirement value objects derived per recommendation call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from models.taxonomy import (
    DressCode,
    FocusArea,
    FormalityLevel,
    Level,
    StylePreference,
    WarmthLevel,
)


@dataclass(frozen=True)
class WeatherRequirements:
    """Clothing needs implied by a forecast."""

    warmth: WarmthLevel = WarmthLevel.MEDIUM
    waterproof: bool = False
    wind_resistant: bool = False
    breathable: bool = False
    light_colors: bool = False
    layers: Tuple[str, ...] = ()
    must_have_items: Tuple[str, ...] = ()
    suggested_items: Tuple[str, ...] = ()
    avoid_items: Tuple[str, ...] = ()


@dataclass(frozen=True)
class OutfitRequirements:
    """Every constraint derived from an event and its optional forecast."""

    dress_code: DressCode = DressCode.CASUAL
    formality: FormalityLevel = FormalityLevel.CASUAL
    video_call_optimized: bool = False
    focus_area: FocusArea = FocusArea.FULL_BODY
    conservative_style: bool = False
    professional: bool = False
    special_occasion: bool = False
    activewear: bool = False
    photo_ready: bool = False
    wrinkle_resistant: bool = False
    layerable: bool = False
    evening_appropriate: bool = False
    relaxed: bool = False
    comfort: Level = Level.MEDIUM
    confidence: Level = Level.MEDIUM
    attractiveness: Level = Level.MEDIUM
    memorability: Level = Level.MEDIUM
    versatility: Level = Level.MEDIUM
    functionality: Level = Level.MEDIUM
    style: StylePreference = StylePreference.ANY
    preferred_colors: Tuple[str, ...] = ()
    avoid_colors: Tuple[str, ...] = ()
    avoid_patterns: Tuple[str, ...] = ()
    must_have_items: Tuple[str, ...] = ()
    suggested_items: Tuple[str, ...] = ()
    avoid_items: Tuple[str, ...] = ()
    weather: Optional[WeatherRequirements] = None

    @property
    def all_must_have_items(self) -> Tuple[str, ...]:
        """Event and weather must-haves, deduplicated in order."""

        weather_items = self.weather.must_have_items if self.weather else ()
        return tuple(dict.fromkeys(self.must_have_items + weather_items))

    @property
    def all_avoid_items(self) -> Tuple[str, ...]:
        weather_items = self.weather.avoid_items if self.weather else ()
        return tuple(dict.fromkeys(self.avoid_items + weather_items))


__all__ = ["OutfitRequirements", "WeatherRequirements"]
