"""Deterministic filtering of wardrobe items against outfit requirements."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from models.requirements import OutfitRequirements
from models.taxonomy import (
    UPPER_BODY_CATEGORIES,
    DressCode,
    ItemTag,
    Occasion,
    OutfitStyle,
    WarmthLevel,
)
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

VIDEO_CALL_EXCLUDED_TAGS = (ItemTag.STRIPED, ItemTag.PATTERNED, ItemTag.BUSY, ItemTag.BRIGHT)
WARM_TAGS = (ItemTag.WARM, ItemTag.THICK, ItemTag.INSULATED)
RAIN_EXCLUDED_TAGS = (ItemTag.SUEDE, ItemTag.DELICATE)


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[WardrobeItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def _formal(item: WardrobeItem) -> bool:
    return Occasion.FORMAL in item.occasions or item.style == OutfitStyle.BUSINESS


def _business(item: WardrobeItem) -> bool:
    return Occasion.WORK in item.occasions or item.style == OutfitStyle.BUSINESS


def _business_casual(item: WardrobeItem) -> bool:
    return Occasion.WORK in item.occasions or item.style in {
        OutfitStyle.BUSINESS,
        OutfitStyle.BUSINESS_CASUAL,
        OutfitStyle.SMART,
    }


def _cocktail(item: WardrobeItem) -> bool:
    return bool({Occasion.SOCIAL, Occasion.FORMAL} & item.occasions)


def _casual(item: WardrobeItem) -> bool:
    return Occasion.CASUAL in item.occasions or item.style in {
        OutfitStyle.CASUAL,
        OutfitStyle.BOHEMIAN,
        OutfitStyle.MINIMALIST,
    }


def _activewear(item: WardrobeItem) -> bool:
    return Occasion.ATHLETIC in item.occasions or ItemTag.ATHLETIC in item.tags


def _video_call_optimized(item: WardrobeItem) -> bool:
    return Occasion.WORK in item.occasions and ItemTag.PATTERNED not in item.tags


DRESS_CODE_RULES: Dict[DressCode, Callable[[WardrobeItem], bool]] = {
    DressCode.FORMAL: _formal,
    DressCode.BUSINESS: _business,
    DressCode.BUSINESS_CASUAL: _business_casual,
    DressCode.COCKTAIL: _cocktail,
    DressCode.CASUAL: _casual,
    DressCode.COMFORTABLE: _casual,
    DressCode.ACTIVEWEAR: _activewear,
    DressCode.VIDEO_CALL_OPTIMIZED: _video_call_optimized,
}


def is_compatible_with_dress_code(item: WardrobeItem, dress_code: DressCode) -> bool:
    return DRESS_CODE_RULES[dress_code](item)


def _matching_keyword(item: WardrobeItem, keywords: Iterable[str]) -> Optional[str]:
    for keyword in keywords:
        if item.matches_keyword(keyword):
            return keyword
    return None


def _rejection_reason(item: WardrobeItem, requirements: OutfitRequirements) -> Optional[str]:
    if not is_compatible_with_dress_code(item, requirements.dress_code):
        return f"not compatible with {requirements.dress_code.value} dress code"

    avoided = _matching_keyword(item, requirements.all_avoid_items)
    if avoided:
        return f"matches avoided item '{avoided}'"

    avoid_colors = {color.lower() for color in requirements.avoid_colors}
    if item.color and item.color in avoid_colors:
        return f"color {item.color} is avoided"

    if requirements.video_call_optimized:
        if item.has_any_tag(*VIDEO_CALL_EXCLUDED_TAGS):
            return "busy or bright pattern on camera"
        if item.category in UPPER_BODY_CATEGORIES:
            if not (ItemTag.SOLID in item.tags or ItemTag.PATTERNED not in item.tags):
                return "upper body piece is not solid"

    weather = requirements.weather
    if weather is not None:
        if weather.warmth == WarmthLevel.HIGH and not item.has_any_tag(*WARM_TAGS):
            return "not warm enough for cold weather"
        if weather.waterproof and item.has_any_tag(*RAIN_EXCLUDED_TAGS):
            return "not suitable for rain"
    return None


def filter_items(items: Iterable[WardrobeItem], requirements: OutfitRequirements) -> FilteringResult:
    """Keep items satisfying every hard constraint; must-haves stay advisory here."""

    candidates = list(items)
    removed: Dict[str, str] = {}
    kept: List[WardrobeItem] = []
    for item in candidates:
        reason = _rejection_reason(item, requirements)
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "input_count": len(candidates),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "dress_code": requirements.dress_code.value,
        "video_call_optimized": requirements.video_call_optimized,
        "weather_constraints": requirements.weather is not None,
    }
    logger.info("Filtered wardrobe %s -> %s items", len(candidates), len(kept))
    return FilteringResult(items=kept, removed=removed, debug=debug)


__all__ = ["DRESS_CODE_RULES", "FilteringResult", "filter_items", "is_compatible_with_dress_code"]
