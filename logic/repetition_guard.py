"""Removes recently worn pieces so successive suggestions diversify."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Dict, Iterable, List, Set

from logic.item_filter import FilteringResult
from models.event import EventContext
from models.outfit import PlannedOutfit
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

REPETITION_WINDOW_DAYS = 14
REPETITION_FLOOR_RATIO = 0.3


def is_recent_similar(outfit: PlannedOutfit, event: EventContext, window_days: int = REPETITION_WINDOW_DAYS) -> bool:
    """True when ``outfit`` was planned close to ``event`` for a similar kind of event.

    Outfits without an event date never count.
    """

    if outfit.event_date is None:
        return False
    if abs(outfit.event_date - event.start) >= timedelta(days=window_days):
        return False
    return outfit.event_type == event.event_type or outfit.dress_code == event.dress_code


def recently_worn_ids(
    history: Iterable[PlannedOutfit], event: EventContext, window_days: int = REPETITION_WINDOW_DAYS
) -> Set[str]:
    worn: Set[str] = set()
    for outfit in history:
        if is_recent_similar(outfit, event, window_days):
            worn.update(outfit.item_ids)
    return worn


def avoid_repetition(
    items: Iterable[WardrobeItem],
    history: Iterable[PlannedOutfit],
    event: EventContext,
    window_days: int = REPETITION_WINDOW_DAYS,
    floor_ratio: float = REPETITION_FLOOR_RATIO,
) -> FilteringResult:
    """Drop items worn for similar recent events unless that starves the candidate pool."""

    candidates = list(items)
    worn = recently_worn_ids(history, event, window_days)
    kept: List[WardrobeItem] = [item for item in candidates if item.item_id not in worn]
    removed: Dict[str, str] = {
        item.item_id: "worn for a similar recent event" for item in candidates if item.item_id in worn
    }

    floor_engaged = len(kept) < len(candidates) * floor_ratio
    debug: Dict[str, object] = {
        "input_count": len(candidates),
        "recently_worn_count": len(worn),
        "window_days": window_days,
        "floor_ratio": floor_ratio,
        "floor_engaged": floor_engaged,
    }
    if floor_engaged:
        logger.info(
            "Repetition floor engaged: %s of %s items would remain, keeping all",
            len(kept),
            len(candidates),
        )
        debug["kept_count"] = len(candidates)
        debug["removed_count"] = 0
        return FilteringResult(items=candidates, removed={}, debug=debug)

    debug["kept_count"] = len(kept)
    debug["removed_count"] = len(removed)
    logger.info("Repetition guard removed %s recently worn items", len(removed))
    return FilteringResult(items=kept, removed=removed, debug=debug)


__all__ = [
    "REPETITION_FLOOR_RATIO",
    "REPETITION_WINDOW_DAYS",
    "avoid_repetition",
    "is_recent_similar",
    "recently_worn_ids",
]
