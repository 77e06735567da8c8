"""Deterministic outfit assembly: cross products of category slots with pruning."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set

from models.outfit import OutfitCombination
from models.requirements import OutfitRequirements
from models.taxonomy import Category, ItemTag, WarmthLevel
from models.wardrobe_item import WardrobeItem

logger = logging.getLogger(__name__)

SEPARATES_TEMPLATE = (Category.TOP, Category.BOTTOM, Category.SHOES)
DRESS_TEMPLATE = (Category.DRESS, Category.SHOES)
OPTIONAL_CATEGORIES = (Category.OUTERWEAR, Category.ACCESSORY)
MAX_ACCESSORIES = 2

OUTERWEAR_WARM_TAGS = (ItemTag.WARM, ItemTag.THICK)
OUTERWEAR_RAIN_TAGS = (ItemTag.WATERPROOF, ItemTag.WATER_RESISTANT)


def group_by_category(items: Iterable[WardrobeItem]) -> Dict[Category, List[WardrobeItem]]:
    """Partition items by category, keeping input order within each group."""

    grouped: Dict[Category, List[WardrobeItem]] = {category: [] for category in Category}
    for item in items:
        grouped[item.category].append(item)
    return grouped


def _matches_any(item: WardrobeItem, keywords: Sequence[str]) -> bool:
    return any(item.matches_keyword(keyword) for keyword in keywords)


def outerwear_qualifies(item: WardrobeItem, requirements: OutfitRequirements) -> bool:
    weather = requirements.weather
    if weather is None:
        return True
    if weather.warmth == WarmthLevel.HIGH and not item.has_any_tag(*OUTERWEAR_WARM_TAGS):
        return False
    if weather.waterproof and not item.has_any_tag(*OUTERWEAR_RAIN_TAGS):
        return False
    return True


def select_outerwear(
    outerwear: Sequence[WardrobeItem], requirements: OutfitRequirements, mandated: Sequence[str] = ()
) -> Optional[WardrobeItem]:
    """First qualifying outerwear, preferring must-have matches; None when nothing qualifies."""

    suitable = [item for item in outerwear if outerwear_qualifies(item, requirements)]
    for item in suitable:
        if _matches_any(item, mandated):
            return item
    return suitable[0] if suitable else None


def select_accessories(accessories: Sequence[WardrobeItem], mandated: Sequence[str] = ()) -> List[WardrobeItem]:
    preferred = [item for item in accessories if _matches_any(item, mandated)]
    rest = [item for item in accessories if not _matches_any(item, mandated)]
    return (preferred + rest)[:MAX_ACCESSORIES]


def mandated_keywords(items: Sequence[WardrobeItem], requirements: OutfitRequirements) -> List[str]:
    """Must-have keywords that at least one surviving item satisfies; the rest stay advisory."""

    return [
        keyword
        for keyword in requirements.all_must_have_items
        if any(item.matches_keyword(keyword) for item in items)
    ]


def _mandated_categories(
    grouped: Dict[Category, List[WardrobeItem]], requirements: OutfitRequirements, mandated: Sequence[str]
) -> Set[Category]:
    categories: Set[Category] = set()
    if not mandated:
        return categories
    for category, members in grouped.items():
        eligible = members
        if category == Category.OUTERWEAR:
            eligible = [item for item in members if outerwear_qualifies(item, requirements)]
        if any(_matches_any(item, mandated) for item in eligible):
            categories.add(category)
    return categories


def _satisfies_mandates(
    base: Sequence[WardrobeItem], mandated_categories: Set[Category], mandated: Sequence[str]
) -> bool:
    for item in base:
        if item.category in mandated_categories and not _matches_any(item, mandated):
            return False
    return True


def _base_combinations(grouped: Dict[Category, List[WardrobeItem]]) -> Iterable[List[WardrobeItem]]:
    for top in grouped[Category.TOP]:
        for bottom in grouped[Category.BOTTOM]:
            for shoes in grouped[Category.SHOES]:
                yield [top, bottom, shoes]
    for dress in grouped[Category.DRESS]:
        for shoes in grouped[Category.SHOES]:
            yield [dress, shoes]


def generate_combinations(
    items: Iterable[WardrobeItem],
    requirements: OutfitRequirements,
    max_combinations: Optional[int] = None,
) -> List[OutfitCombination]:
    """Build candidate outfits from separates and dresses, with optional layers and accessories.

    Order is deterministic: every top x bottom x shoes base in input order, then
    every dress x shoes base. ``max_combinations`` truncates without reordering.
    """

    candidates = list(items)
    grouped = group_by_category(candidates)
    has_separates = all(grouped[category] for category in SEPARATES_TEMPLATE)
    has_dresses = all(grouped[category] for category in DRESS_TEMPLATE)
    if not (has_separates or has_dresses):
        logger.info(
            "Insufficient items for required categories: %s",
            {category.value: len(grouped[category]) for category in Category},
        )
        return []

    mandated = mandated_keywords(candidates, requirements)
    mandated_categories = _mandated_categories(grouped, requirements, mandated)
    outerwear = select_outerwear(grouped[Category.OUTERWEAR], requirements, mandated)
    accessories = select_accessories(grouped[Category.ACCESSORY], mandated)

    combinations: List[OutfitCombination] = []
    pruned = 0
    for base in _base_combinations(grouped):
        if max_combinations is not None and len(combinations) >= max_combinations:
            logger.info("Combination cap of %s reached", max_combinations)
            break
        if not _satisfies_mandates(base, mandated_categories, mandated):
            pruned += 1
            continue
        combination_items = list(base)
        if outerwear is not None:
            combination_items.append(outerwear)
        combination_items.extend(accessories)
        combination = OutfitCombination(items=combination_items)
        if combination.is_valid():
            combinations.append(combination)

    logger.info(
        "Generated %s combinations (pruned=%s, mandated=%s, outerwear=%s)",
        len(combinations),
        pruned,
        mandated,
        outerwear.item_id if outerwear else None,
    )
    return combinations


__all__ = [
    "generate_combinations",
    "group_by_category",
    "mandated_keywords",
    "outerwear_qualifies",
    "select_accessories",
    "select_outerwear",
]
