"""Wardrobe item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, List, Optional

from models.taxonomy import (
    BodyFit,
    Category,
    ComfortLevel,
    ItemCondition,
    ItemTag,
    Occasion,
    OutfitStyle,
    Season,
    VersatilityLevel,
    normalize_color_name,
    parse_enum,
    parse_enum_set,
)


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _parse_date(value: Any) -> Optional[date]:
    parsed = _parse_datetime(value)
    return parsed.date() if parsed else None


@dataclass(frozen=True)
class WardrobeItem:
    """Represents a read-only item in the user's wardrobe."""

    item_id: str
    name: str
    category: Category
    subcategory: str = ""
    color: str = ""
    brand: str = ""
    size: str = ""
    purchase_price: float = 0.0
    purchase_date: Optional[date] = None
    tags: FrozenSet[ItemTag] = frozenset()
    style: OutfitStyle = OutfitStyle.CASUAL
    seasons: FrozenSet[Season] = frozenset()
    occasions: FrozenSet[Occasion] = frozenset()
    fit: BodyFit = BodyFit.RELAXED
    comfort: ComfortLevel = ComfortLevel.MEDIUM
    versatility: VersatilityLevel = VersatilityLevel.MEDIUM
    condition: ItemCondition = ItemCondition.GOOD
    last_worn: Optional[datetime] = None
    times_worn: int = 0
    average_rating: float = 0.0
    image_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.item_id:
            raise ValueError("WardrobeItem requires an item_id")
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "category", parse_enum(Category, self.category))
        object.__setattr__(self, "subcategory", str(self.subcategory or "").strip().lower())
        object.__setattr__(self, "color", normalize_color_name(str(self.color or "")))
        object.__setattr__(self, "tags", parse_enum_set(ItemTag, self.tags))
        object.__setattr__(self, "style", parse_enum(OutfitStyle, self.style))
        object.__setattr__(self, "seasons", parse_enum_set(Season, self.seasons))
        object.__setattr__(self, "occasions", parse_enum_set(Occasion, self.occasions))
        object.__setattr__(self, "fit", parse_enum(BodyFit, self.fit))
        object.__setattr__(self, "comfort", parse_enum(ComfortLevel, self.comfort))
        object.__setattr__(self, "versatility", parse_enum(VersatilityLevel, self.versatility))
        object.__setattr__(self, "condition", parse_enum(ItemCondition, self.condition))

    def has_any_tag(self, *tags: ItemTag) -> bool:
        return any(tag in self.tags for tag in tags)

    def matches_keyword(self, keyword: str) -> bool:
        """Case-insensitive substring match against name, category and subcategory."""

        needle = keyword.strip().lower()
        if not needle:
            return False
        haystacks = (self.name.lower(), self.category.value, self.subcategory)
        return any(needle in haystack for haystack in haystacks)

    def to_record(self) -> Dict[str, Any]:
        """Return a JSON-friendly representation, the inverse of :func:`from_raw_metadata`."""

        return {
            "item_id": self.item_id,
            "name": self.name,
            "category": self.category.value,
            "subcategory": self.subcategory,
            "color": self.color,
            "brand": self.brand,
            "size": self.size,
            "purchase_price": self.purchase_price,
            "purchase_date": self.purchase_date.isoformat() if self.purchase_date else None,
            "tags": sorted(tag.value for tag in self.tags),
            "style": self.style.value,
            "seasons": sorted(season.value for season in self.seasons),
            "occasions": sorted(occasion.value for occasion in self.occasions),
            "fit": self.fit.value,
            "comfort": int(self.comfort),
            "versatility": int(self.versatility),
            "condition": int(self.condition),
            "last_worn": self.last_worn.isoformat() if self.last_worn else None,
            "times_worn": self.times_worn,
            "average_rating": self.average_rating,
            "image_url": self.image_url,
        }


def from_raw_metadata(metadata: Dict[str, Any]) -> WardrobeItem:
    """Factory to build a :class:`WardrobeItem` from loose metadata."""

    required_fields = ["item_id", "name", "category"]
    missing = [key for key in required_fields if not metadata.get(key)]
    if missing:
        raise ValueError(f"Missing required fields for WardrobeItem: {missing}")

    optional: Dict[str, Any] = {}
    for key in ("style", "fit", "comfort", "versatility", "condition"):
        if metadata.get(key) is not None:
            optional[key] = metadata[key]

    return WardrobeItem(
        item_id=str(metadata["item_id"]),
        name=str(metadata["name"]),
        category=metadata["category"],
        subcategory=str(metadata.get("subcategory") or ""),
        color=str(metadata.get("color") or ""),
        brand=str(metadata.get("brand") or ""),
        size=str(metadata.get("size") or ""),
        purchase_price=float(metadata.get("purchase_price") or 0.0),
        purchase_date=_parse_date(metadata.get("purchase_date")),
        tags=frozenset(_ensure_list(metadata.get("tags"))),
        seasons=frozenset(_ensure_list(metadata.get("seasons"))),
        occasions=frozenset(_ensure_list(metadata.get("occasions"))),
        last_worn=_parse_datetime(metadata.get("last_worn")),
        times_worn=int(metadata.get("times_worn") or 0),
        average_rating=float(metadata.get("average_rating") or 0.0),
        image_url=metadata.get("image_url"),
        **optional,
    )


__all__ = ["WardrobeItem", "from_raw_metadata"]
