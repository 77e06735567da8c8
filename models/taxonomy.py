"""Canonical vocabularies for wardrobe items, events and weather.

Every label the planner reasons about lives here as a closed enumeration so
that rule tables cannot silently drift from the data they match against.
Helper functions keep parsing of loose input consistent across models,
providers and API payloads.
"""

from __future__ import annotations

import re
from enum import Enum, IntEnum
from typing import Dict, FrozenSet, Iterable, Type, TypeVar

E = TypeVar("E", bound=Enum)

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    key = _CAMEL_BOUNDARY.sub("_", value.strip())
    return re.sub(r"[\s\-/]+", "_", key).lower()


class Category(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    DRESS = "dress"
    OUTERWEAR = "outerwear"
    SHOES = "shoes"
    ACCESSORY = "accessory"


UPPER_BODY_CATEGORIES: FrozenSet[Category] = frozenset({Category.TOP, Category.OUTERWEAR})


class OutfitStyle(str, Enum):
    CASUAL = "casual"
    BUSINESS = "business"
    BUSINESS_CASUAL = "business_casual"
    FORMAL = "formal"
    BOHEMIAN = "bohemian"
    MINIMALIST = "minimalist"
    MODERN = "modern"
    CLASSIC = "classic"
    SMART = "smart"


class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


class Occasion(str, Enum):
    WORK = "work"
    CASUAL = "casual"
    FORMAL = "formal"
    SOCIAL = "social"
    ATHLETIC = "athletic"


class BodyFit(str, Enum):
    LOOSE = "loose"
    RELAXED = "relaxed"
    FITTED = "fitted"
    TAILORED = "tailored"


class ComfortLevel(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    MAXIMUM = 4


class VersatilityLevel(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class ItemCondition(IntEnum):
    POOR = 1
    FAIR = 2
    GOOD = 3
    EXCELLENT = 4


class ItemTag(str, Enum):
    """Closed tag vocabulary driving most rule matching."""

    SOLID = "solid"
    PATTERNED = "patterned"
    STRIPED = "striped"
    BUSY = "busy"
    BRIGHT = "bright"
    WARM = "warm"
    THICK = "thick"
    INSULATED = "insulated"
    WOOL = "wool"
    CASHMERE = "cashmere"
    LIGHT = "light"
    THIN = "thin"
    SLEEVELESS = "sleeveless"
    BREATHABLE = "breathable"
    COTTON = "cotton"
    LINEN = "linen"
    WATERPROOF = "waterproof"
    WATER_RESISTANT = "water_resistant"
    SUEDE = "suede"
    SILK = "silk"
    DELICATE = "delicate"
    CONSERVATIVE = "conservative"
    PROFESSIONAL = "professional"
    CLASSIC = "classic"
    ELEGANT = "elegant"
    FLATTERING = "flattering"
    ATTRACTIVE = "attractive"
    ATHLETIC = "athletic"
    VERSATILE = "versatile"
    WRINKLE_RESISTANT = "wrinkle_resistant"
    STATEMENT = "statement"


class EventType(str, Enum):
    WORK_MEETING = "work_meeting"
    VIDEO_CALL = "video_call"
    JOB_INTERVIEW = "job_interview"
    DATE_NIGHT = "date_night"
    SPECIAL_EVENT = "special_event"
    FITNESS = "fitness"
    TRAVEL = "travel"
    CASUAL = "casual"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


class DressCode(str, Enum):
    CASUAL = "casual"
    BUSINESS_CASUAL = "business_casual"
    BUSINESS = "business"
    COCKTAIL = "cocktail"
    FORMAL = "formal"
    ACTIVEWEAR = "activewear"
    COMFORTABLE = "comfortable"
    VIDEO_CALL_OPTIMIZED = "video_call_optimized"


class EventImportance(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def display_color(self) -> str:
        return IMPORTANCE_COLORS[self]


IMPORTANCE_COLORS: Dict[EventImportance, str] = {
    EventImportance.LOW: "green",
    EventImportance.MEDIUM: "orange",
    EventImportance.HIGH: "red",
    EventImportance.CRITICAL: "purple",
}


class WeatherCondition(str, Enum):
    SUNNY = "sunny"
    PARTLY_CLOUDY = "partly_cloudy"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"
    FOGGY = "foggy"


class FormalityLevel(IntEnum):
    ACTIVEWEAR = 1
    CASUAL = 2
    BUSINESS_CASUAL = 3
    BUSINESS = 4
    FORMAL = 5


class WarmthLevel(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Level(IntEnum):
    """Intensity of a soft requirement such as comfort or memorability."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    MAXIMUM = 4


class FocusArea(str, Enum):
    UPPER_BODY = "upper_body"
    LOWER_BODY = "lower_body"
    FULL_BODY = "full_body"


class StylePreference(str, Enum):
    ANY = "any"
    ROMANTIC = "romantic"
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    EDGY = "edgy"
    BOHEMIAN = "bohemian"
    MINIMALIST = "minimalist"
    CLASSIC = "classic"


# Spelling variants only; shades such as "off-white" or "ivory" stay distinct colors.
COLOR_SPELLINGS = {"grey": "gray"}


def parse_enum(enum_type: Type[E], value: object) -> E:
    """Coerce a loose value into a member of ``enum_type``.

    Accepts members, values and names in any casing, with spaces, hyphens or
    camelCase. Raises a :class:`ValueError` for values outside the vocabulary.
    """

    if isinstance(value, enum_type):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return enum_type(value)
        except ValueError:
            pass
    key = _normalize_key(str(value))
    for member in enum_type:
        if key == str(member.value) or key == member.name.lower():
            return member
    allowed = sorted(member.name.lower() for member in enum_type)
    raise ValueError(f"Unsupported {enum_type.__name__} '{value}'. Allowed: {allowed}")


def parse_enum_set(enum_type: Type[E], values: Iterable[object] | None) -> FrozenSet[E]:
    """Parse a collection of loose values into a frozenset of members."""

    if values is None:
        return frozenset()
    if isinstance(values, (str, Enum)):
        values = [values]
    return frozenset(parse_enum(enum_type, value) for value in values)


def normalize_color_name(raw_string: str) -> str:
    """Lower-case and trim a color, folding British spellings word by word."""

    words = raw_string.strip().lower().split()
    return " ".join(COLOR_SPELLINGS.get(word, word) for word in words)


__all__ = [
    "BodyFit",
    "COLOR_SPELLINGS",
    "Category",
    "ComfortLevel",
    "DressCode",
    "EventImportance",
    "EventType",
    "FocusArea",
    "FormalityLevel",
    "IMPORTANCE_COLORS",
    "ItemCondition",
    "ItemTag",
    "Level",
    "Occasion",
    "OutfitStyle",
    "Season",
    "StylePreference",
    "UPPER_BODY_CATEGORIES",
    "VersatilityLevel",
    "WarmthLevel",
    "WeatherCondition",
    "normalize_color_name",
    "parse_enum",
    "parse_enum_set",
]
