"""Pydantic schemas for validating HTTP payloads and converting them to domain objects."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from logic.event_classifier import CalendarEntry, classify_entry
from models.event import EventContext, WeatherForecast, as_aware
from models.outfit import PlannedOutfit
from models.taxonomy import (
    Category,
    DressCode,
    EventImportance,
    EventType,
    ItemTag,
    Occasion,
    OutfitStyle,
    WeatherCondition,
    parse_enum,
)
from models.wardrobe_item import WardrobeItem, from_raw_metadata


def _lenient(enum_type, value: Any) -> Any:
    if value is None:
        return None
    return parse_enum(enum_type, value)


class WardrobeItemPayload(BaseModel):
    """Loose wardrobe item as accepted over HTTP."""

    item_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    category: Category
    subcategory: str = ""
    color: str = ""
    brand: str = ""
    tags: List[ItemTag] = []
    style: OutfitStyle = OutfitStyle.CASUAL
    occasions: List[Occasion] = []
    comfort: int = Field(default=2, ge=1, le=4)
    versatility: int = Field(default=2, ge=1, le=3)
    condition: int = Field(default=3, ge=1, le=4)

    @field_validator("category", mode="before")
    @classmethod
    def parse_category(cls, value: Any) -> Any:
        return _lenient(Category, value)

    @field_validator("style", mode="before")
    @classmethod
    def parse_style(cls, value: Any) -> Any:
        return _lenient(OutfitStyle, value)

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value: Any) -> List[ItemTag]:
        return [parse_enum(ItemTag, tag) for tag in value or []]

    @field_validator("occasions", mode="before")
    @classmethod
    def parse_occasions(cls, value: Any) -> List[Occasion]:
        return [parse_enum(Occasion, occasion) for occasion in value or []]

    def to_item(self) -> WardrobeItem:
        return from_raw_metadata(self.model_dump(mode="json"))


class EventPayload(BaseModel):
    """Event as accepted over HTTP; missing classification is inferred from the text."""

    event_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    start: datetime
    end: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    attendee_count: int = Field(default=0, ge=0)
    event_type: Optional[EventType] = None
    dress_code: Optional[DressCode] = None
    importance: Optional[EventImportance] = None
    is_video_call: Optional[bool] = None

    @field_validator("event_type", mode="before")
    @classmethod
    def parse_event_type(cls, value: Any) -> Any:
        return _lenient(EventType, value)

    @field_validator("dress_code", mode="before")
    @classmethod
    def parse_dress_code(cls, value: Any) -> Any:
        return _lenient(DressCode, value)

    @field_validator("importance", mode="before")
    @classmethod
    def parse_importance(cls, value: Any) -> Any:
        return _lenient(EventImportance, value)

    @field_validator("start", "end", mode="after")
    @classmethod
    def normalise_timezone(cls, value: datetime) -> datetime:
        return as_aware(value)

    @model_validator(mode="after")
    def validate_range(self) -> "EventPayload":
        if self.end < self.start:
            raise ValueError("end cannot precede start")
        return self

    def to_event(self) -> EventContext:
        inferred = classify_entry(
            CalendarEntry(
                event_id=self.event_id,
                title=self.title,
                start=self.start,
                end=self.end,
                location=self.location,
                notes=self.notes,
                attendee_count=self.attendee_count,
            )
        )
        overrides: Dict[str, Any] = {
            key: value
            for key, value in (
                ("event_type", self.event_type),
                ("dress_code", self.dress_code),
                ("importance", self.importance),
                ("is_video_call", self.is_video_call),
            )
            if value is not None
        }
        return replace(inferred, **overrides)


class WeatherPayload(BaseModel):
    """Forecast supplied by the caller instead of a weather provider."""

    condition: WeatherCondition = WeatherCondition.SUNNY
    temperature: float
    precipitation_chance: int = Field(default=0, ge=0, le=100)
    humidity: int = Field(default=0, ge=0, le=100)
    wind_speed: float = Field(default=0.0, ge=0.0)

    @field_validator("condition", mode="before")
    @classmethod
    def parse_condition(cls, value: Any) -> Any:
        return _lenient(WeatherCondition, value)

    def to_forecast(self) -> WeatherForecast:
        return WeatherForecast(**self.model_dump())


class SuggestOutfitsRequest(BaseModel):
    """Request payload for ranked outfit suggestions.

    ``wardrobe`` replaces the stored wardrobe for this request only.
    ``use_forecast`` asks the configured weather provider when ``weather`` is absent.
    """

    event: EventPayload
    weather: Optional[WeatherPayload] = None
    wardrobe: Optional[List[WardrobeItemPayload]] = None
    count: int = Field(default=1, ge=1, le=10)
    use_forecast: bool = False


class PlannedOutfitView(BaseModel):
    """Serialised :class:`PlannedOutfit`."""

    outfit_id: str
    event_id: str
    event_type: EventType
    dress_code: DressCode
    item_ids: List[str]
    items: List[Dict[str, Any]]
    confidence: float = Field(ge=0.0, le=1.0)
    score: float
    reasoning: List[str]
    weather_considerations: List[str]
    alternative_ids: List[str]
    is_fallback: bool

    @classmethod
    def from_outfit(cls, outfit: PlannedOutfit) -> "PlannedOutfitView":
        return cls(
            outfit_id=outfit.outfit_id,
            event_id=outfit.event_id,
            event_type=outfit.event_type,
            dress_code=outfit.dress_code,
            item_ids=outfit.item_ids,
            items=[item.to_record() for item in outfit.items],
            confidence=outfit.confidence,
            score=outfit.score,
            reasoning=list(outfit.reasoning),
            weather_considerations=list(outfit.weather_considerations),
            alternative_ids=[item.item_id for item in outfit.alternatives],
            is_fallback=outfit.is_fallback,
        )


class SuggestOutfitsResponse(BaseModel):
    status: Literal["ok", "needs_more_items"]
    event: Dict[str, Any]
    outfits: List[PlannedOutfitView]


class ValidationResult(BaseModel):
    """Wrapper returned when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = [
        {"loc": [str(part) for part in error["loc"]], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "EventPayload",
    "PlannedOutfitView",
    "SuggestOutfitsRequest",
    "SuggestOutfitsResponse",
    "ValidationResult",
    "WardrobeItemPayload",
    "WeatherPayload",
    "validation_failure",
]
