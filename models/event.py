"""Event and weather value objects consumed by the planner."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional, Union

from models.taxonomy import DressCode, EventImportance, EventType, WeatherCondition, parse_enum


def as_aware(value: Union[date, datetime]) -> datetime:
    """Return a timezone-aware datetime; naive values and bare dates are taken as UTC.

    Aware values keep their own offset so hour-of-day rules read the wall clock
    at the event, while comparisons between any two normalised values stay valid.
    """

    if not isinstance(value, datetime):
        value = datetime.combine(value, datetime.min.time())
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class EventContext:
    """A scheduled event as supplied by a calendar provider."""

    event_id: str
    title: str
    start: datetime
    end: datetime
    event_type: EventType = EventType.CASUAL
    dress_code: DressCode = DressCode.CASUAL
    importance: EventImportance = EventImportance.MEDIUM
    location: Optional[str] = None
    is_video_call: bool = False
    attendee_count: int = 0
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_aware(self.start))
        object.__setattr__(self, "end", as_aware(self.end))
        if self.end < self.start:
            raise ValueError("Event end cannot precede its start")
        object.__setattr__(self, "event_type", parse_enum(EventType, self.event_type))
        object.__setattr__(self, "dress_code", parse_enum(DressCode, self.dress_code))
        object.__setattr__(self, "importance", parse_enum(EventImportance, self.importance))

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


@dataclass(frozen=True)
class WeatherForecast:
    """Forecast for an event's location and time."""

    condition: WeatherCondition
    temperature: float
    precipitation_chance: int = 0
    humidity: int = 0
    wind_speed: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "condition", parse_enum(WeatherCondition, self.condition))
        for name in ("precipitation_chance", "humidity"):
            value = int(getattr(self, name))
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be between 0 and 100, got {value}")
            object.__setattr__(self, name, value)


__all__ = ["EventContext", "WeatherForecast", "as_aware"]
