"""Keyword heuristics that turn raw calendar entries into planner events."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from models.event import EventContext, as_aware
from models.taxonomy import DressCode, EventImportance, EventType

logger = logging.getLogger(__name__)

WORK_KEYWORDS = ("meeting", "conference", "interview", "presentation", "work", "office", "client")
VIDEO_KEYWORDS = ("zoom", "teams", "video", "call", "virtual", "online")
INTERVIEW_KEYWORDS = ("interview", "job")
DATE_KEYWORDS = ("dinner", "date", "restaurant", "romantic")
SPECIAL_KEYWORDS = ("wedding", "party", "celebration", "birthday")
FITNESS_KEYWORDS = ("gym", "workout", "fitness", "yoga", "run")
TRAVEL_KEYWORDS = ("travel", "flight", "vacation", "trip")

VIDEO_CALL_FLAG_KEYWORDS = VIDEO_KEYWORDS + ("meet", "webex")
CRITICAL_KEYWORDS = ("interview", "presentation", "board", "ceo", "director")
HIGH_KEYWORDS = ("meeting", "conference", "important")
LOW_KEYWORDS = ("casual", "coffee", "catch up")
LARGE_MEETING_ATTENDEES = 10

WORKDAY_START_HOUR = 9
WORKDAY_END_HOUR = 17
SHORT_EVENT_HOURS = 2.0


@dataclass(frozen=True)
class CalendarEntry:
    """An unclassified entry as read from a calendar backend."""

    event_id: str
    title: str
    start: datetime
    end: datetime
    location: Optional[str] = None
    notes: Optional[str] = None
    attendee_count: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", as_aware(self.start))
        object.__setattr__(self, "end", as_aware(self.end))

    @property
    def searchable_text(self) -> str:
        return " ".join(part.lower() for part in (self.title, self.location or "", self.notes or ""))

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


def _mentions(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def detect_event_type(entry: CalendarEntry) -> EventType:
    text = entry.searchable_text
    if _mentions(text, WORK_KEYWORDS):
        if _mentions(text, VIDEO_KEYWORDS):
            return EventType.VIDEO_CALL
        if _mentions(text, INTERVIEW_KEYWORDS):
            return EventType.JOB_INTERVIEW
        return EventType.WORK_MEETING
    if _mentions(text, DATE_KEYWORDS):
        return EventType.DATE_NIGHT
    if _mentions(text, SPECIAL_KEYWORDS):
        return EventType.SPECIAL_EVENT
    if _mentions(text, FITNESS_KEYWORDS):
        return EventType.FITNESS
    if _mentions(text, TRAVEL_KEYWORDS):
        return EventType.TRAVEL
    if WORKDAY_START_HOUR <= entry.start.hour <= WORKDAY_END_HOUR and entry.duration_hours <= SHORT_EVENT_HOURS:
        return EventType.WORK_MEETING
    return EventType.CASUAL


def determine_dress_code(entry: CalendarEntry, event_type: EventType) -> DressCode:
    title = entry.title.lower()
    if event_type == EventType.WORK_MEETING:
        return DressCode.BUSINESS if _mentions(title, ("formal", "board")) else DressCode.BUSINESS_CASUAL
    if event_type == EventType.SPECIAL_EVENT:
        return DressCode.FORMAL if "wedding" in title else DressCode.COCKTAIL
    return {
        EventType.JOB_INTERVIEW: DressCode.BUSINESS,
        EventType.VIDEO_CALL: DressCode.VIDEO_CALL_OPTIMIZED,
        EventType.DATE_NIGHT: DressCode.COCKTAIL,
        EventType.FITNESS: DressCode.ACTIVEWEAR,
        EventType.TRAVEL: DressCode.COMFORTABLE,
        EventType.CASUAL: DressCode.CASUAL,
    }[event_type]


def determine_importance(entry: CalendarEntry) -> EventImportance:
    title = entry.title.lower()
    if _mentions(title, CRITICAL_KEYWORDS):
        return EventImportance.CRITICAL
    if entry.attendee_count > LARGE_MEETING_ATTENDEES or _mentions(title, HIGH_KEYWORDS):
        return EventImportance.HIGH
    if _mentions(title, LOW_KEYWORDS):
        return EventImportance.LOW
    return EventImportance.MEDIUM


def is_video_call(entry: CalendarEntry) -> bool:
    return _mentions(entry.searchable_text, VIDEO_CALL_FLAG_KEYWORDS)


def classify_entry(entry: CalendarEntry) -> EventContext:
    """Build an :class:`EventContext` from a raw calendar entry."""

    event_type = detect_event_type(entry)
    context = EventContext(
        event_id=entry.event_id,
        title=entry.title,
        start=entry.start,
        end=entry.end,
        event_type=event_type,
        dress_code=determine_dress_code(entry, event_type),
        importance=determine_importance(entry),
        location=entry.location,
        is_video_call=is_video_call(entry),
        attendee_count=entry.attendee_count,
        notes=entry.notes,
    )
    logger.debug(
        "Classified entry %s as %s (%s, %s)",
        entry.event_id,
        context.event_type.value,
        context.dress_code.value,
        context.importance.value,
    )
    return context


def classify_entries(entries: Iterable[CalendarEntry]) -> Tuple[EventContext, ...]:
    return tuple(classify_entry(entry) for entry in sorted(entries, key=lambda entry: entry.start))


__all__ = [
    "CalendarEntry",
    "classify_entries",
    "classify_entry",
    "detect_event_type",
    "determine_dress_code",
    "determine_importance",
    "is_video_call",
]
