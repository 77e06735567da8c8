"""Calendar entry classification tests."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.event_classifier import (
    CalendarEntry,
    classify_entries,
    classify_entry,
    detect_event_type,
    determine_dress_code,
    determine_importance,
)
from models.taxonomy import DressCode, EventImportance, EventType


def _entry(title, hour=20, hours=1.0, day=5, **kwargs):
    start = datetime(2025, 4, day, hour, 0)
    return CalendarEntry(
        event_id=f"{title}-{day}",
        title=title,
        start=start,
        end=start + timedelta(hours=hours),
        **kwargs,
    )


def test_work_keywords_split_into_video_interview_and_meeting() -> None:
    assert detect_event_type(_entry("Client sync on Zoom")) == EventType.VIDEO_CALL
    assert detect_event_type(_entry("Job interview with Acme")) == EventType.JOB_INTERVIEW
    assert detect_event_type(_entry("Quarterly presentation")) == EventType.WORK_MEETING


def test_location_and_notes_are_searched() -> None:
    assert detect_event_type(_entry("Catch up", location="Downtown office")) == EventType.WORK_MEETING
    assert detect_event_type(_entry("Anna", notes="Birthday party at home")) == EventType.SPECIAL_EVENT


def test_leisure_keywords() -> None:
    assert detect_event_type(_entry("Dinner with Sam")) == EventType.DATE_NIGHT
    assert detect_event_type(_entry("Morning yoga", hour=7)) == EventType.FITNESS
    assert detect_event_type(_entry("Flight to Lisbon", hour=6)) == EventType.TRAVEL


def test_short_daytime_entries_default_to_work() -> None:
    assert detect_event_type(_entry("Sync", hour=11, hours=0.5)) == EventType.WORK_MEETING
    assert detect_event_type(_entry("Sync", hour=11, hours=3)) == EventType.CASUAL
    assert detect_event_type(_entry("Sync", hour=19)) == EventType.CASUAL


def test_dress_codes() -> None:
    board = _entry("Board meeting")
    wedding = _entry("Wedding of Alex")
    party = _entry("Office party")

    assert determine_dress_code(board, EventType.WORK_MEETING) == DressCode.BUSINESS
    assert determine_dress_code(_entry("Team meeting"), EventType.WORK_MEETING) == DressCode.BUSINESS_CASUAL
    assert determine_dress_code(wedding, EventType.SPECIAL_EVENT) == DressCode.FORMAL
    assert determine_dress_code(party, EventType.SPECIAL_EVENT) == DressCode.COCKTAIL
    assert determine_dress_code(_entry("Zoom"), EventType.VIDEO_CALL) == DressCode.VIDEO_CALL_OPTIMIZED


def test_importance_rules() -> None:
    assert determine_importance(_entry("CEO presentation")) == EventImportance.CRITICAL
    assert determine_importance(_entry("Kickoff", attendee_count=11)) == EventImportance.HIGH
    assert determine_importance(_entry("Kickoff", attendee_count=10)) == EventImportance.MEDIUM
    assert determine_importance(_entry("Coffee with Jo")) == EventImportance.LOW


def test_classify_entry_builds_event_context() -> None:
    event = classify_entry(_entry("Job interview on Teams", hour=10, location="Remote", attendee_count=3))

    assert event.event_type == EventType.VIDEO_CALL
    assert event.dress_code == DressCode.VIDEO_CALL_OPTIMIZED
    assert event.importance == EventImportance.CRITICAL
    assert event.is_video_call
    assert event.location == "Remote"
    assert event.attendee_count == 3


def test_classify_entries_sorts_by_start() -> None:
    later = _entry("Dinner", day=6)
    earlier = _entry("Gym", hour=7, day=6)

    events = classify_entries([later, earlier])

    assert [event.event_id for event in events] == [earlier.event_id, later.event_id]
    assert isinstance(events, tuple)
