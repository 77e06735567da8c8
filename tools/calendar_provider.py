"""Calendar provider abstractions and implementations."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Iterable, List

import google.auth
from google.auth.transport.requests import Request
import requests

from logic.event_classifier import CalendarEntry, classify_entries
from models.event import EventContext, as_aware
from planner_app.logging_config import get_logger, log_event

LOGGER = get_logger(__name__)
CALENDAR_API = "https://www.googleapis.com/calendar/v3/calendars/{calendar_id}/events"
SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]


class CalendarProvider(ABC):
    """Abstract calendar provider interface."""

    @abstractmethod
    async def upcoming_events(self, start: datetime, end: datetime) -> List[EventContext]:
        """Return classified events starting within ``[start, end]`` in start order."""


class GoogleCalendarProvider(CalendarProvider):
    """Google Calendar provider with OAuth/ADC support.

    Credential and transport failures propagate; malformed entries are skipped.
    """

    def __init__(
        self,
        calendar_id: str | None = None,
        credentials_path: str | None = None,
        timeout_seconds: float = 5.0,
        max_results: int = 50,
    ) -> None:
        self.calendar_id = calendar_id or "primary"
        self.credentials_path = credentials_path
        self.timeout_seconds = timeout_seconds
        self.max_results = max_results

    def _get_credentials(self):
        if self.credentials_path:
            credentials, _ = google.auth.load_credentials_from_file(self.credentials_path, scopes=SCOPES)
        else:
            credentials, _ = google.auth.default(scopes=SCOPES)

        if not credentials.valid:
            credentials.refresh(Request())

        return credentials

    @staticmethod
    def _parse_datetime(raw: str | None) -> datetime:
        if not raw:
            raise ValueError("Missing datetime value from calendar event")
        # all-day entries carry a bare date
        return as_aware(datetime.fromisoformat(raw.replace("Z", "+00:00")))

    @staticmethod
    def _as_utc_param(value: datetime) -> str:
        return as_aware(value).astimezone(timezone.utc).isoformat().replace("+00:00", "Z")

    def _coerce_entry(self, payload: dict) -> CalendarEntry:
        start_info = payload.get("start", {})
        end_info = payload.get("end", {})
        return CalendarEntry(
            event_id=str(payload.get("id") or ""),
            title=payload.get("summary") or "Untitled event",
            start=self._parse_datetime(start_info.get("dateTime") or start_info.get("date")),
            end=self._parse_datetime(end_info.get("dateTime") or end_info.get("date")),
            location=payload.get("location"),
            notes=payload.get("description"),
            attendee_count=len(payload.get("attendees") or []),
        )

    def parse_entries(self, items: Iterable[dict]) -> List[CalendarEntry]:
        entries: List[CalendarEntry] = []
        for item in items:
            try:
                entries.append(self._coerce_entry(item))
            except ValueError as exc:
                log_event(LOGGER, logging.WARNING, "calendar_entry_skipped", event_id=item.get("id"), error=str(exc))
        return entries

    def fetch_entries(self, start: datetime, end: datetime) -> List[CalendarEntry]:
        if as_aware(start) > as_aware(end):
            raise ValueError("start must be on or before end")

        credentials = self._get_credentials()
        params = {
            "timeMin": self._as_utc_param(start),
            "timeMax": self._as_utc_param(end),
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": self.max_results,
        }
        headers = {"Authorization": f"Bearer {credentials.token}"}
        url = CALENDAR_API.format(calendar_id=self.calendar_id)

        response = requests.get(url, headers=headers, params=params, timeout=self.timeout_seconds)
        response.raise_for_status()
        entries = self.parse_entries(response.json().get("items", []))
        log_event(LOGGER, logging.INFO, "calendar_entries_fetched", count=len(entries), window_start=params["timeMin"])
        return entries

    async def upcoming_events(self, start: datetime, end: datetime) -> List[EventContext]:
        entries = await asyncio.to_thread(self.fetch_entries, start, end)
        return list(classify_entries(entries))


class MockCalendarProvider(CalendarProvider):
    """Offline deterministic calendar provider for tests."""

    def __init__(self, entries: Iterable[CalendarEntry] = ()) -> None:
        self._entries = list(entries)

    async def upcoming_events(self, start: datetime, end: datetime) -> List[EventContext]:
        start, end = as_aware(start), as_aware(end)
        selected = [entry for entry in self._entries if start <= entry.start <= end]
        return list(classify_entries(selected))


__all__ = ["CalendarProvider", "GoogleCalendarProvider", "MockCalendarProvider"]
