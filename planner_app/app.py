"""Planner app bootstrap: builds providers from config and wires the planner."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from logic.outfit_planner import OutfitPlanner
from models.event import EventContext
from models.outfit import PlannedOutfit
from planner_app.config import PlannerConfig
from planner_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.calendar_provider import CalendarProvider, GoogleCalendarProvider
from tools.history_store import HistoryProvider, InMemoryHistoryStore, SQLiteHistoryStore
from tools.observability import instrument_provider
from tools.wardrobe_store import InMemoryWardrobeStore, SQLiteWardrobeStore, WardrobeStore
from tools.weather_provider import OpenWeatherProvider, WeatherProvider

LOGGER = get_logger(__name__)
DEFAULT_PLANNING_HORIZON = timedelta(days=7)


class OutfitPlannerApp:
    """Wires together stores, providers and the outfit planner."""

    def __init__(
        self,
        config: PlannerConfig | None = None,
        wardrobe_store: WardrobeStore | None = None,
        history_provider: HistoryProvider | None = None,
        weather_provider: WeatherProvider | None = None,
        calendar_provider: CalendarProvider | None = None,
    ) -> None:
        self.config = config or PlannerConfig.from_env()
        configure_logging()

        self.wardrobe_store = wardrobe_store or self._build_wardrobe_store()
        self.history_provider = history_provider or self._build_history_provider()
        self.weather_provider = weather_provider or OpenWeatherProvider(api_key=self.config.weather_api_key)
        self.calendar_provider = calendar_provider or GoogleCalendarProvider(
            calendar_id=self.config.calendar_id,
            credentials_path=self.config.google_credentials_path,
        )
        self.planner = self.build_planner()
        log_event(
            LOGGER,
            logging.INFO,
            "planner_app_ready",
            environment=self.config.environment or "local",
            wardrobe_store=type(self.wardrobe_store).__name__,
            history_provider=type(self.history_provider).__name__,
        )

    def _build_wardrobe_store(self) -> WardrobeStore:
        if self.config.wardrobe_db_path:
            return SQLiteWardrobeStore(self.config.wardrobe_db_path)
        return InMemoryWardrobeStore()

    def _build_history_provider(self) -> HistoryProvider:
        if self.config.history_db_path:
            return SQLiteHistoryStore(self.config.history_db_path)
        return InMemoryHistoryStore()

    def build_planner(self, wardrobe_store: WardrobeStore | None = None) -> OutfitPlanner:
        """Planner over the app's providers, optionally with a substitute wardrobe."""

        return OutfitPlanner(
            wardrobe_provider=wardrobe_store or self.wardrobe_store,
            history_provider=self.history_provider,
            weather_provider=self.weather_provider,
            config=self.config,
        )

    @instrument_provider("calendar")
    async def _upcoming_events(self, start: datetime, end: datetime) -> List[EventContext]:
        return await self.calendar_provider.upcoming_events(start, end)

    async def plan_week(
        self, start: Optional[datetime] = None, horizon: timedelta = DEFAULT_PLANNING_HORIZON
    ) -> List[PlannedOutfit]:
        """Fetch upcoming calendar events and plan one recorded outfit for each."""

        window_start = start or datetime.now(timezone.utc)
        with operation_context("plan_week", logger=LOGGER, horizon_days=horizon.days):
            events = await self._upcoming_events(window_start, window_start + horizon)
            return await self.planner.plan_upcoming(events)


__all__ = ["OutfitPlannerApp"]
