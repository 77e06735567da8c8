"""Async orchestration of the recommendation pipeline around injected providers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from logic.combination_generator import generate_combinations
from logic.item_filter import filter_items
from logic.outfit_ranker import Clock, IdFactory, default_id_factory, rank_outfits
from logic.repetition_guard import avoid_repetition
from logic.requirement_analyzer import analyze_requirements
from models.event import EventContext, WeatherForecast
from models.outfit import PlannedOutfit
from models.wardrobe_item import WardrobeItem
from planner_app.config import PlannerConfig
from planner_app.logging_config import get_logger, log_event, operation_context
from tools.history_store import HistoryProvider
from tools.observability import instrument_provider
from tools.wardrobe_store import WardrobeProvider
from tools.weather_provider import WeatherProvider

LOGGER = get_logger(__name__)


class OutfitPlanner:
    """Runs requirement analysis, filtering, generation, scoring and ranking for an event.

    Providers are awaited before the synchronous pipeline runs; each call works
    on its own snapshot so concurrent calls share no mutable state. Provider
    failures surface as :class:`tools.errors.ProviderUnavailableError`.
    """

    def __init__(
        self,
        wardrobe_provider: WardrobeProvider,
        history_provider: Optional[HistoryProvider] = None,
        weather_provider: Optional[WeatherProvider] = None,
        config: Optional[PlannerConfig] = None,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
    ) -> None:
        self.wardrobe_provider = wardrobe_provider
        self.history_provider = history_provider
        self.weather_provider = weather_provider
        self.config = config or PlannerConfig()
        self.clock = clock or datetime.now
        self.id_factory = id_factory or default_id_factory

    @instrument_provider("wardrobe")
    async def _fetch_wardrobe(self) -> List[WardrobeItem]:
        return list(await self.wardrobe_provider.fetch_items())

    @instrument_provider("history")
    async def _fetch_history(self) -> List[PlannedOutfit]:
        if self.history_provider is None:
            return []
        return list(await self.history_provider.recent_outfits())

    @instrument_provider("history")
    async def _record(self, outfit: PlannedOutfit) -> None:
        if self.history_provider is not None:
            await self.history_provider.record(outfit)

    @instrument_provider("weather")
    async def _fetch_forecast(self, location: str, when: datetime) -> Optional[WeatherForecast]:
        return await self.weather_provider.forecast(location, when)

    def plan(
        self,
        items: Sequence[WardrobeItem],
        event: EventContext,
        weather: Optional[WeatherForecast] = None,
        previous_outfits: Iterable[PlannedOutfit] = (),
    ) -> List[PlannedOutfit]:
        """Synchronous pipeline over an in-memory wardrobe snapshot."""

        requirements = analyze_requirements(event, weather)
        filtered = filter_items(items, requirements)
        unique = avoid_repetition(
            filtered.items,
            previous_outfits,
            event,
            window_days=self.config.repetition_window_days,
            floor_ratio=self.config.repetition_floor_ratio,
        )
        combinations = generate_combinations(
            unique.items, requirements, max_combinations=self.config.max_combinations
        )
        ranked = rank_outfits(combinations, event, weather, clock=self.clock, id_factory=self.id_factory)
        log_event(
            LOGGER,
            logging.INFO,
            "pipeline_summary",
            event_type=event.event_type.value,
            wardrobe_count=len(items),
            filtered_count=len(filtered.items),
            after_repetition_count=len(unique.items),
            repetition_floor_engaged=unique.debug.get("floor_engaged", False),
            combination_count=len(combinations),
            top_confidence=ranked[0].confidence,
        )
        return ranked

    async def rank_for_event(
        self,
        event: EventContext,
        weather: Optional[WeatherForecast] = None,
        previous_outfits: Iterable[PlannedOutfit] = (),
    ) -> List[PlannedOutfit]:
        """Every ranked outfit for the event, or a single fallback outfit."""

        items = await self._fetch_wardrobe()
        return self.plan(items, event, weather, previous_outfits)

    async def suggest_outfit(
        self,
        event: EventContext,
        weather: Optional[WeatherForecast] = None,
        previous_outfits: Iterable[PlannedOutfit] = (),
    ) -> PlannedOutfit:
        with operation_context("planner_call", logger=LOGGER, event_type=event.event_type.value):
            ranked = await self.rank_for_event(event, weather, previous_outfits)
            return ranked[0]

    async def suggest_outfits(
        self,
        event: EventContext,
        weather: Optional[WeatherForecast] = None,
        count: Optional[int] = None,
    ) -> List[PlannedOutfit]:
        """Sequential variants for one event, each fed back as history for the next."""

        total = self.config.suggestion_count if count is None else count
        history = await self._fetch_history()
        suggestions: List[PlannedOutfit] = []
        for _ in range(total):
            outfit = await self.suggest_outfit(event, weather, history + suggestions)
            suggestions.append(outfit)
        return suggestions

    async def forecast_for(self, event: EventContext) -> Optional[WeatherForecast]:
        location = event.location or self.config.default_location
        if self.weather_provider is None or not location:
            return None
        return await self._fetch_forecast(location, event.start)

    async def plan_upcoming(self, events: Iterable[EventContext]) -> List[PlannedOutfit]:
        """Plan one outfit per event in start order and record each in history."""

        history = await self._fetch_history()
        planned: List[PlannedOutfit] = []
        for event in sorted(events, key=lambda event: event.start):
            weather = await self.forecast_for(event)
            outfit = await self.suggest_outfit(event, weather, history + planned)
            planned.append(outfit)
            await self._record(outfit)
        return planned


__all__ = ["OutfitPlanner"]
