"""Weather provider abstractions and implementations."""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

import requests
from pydantic import BaseModel

from models.event import WeatherForecast, as_aware
from models.taxonomy import WeatherCondition

LOGGER = logging.getLogger(__name__)

OPENWEATHER_FORECAST_URL = "https://api.openweathermap.org/data/2.5/forecast"
MS_TO_KMH = 3.6

_CONDITION_BY_GROUP: Dict[str, WeatherCondition] = {
    "clear": WeatherCondition.SUNNY,
    "clouds": WeatherCondition.CLOUDY,
    "rain": WeatherCondition.RAINY,
    "drizzle": WeatherCondition.RAINY,
    "thunderstorm": WeatherCondition.STORMY,
    "snow": WeatherCondition.SNOWY,
    "mist": WeatherCondition.FOGGY,
    "fog": WeatherCondition.FOGGY,
    "haze": WeatherCondition.FOGGY,
    "smoke": WeatherCondition.FOGGY,
}
_PARTLY_CLOUDY_DESCRIPTIONS = {"few clouds", "scattered clouds"}


class _WeatherCondition(BaseModel):
    main: str = "Clear"
    description: str = "unknown"


class _Wind(BaseModel):
    speed: float = 0.0


class _Main(BaseModel):
    temp: float
    humidity: int = 0


class _ForecastEntry(BaseModel):
    dt_txt: str
    main: _Main
    pop: float = 0.0
    wind: _Wind = _Wind()
    weather: List[_WeatherCondition] = []


class _ForecastResponse(BaseModel):
    list: List[_ForecastEntry] = []


def map_condition(condition: Optional[_WeatherCondition]) -> WeatherCondition:
    if condition is None:
        return WeatherCondition.SUNNY
    if condition.description.lower() in _PARTLY_CLOUDY_DESCRIPTIONS:
        return WeatherCondition.PARTLY_CLOUDY
    return _CONDITION_BY_GROUP.get(condition.main.lower(), WeatherCondition.CLOUDY)


class WeatherProvider(ABC):
    """Abstract weather provider interface."""

    @abstractmethod
    async def forecast(self, location: str, when: datetime) -> Optional[WeatherForecast]:
        """Return the forecast closest to ``when`` or None when unavailable."""


class OpenWeatherProvider(WeatherProvider):
    """OpenWeather five-day forecast provider with schema validation.

    Returns None when no API key is configured or the payload has no entries.
    Transport and schema failures propagate to the caller.
    """

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0, units: str = "metric") -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.units = units

    @staticmethod
    def _entry_time(entry: _ForecastEntry) -> datetime:
        # dt_txt is UTC without an offset
        return datetime.fromisoformat(entry.dt_txt).replace(tzinfo=timezone.utc)

    def _choose_entry(self, entries: List[_ForecastEntry], when: datetime) -> Optional[_ForecastEntry]:
        if not entries:
            return None
        target = as_aware(when)
        return min(entries, key=lambda entry: abs((self._entry_time(entry) - target).total_seconds()))

    def _to_forecast(self, entry: _ForecastEntry) -> WeatherForecast:
        return WeatherForecast(
            condition=map_condition(entry.weather[0] if entry.weather else None),
            temperature=entry.main.temp,
            precipitation_chance=round(max(0.0, min(1.0, entry.pop)) * 100),
            humidity=max(0, min(100, entry.main.humidity)),
            wind_speed=round(entry.wind.speed * MS_TO_KMH, 1),
        )

    def fetch_forecast(self, location: str, when: datetime) -> Optional[WeatherForecast]:
        if not location:
            raise ValueError("location is required for weather lookups")
        if not self.api_key:
            LOGGER.warning("No weather API key configured; skipping forecast")
            return None

        LOGGER.info("Fetching weather forecast", extra={"location": location, "date": when.date().isoformat()})
        params = {"q": location, "appid": self.api_key, "units": self.units}
        response = requests.get(OPENWEATHER_FORECAST_URL, params=params, timeout=self.timeout_seconds)
        response.raise_for_status()
        parsed = _ForecastResponse.model_validate(response.json())
        entry = self._choose_entry(parsed.list, when)
        if entry is None:
            LOGGER.warning("Weather payload contained no forecast entries")
            return None
        return self._to_forecast(entry)

    async def forecast(self, location: str, when: datetime) -> Optional[WeatherForecast]:
        return await asyncio.to_thread(self.fetch_forecast, location, when)


class MockWeatherProvider(WeatherProvider):
    """Offline deterministic weather provider for tests and local runs."""

    def __init__(
        self,
        forecast: WeatherForecast | None = None,
        by_location: Dict[str, WeatherForecast] | None = None,
    ) -> None:
        self.default = forecast or WeatherForecast(condition=WeatherCondition.SUNNY, temperature=18.0)
        self.by_location = {key.lower(): value for key, value in (by_location or {}).items()}
        self.calls: List[tuple] = []

    async def forecast(self, location: str, when: datetime) -> Optional[WeatherForecast]:
        self.calls.append((location, when))
        LOGGER.info("Returning mock forecast", extra={"date": when.date().isoformat()})
        return self.by_location.get(location.lower(), self.default)


__all__ = ["MockWeatherProvider", "OpenWeatherProvider", "WeatherProvider", "map_condition"]
