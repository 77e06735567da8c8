"""Planner settings resolved from environment variables and per-environment YAML files."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Any, Callable, Dict, Mapping, Optional

from logic.repetition_guard import REPETITION_FLOOR_RATIO, REPETITION_WINDOW_DAYS

DEFAULT_SUGGESTION_COUNT = 3
DEFAULT_CONFIG_DIR = "config/environments"

# Settings whose file/env key differs from the dataclass field name.
_KEY_ALIASES = {"weather_api_key": "openweather_api_key"}


def _optional_int(raw: str) -> Optional[int]:
    return int(raw) if raw.strip() else None


_COERCERS: Dict[str, Callable[[str], Any]] = {
    "repetition_window_days": int,
    "repetition_floor_ratio": float,
    "max_combinations": _optional_int,
    "suggestion_count": int,
}


@dataclass
class PlannerConfig:
    """Provider credentials, storage paths and pipeline tunables.

    Tunables default to the values the scoring engine was calibrated with, so
    an empty environment reproduces the reference recommendations.
    """

    weather_api_key: Optional[str] = None
    default_location: Optional[str] = None
    calendar_id: Optional[str] = None
    google_credentials_path: Optional[str] = None
    wardrobe_db_path: Optional[str] = None
    history_db_path: Optional[str] = None
    repetition_window_days: int = REPETITION_WINDOW_DAYS
    repetition_floor_ratio: float = REPETITION_FLOOR_RATIO
    max_combinations: Optional[int] = None
    suggestion_count: int = DEFAULT_SUGGESTION_COUNT
    environment: str | None = None

    def __post_init__(self) -> None:
        if self.repetition_window_days < 0:
            raise ValueError("repetition_window_days must be non-negative")
        if not 0.0 <= self.repetition_floor_ratio <= 1.0:
            raise ValueError("repetition_floor_ratio must lie in [0, 1]")
        if self.max_combinations is not None and self.max_combinations < 1:
            raise ValueError("max_combinations must be positive when set")
        if self.suggestion_count < 1:
            raise ValueError("suggestion_count must be positive")

    @classmethod
    def from_env(cls) -> "PlannerConfig":
        """Resolve settings with environment variables taking precedence over the YAML file.

        ``APP_CONFIG_PATH`` names a file directly; otherwise ``APP_ENV`` selects
        ``<PLANNER_CONFIG_DIR>/<env>.yaml``. A missing file leaves the defaults.
        """

        env_name = os.getenv("APP_ENV")
        file_values = load_settings_file(_settings_path(env_name))
        resolved: Dict[str, Any] = {}
        for field in fields(cls):
            if field.name == "environment":
                continue
            key = _KEY_ALIASES.get(field.name, field.name)
            raw = os.getenv(key.upper(), file_values.get(key))
            if raw is None:
                continue
            coerce = _COERCERS.get(field.name)
            resolved[field.name] = coerce(raw) if coerce else raw
        return cls(environment=env_name, **resolved)


def _settings_path(env_name: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("PLANNER_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
    return None


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def load_settings_file(path: Optional[Path]) -> Mapping[str, str]:
    """Read flat ``key: value`` lines; comments, blank lines and nested blocks are ignored."""

    if path is None or not path.exists():
        return {}
    settings: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        if line[:1].isspace():
            continue
        key, sep, value = line.partition(":")
        key = key.strip()
        if not sep or not key or key.startswith("#"):
            continue
        settings[key] = _unquote(value.strip())
    return settings
