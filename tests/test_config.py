"""Configuration loading tests for environment variables and YAML files."""

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from planner_app.config import DEFAULT_SUGGESTION_COUNT, PlannerConfig

ENV_KEYS = (
    "APP_ENV",
    "APP_CONFIG_PATH",
    "PLANNER_CONFIG_DIR",
    "OPENWEATHER_API_KEY",
    "DEFAULT_LOCATION",
    "CALENDAR_ID",
    "GOOGLE_CREDENTIALS_PATH",
    "WARDROBE_DB_PATH",
    "HISTORY_DB_PATH",
    "REPETITION_WINDOW_DAYS",
    "REPETITION_FLOOR_RATIO",
    "MAX_COMBINATIONS",
    "SUGGESTION_COUNT",
)


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env) -> None:
    config = PlannerConfig.from_env()

    assert config.weather_api_key is None
    assert config.repetition_window_days == 14
    assert config.repetition_floor_ratio == 0.3
    assert config.max_combinations is None
    assert config.suggestion_count == DEFAULT_SUGGESTION_COUNT
    assert config.environment is None


def test_yaml_file_is_merged_under_environment_variables(clean_env, tmp_path) -> None:
    config_file = tmp_path / "planner.yaml"
    config_file.write_text(
        "\n".join(
            [
                "# planner settings",
                'default_location: "Zurich"',
                "repetition_window_days: 10",
                "max_combinations: 50",
                "openweather_api_key: 'from-file'",
            ]
        )
    )
    clean_env.setenv("APP_CONFIG_PATH", str(config_file))
    clean_env.setenv("DEFAULT_LOCATION", "Basel")
    clean_env.setenv("SUGGESTION_COUNT", "2")

    config = PlannerConfig.from_env()

    assert config.default_location == "Basel"
    assert config.weather_api_key == "from-file"
    assert config.repetition_window_days == 10
    assert config.max_combinations == 50
    assert config.suggestion_count == 2


def test_app_env_selects_environment_file(clean_env, tmp_path) -> None:
    (tmp_path / "staging.yaml").write_text("history_db_path: /tmp/history.db\n")
    clean_env.setenv("APP_ENV", "staging")
    clean_env.setenv("PLANNER_CONFIG_DIR", str(tmp_path))

    config = PlannerConfig.from_env()

    assert config.environment == "staging"
    assert config.history_db_path == "/tmp/history.db"


def test_missing_environment_file_falls_back_to_defaults(clean_env, tmp_path) -> None:
    clean_env.setenv("APP_ENV", "prod")
    clean_env.setenv("PLANNER_CONFIG_DIR", str(tmp_path))

    config = PlannerConfig.from_env()

    assert config.environment == "prod"
    assert config.default_location is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"repetition_window_days": -1},
        {"repetition_floor_ratio": 1.5},
        {"max_combinations": 0},
        {"suggestion_count": 0},
    ],
)
def test_invalid_tunables_are_rejected(overrides) -> None:
    with pytest.raises(ValueError):
        PlannerConfig(**overrides)
