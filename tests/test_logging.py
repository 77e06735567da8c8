"""Structured logging, redaction and correlation tests."""

import json
import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from planner_app.logging_config import (
    CORRELATION_ID,
    JsonFormatter,
    correlation_context,
    log_event,
    operation_context,
    redact_for_log,
)


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _capture(name):
    logger = logging.getLogger(name)
    handler = ListHandler()
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, handler


def test_redaction_masks_calendar_details_and_contacts() -> None:
    payload = {
        "title": "Interview with Dana",
        "location": "Acme HQ",
        "details": {"notes": "bring portfolio", "owner": "dana@example.com"},
        "source": "https://api.example.com/weather?appid=abc123&q=Zurich",
        "ids": ("evt-1", 3),
        "count": 2,
    }

    assert redact_for_log(payload) == {
        "title": "[redacted]",
        "location": "[redacted]",
        "details": {"notes": "[redacted]", "owner": "[email]"},
        "source": "https://api.example.com/weather?appid=[secret]&q=Zurich",
        "ids": ["evt-1", 3],
        "count": 2,
    }


def test_json_formatter_emits_redacted_extras() -> None:
    record = logging.LogRecord("planner", logging.INFO, __file__, 10, "pipeline_summary", None, None)
    record.event = "pipeline_summary"
    record.correlation_id = "abc123"
    record.location = "Zurich"
    record.combination_count = 8

    payload = json.loads(JsonFormatter().format(record))

    assert payload["event"] == "pipeline_summary"
    assert payload["level"] == "INFO"
    assert payload["correlation_id"] == "abc123"
    assert payload["location"] == "[redacted]"
    assert payload["combination_count"] == 8


def test_log_event_attaches_fields_and_correlation() -> None:
    logger, handler = _capture("tests.log_event")

    with correlation_context("fixed-id"):
        log_event(logger, logging.INFO, "provider_call_completed", provider="weather", api_key="secret")

    (record,) = handler.records
    assert record.event == "provider_call_completed"
    assert record.correlation_id == "fixed-id"
    assert record.provider == "weather"
    assert record.api_key == "[redacted]"


def test_operation_context_scopes_a_fresh_correlation_id() -> None:
    logger, handler = _capture("tests.operation_context")

    with correlation_context("outer"):
        with operation_context("planner_call", logger=logger, event_type="video_call") as scoped:
            assert CORRELATION_ID.get() == scoped
        assert CORRELATION_ID.get() == "outer"

    started, completed = handler.records
    assert scoped != "outer"
    assert started.event == "planner_call_started"
    assert started.event_type == "video_call"
    assert completed.event == "planner_call_completed"
    assert completed.correlation_id == started.correlation_id == scoped
    assert completed.duration_ms >= 0


def test_operation_context_logs_failures_and_reraises() -> None:
    logger, handler = _capture("tests.operation_failure")

    with pytest.raises(RuntimeError):
        with operation_context("planner_call", logger=logger):
            raise RuntimeError("boom")

    started, failed = handler.records
    assert failed.event == "planner_call_failed"
    assert failed.levelno == logging.ERROR
    assert failed.error == "RuntimeError"
