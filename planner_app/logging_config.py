"""Structured JSON logging for the planner with correlation ids and PII scrubbing.

Each recommendation call runs inside :func:`operation_context`, which scopes a
fresh correlation id so provider logs emitted during the call can be joined
back to it. Calendar text, locations and credentials never reach the stream.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import time
import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import IO, Any, Dict, Iterator, Mapping, Optional

SERVICE_NAME = "event-outfit-planner"
CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "planner_correlation_id", default=None
)

_RESERVED_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}
SENSITIVE_KEYS = frozenset(
    {
        "email",
        "title",
        "location",
        "notes",
        "image_url",
        "attendees",
        "api_key",
        "appid",
        "credentials_path",
        "token",
    }
)
_EMAIL = re.compile(r"[\w.+\-]+@[\w\-]+(?:\.[\w\-]+)+")
_SECRET_PARAM = re.compile(r"(?i)\b(appid|api_key|key|token|access_token)=([^&\s]+)")
_NOISY_LOGGERS = ("urllib3", "google.auth", "httpx")


def _scrub_text(text: str) -> str:
    text = _EMAIL.sub("[email]", text)
    return _SECRET_PARAM.sub(lambda match: f"{match.group(1)}=[secret]", text)


def redact_for_log(value: Any, key: Optional[str] = None) -> Any:
    """Return a JSON-safe copy of ``value``; values under sensitive keys are masked wholesale."""

    if key is not None and key in SENSITIVE_KEYS:
        return "[redacted]"
    if value is None or isinstance(value, (bool, int, float)):
        return value
    if isinstance(value, str):
        return _scrub_text(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {str(k): redact_for_log(v, str(k)) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in value]
    return _scrub_text(str(value))


class JsonFormatter(logging.Formatter):
    """One JSON object per line carrying the event name, correlation id and scrubbed extras."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "service": SERVICE_NAME,
            "logger": record.name,
            "event": getattr(record, "event", message),
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_ATTRS or key in payload:
                continue
            payload[key] = redact_for_log(value, key)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class _PlannerHandler(logging.StreamHandler):
    """Marker type so repeated configuration replaces only the planner's own handler."""


def configure_logging(level: int | str | None = None, stream: IO[str] | None = None) -> logging.Handler:
    """Install the JSON handler on the root logger, replacing a previous planner handler."""

    resolved = level or os.getenv("LOG_LEVEL", "INFO")
    root = logging.getLogger()
    for existing in [h for h in root.handlers if isinstance(h, _PlannerHandler)]:
        root.removeHandler(existing)
    handler = _PlannerHandler(stream)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(resolved.upper() if isinstance(resolved, str) else resolved)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler


def get_logger(name: str) -> logging.Logger:
    if not any(isinstance(handler, _PlannerHandler) for handler in logging.getLogger().handlers):
        configure_logging()
    return logging.getLogger(name)


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Bind ``correlation_id`` when given, otherwise reuse the active id or mint one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current is None:
        current = new_correlation_id()
        CORRELATION_ID.set(current)
    return current


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation id for the duration of the block and restore the previous one."""

    token = CORRELATION_ID.set(correlation_id or new_correlation_id())
    try:
        yield CORRELATION_ID.get()
    finally:
        CORRELATION_ID.reset(token)


def elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with scrubbed structured fields bound to the active correlation id."""

    exc_info = fields.pop("exc_info", None)
    correlation_id = fields.pop("correlation_id", None) or ensure_correlation_id()
    extra: Dict[str, Any] = {}
    for key, value in fields.items():
        # LogRecord refuses extras that shadow its own attributes
        safe_key = f"field_{key}" if key in _RESERVED_RECORD_ATTRS else key
        extra[safe_key] = redact_for_log(value, key)
    logger.log(level, event, exc_info=exc_info, extra={"event": event, "correlation_id": correlation_id, **extra})


@contextlib.contextmanager
def operation_context(name: str, logger: logging.Logger | None = None, **attributes: Any) -> Iterator[str]:
    """Scope a fresh correlation id around one planner operation and log its outcome and duration."""

    log = logger or logging.getLogger(__name__)
    with correlation_context(attributes.pop("correlation_id", None)) as scoped_id:
        started = time.perf_counter()
        log_event(log, logging.INFO, f"{name}_started", **attributes)
        try:
            yield scoped_id
        except Exception as exc:
            log_event(
                log,
                logging.ERROR,
                f"{name}_failed",
                duration_ms=elapsed_ms(started),
                error=type(exc).__name__,
            )
            raise
        log_event(log, logging.INFO, f"{name}_completed", duration_ms=elapsed_ms(started))


__all__ = [
    "CORRELATION_ID",
    "JsonFormatter",
    "SERVICE_NAME",
    "configure_logging",
    "correlation_context",
    "elapsed_ms",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "new_correlation_id",
    "operation_context",
    "redact_for_log",
]
