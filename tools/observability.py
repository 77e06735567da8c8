"""Boundary wrapper for wardrobe, weather, history and calendar provider calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Any, Awaitable, Callable, ParamSpec, TypeVar

from planner_app.logging_config import elapsed_ms, get_logger, log_event
from tools.errors import ProviderUnavailableError

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def _result_size(result: Any) -> int | None:
    if result is None:
        return 0
    try:
        return len(result)
    except TypeError:
        return None


def instrument_provider(
    provider_name: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Time an async provider call and normalise its failures.

    Any exception escaping the call is logged once and re-raised as
    :class:`ProviderUnavailableError` chained to the original cause. Call
    arguments are never logged since they carry locations and event details.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        operation = f"{provider_name}.{func.__name__.lstrip('_')}"

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except ProviderUnavailableError:
                raise
            except Exception as exc:
                log_event(
                    LOGGER,
                    logging.WARNING,
                    "provider_unavailable",
                    provider=provider_name,
                    operation=operation,
                    duration_ms=elapsed_ms(started),
                    error=type(exc).__name__,
                )
                raise ProviderUnavailableError(provider_name, f"{operation} failed: {exc}") from exc
            log_event(
                LOGGER,
                logging.DEBUG,
                "provider_call",
                provider=provider_name,
                operation=operation,
                duration_ms=elapsed_ms(started),
                result_size=_result_size(result),
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_provider"]
