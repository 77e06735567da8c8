"""Errors raised at the provider boundary."""

from __future__ import annotations


class ProviderUnavailableError(RuntimeError):
    """A wardrobe, weather, history or calendar provider failed to answer."""

    def __init__(self, provider: str, message: str | None = None) -> None:
        self.provider = provider
        super().__init__(message or f"{provider} provider is unavailable")


__all__ = ["ProviderUnavailableError"]
