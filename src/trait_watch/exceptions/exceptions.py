"""Custom exceptions for the marketplace feed, persistence and configuration."""

from __future__ import annotations


class TraitWatchError(Exception):
    """Base exception for trait-watch errors."""

    pass


class MissingRequiredConfigError(TraitWatchError):
    """Raised when a required configuration value is missing."""

    pass


class MarketplaceAPIError(TraitWatchError):
    """Raised when a marketplace feed request fails (transport, status or body)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class PersistenceError(TraitWatchError):
    """Raised when the key-value store fails to persist a value."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.cause = cause
