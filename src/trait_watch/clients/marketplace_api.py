# -*- coding: utf-8 -*-
"""Marketplace listings feed client (public endpoint, no auth, no pagination)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Optional, cast
from urllib.parse import quote

import structlog
from structlog.contextvars import bound_contextvars

from trait_watch.config import Settings

if TYPE_CHECKING:
    from .http import AsyncHttpClient

# Object-shaped responses carry the array under this field.
LISTINGS_FIELD = "listings"


def extract_listings(data: Any) -> list[Any] | None:
    """Return the listings array from a bare array or an object wrapping one.

    Returns None when the body has neither shape.
    """
    if isinstance(data, list):
        return cast(list[Any], data)
    if isinstance(data, dict):
        inner = cast(dict[str, Any], data).get(LISTINGS_FIELD)
        if isinstance(inner, list):
            return cast(list[Any], inner)
    return None


class MarketplaceApiClient:
    """Client for GET /v2/collections/{symbol}/listings."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api.marketplace_host).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.marketplace_host.rstrip("/")

    def listings_url(self, collection_symbol: str) -> str:
        return f"{self._base_url()}/v2/collections/{quote(collection_symbol, safe='')}/listings"

    async def get_listings(self, collection_symbol: str) -> list[Any]:
        """Fetch the current listing snapshot for a collection.

        Records are returned raw (normalization is the caller's job); non-dict
        entries are kept so the caller can count and skip them.

        Raises:
            MarketplaceAPIError: If the request fails (propagated from the HTTP client).
        """
        with bound_contextvars(marketplace_collection=collection_symbol):
            data = await self._http.get(self.listings_url(collection_symbol))
            listings = extract_listings(data)
            if listings is None:
                self._logger.warning(
                    "marketplace_get_listings_unexpected_shape",
                    marketplace_response_type=type(data).__name__,
                )
                return []
            return listings
