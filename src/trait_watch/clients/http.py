# -*- coding: utf-8 -*-
"""Async HTTP client for JSON GET requests against the marketplace feed."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from trait_watch.config import Settings
from trait_watch.exceptions import MarketplaceAPIError

# Upper bound for the pause between two attempts of the same request.
MAX_RETRY_DELAY_SECONDS = 4.0


class AsyncHttpClient:
    """Fetch JSON documents over a (lazily created) aiohttp session.

    Every failure mode (connection error, timeout, non-2xx status, body that
    does not decode as JSON) surfaces as MarketplaceAPIError, so callers have
    a single exception to handle. settings.api.max_retries is the number of
    attempts; with the default of 1 the next poll cycle acts as the retry.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (api.timeout_seconds, api.max_retries, app identity).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _default_headers(self) -> Dict[str, str]:
        app = self._settings.app
        agent = app.service_name or app.app_name
        if app.service_version:
            agent = f"{agent}/{app.service_version}"
        return {"Accept": "application/json", "User-Agent": agent}

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds),
                headers=self._default_headers(),
            )
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client created it."""
        if not self._owns_session or self._session is None:
            return
        if not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _retry_delay(self, failed_attempts: int) -> float:
        """Exponential delay with a little jitter after the given number of failures."""
        return min(MAX_RETRY_DELAY_SECONDS, 0.25 * 2 ** (failed_attempts - 1)) + random.uniform(0.0, 0.15)

    async def _fetch_once(
        self,
        url: str,
        params: Dict[str, Any],
    ) -> Any:
        session = await self._get_session()
        async with session.get(url, params=params) as response:
            if response.status >= 400:
                raise MarketplaceAPIError(
                    f"HTTP {response.status} from {url}",
                    url=url,
                    status_code=response.status,
                )
            try:
                # content_type=None: some feeds label JSON as text/plain
                return await response.json(content_type=None)
            except ValueError as e:
                raise MarketplaceAPIError(
                    f"Response from {url} is not valid JSON",
                    url=url,
                    status_code=response.status,
                    cause=e,
                ) from e

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """GET url and return the decoded JSON body (dict or list).

        Raises:
            MarketplaceAPIError: The last failure, once all attempts are used.
        """
        attempts = self._settings.api.max_retries
        last_error: Optional[MarketplaceAPIError] = None

        with bound_contextvars(http_url=url, http_request_id=uuid.uuid4().hex[:12]):
            for attempt in range(1, attempts + 1):
                try:
                    return await self._fetch_once(url, params or {})
                except MarketplaceAPIError as e:
                    last_error = e
                except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                    last_error = MarketplaceAPIError(
                        f"Request to {url} failed: {type(e).__name__}",
                        url=url,
                        cause=e,
                    )
                self._logger.debug(
                    "http_get_attempt_failed",
                    http_attempt=attempt,
                    http_max_attempts=attempts,
                    http_status_code=last_error.status_code,
                    error_message=str(last_error),
                )
                if attempt < attempts:
                    await asyncio.sleep(self._retry_delay(attempt))

            error = last_error or MarketplaceAPIError(f"No attempt made for {url}", url=url)
            self._logger.warning(
                "http_get_failed",
                http_status_code=error.status_code,
                http_attempts=attempts,
                error_type=type(error.cause).__name__ if error.cause else None,
                error_message=str(error),
            )
            raise error
