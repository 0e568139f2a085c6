# -*- coding: utf-8 -*-
"""Unit tests for AsyncHttpClient (with a fake aiohttp session)."""

from __future__ import annotations

import json
from typing import Any, cast

import aiohttp
import pytest

from trait_watch.clients.http import AsyncHttpClient
from trait_watch.config import Settings
from trait_watch.exceptions import MarketplaceAPIError


class _FakeResponse:
    def __init__(self, *, status: int = 200, body: Any = None, json_error: Exception | None = None) -> None:
        self.status = status
        self._body = body
        self._json_error = json_error

    async def json(self, content_type: str | None = None) -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None


class _FakeSession:
    def __init__(self, responses: list[Any]) -> None:
        self._responses = list(responses)
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    def get(self, url: str, params: Any = None) -> _FakeResponse:
        self.calls.append((url, params))
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True


def _client(session: _FakeSession, *, max_retries: int = 1) -> AsyncHttpClient:
    settings = Settings(api={"max_retries": max_retries})
    client = AsyncHttpClient(settings, session=cast(Any, session))
    client._retry_delay = lambda failed_attempts: 0.0  # type: ignore[method-assign]
    return client


async def test_get_returns_decoded_json() -> None:
    session = _FakeSession([_FakeResponse(body=[{"tokenId": "1"}])])

    data = await _client(session).get("https://example.test/listings", params={"limit": 5})

    assert data == [{"tokenId": "1"}]
    assert session.calls == [("https://example.test/listings", {"limit": 5})]


async def test_get_raises_with_status_code_on_http_error() -> None:
    session = _FakeSession([_FakeResponse(status=503)])

    with pytest.raises(MarketplaceAPIError) as exc_info:
        await _client(session).get("https://example.test/listings")

    assert exc_info.value.status_code == 503
    assert exc_info.value.url == "https://example.test/listings"


async def test_get_raises_on_transport_error() -> None:
    session = _FakeSession([aiohttp.ClientConnectionError("refused")])

    with pytest.raises(MarketplaceAPIError) as exc_info:
        await _client(session).get("https://example.test/listings")

    assert exc_info.value.status_code is None
    assert isinstance(exc_info.value.cause, aiohttp.ClientConnectionError)


async def test_get_raises_on_non_json_body() -> None:
    error = json.JSONDecodeError("Expecting value", "<html>", 0)
    session = _FakeSession([_FakeResponse(json_error=error)])

    with pytest.raises(MarketplaceAPIError):
        await _client(session).get("https://example.test/listings")


async def test_get_retries_up_to_max_retries() -> None:
    session = _FakeSession([_FakeResponse(status=500), _FakeResponse(body={"listings": []})])

    data = await _client(session, max_retries=2).get("https://example.test/listings")

    assert data == {"listings": []}
    assert len(session.calls) == 2


async def test_single_attempt_by_default() -> None:
    session = _FakeSession([_FakeResponse(status=500), _FakeResponse(body=[])])

    with pytest.raises(MarketplaceAPIError):
        await _client(session).get("https://example.test/listings")

    assert len(session.calls) == 1


async def test_aclose_leaves_injected_session_open() -> None:
    session = _FakeSession([])

    await _client(session).aclose()

    assert session.closed is False
