# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, cast
from unittest.mock import AsyncMock, Mock

import pytest

from trait_watch.config import Settings
from trait_watch.models.filter_config import FilterConfig
from trait_watch.models.poller_session import PollerSession
from trait_watch.persistence.repositories.in_memory import InMemorySeenListingRepository
from trait_watch.persistence.repositories.key_value import KeyValueAlertRepository
from trait_watch.persistence.stores import InMemoryKeyValueStore
from trait_watch.services.monitor import ListingPoller


@pytest.fixture
def now_utc() -> datetime:
    """Stable UTC timestamp for deterministic assertions."""
    return datetime(2026, 2, 13, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> Settings:
    """Settings with a long interval (the timer never fires during a test) and no real IO."""
    return Settings(
        monitor={"poll_seconds": 60.0},
        storage={"backend": "memory"},
        console={"enabled": False},
        telegram={"enabled": False},
    )


@pytest.fixture
def saudi_filter() -> FilterConfig:
    return FilterConfig(trait_name="Clothing", trait_value="Saudi", threshold="200")


@pytest.fixture
def listing_record_factory() -> Callable[..., dict[str, Any]]:
    """Build raw feed records with sensible defaults and easy overrides."""

    def _build(
        token_id: str | None = "101",
        *,
        price: Any = 150,
        seller: str | None = "SeLLer1111111111111111111111",
        traits: dict[str, str] | None = None,
        **extra: Any,
    ) -> dict[str, Any]:
        record: dict[str, Any] = {"price": price}
        if token_id is not None:
            record["tokenMint"] = token_id
        if seller is not None:
            record["seller"] = seller
        trait_map = {"Clothing": "Saudi"} if traits is None else traits
        record["extra"] = {
            "attributes": [{"trait_type": k, "value": v} for k, v in trait_map.items()],
        }
        record.update(extra)
        return record

    return _build


@pytest.fixture
def kv_store() -> InMemoryKeyValueStore:
    """Fresh in-memory key-value store per test."""
    return InMemoryKeyValueStore()


@pytest.fixture
def alert_repo(kv_store: InMemoryKeyValueStore) -> KeyValueAlertRepository:
    """Alert history over the in-memory store."""
    return KeyValueAlertRepository(kv_store)


@pytest.fixture
def seen_repo() -> InMemorySeenListingRepository:
    """Fresh dedup ledger per test."""
    return InMemorySeenListingRepository()


@pytest.fixture
def notifications() -> SimpleNamespace:
    """Notification service double: awaited send() and queued notify()."""
    return SimpleNamespace(send=AsyncMock(), notify=Mock())


@pytest.fixture
def marketplace_api() -> SimpleNamespace:
    """Feed client double returning an empty snapshot unless overridden."""
    return SimpleNamespace(get_listings=AsyncMock(return_value=[]))


@pytest.fixture
def poller_factory(
    settings: Settings,
    marketplace_api: SimpleNamespace,
    seen_repo: InMemorySeenListingRepository,
    alert_repo: KeyValueAlertRepository,
    notifications: SimpleNamespace,
    saudi_filter: FilterConfig,
    now_utc: datetime,
) -> Callable[..., ListingPoller]:
    """Build a ListingPoller wired to the in-memory doubles above."""

    def _build(**overrides: Any) -> ListingPoller:
        return ListingPoller(
            settings=overrides.pop("settings", settings),
            marketplace_api=cast(Any, overrides.pop("marketplace_api", marketplace_api)),
            seen_listing_repository=overrides.pop("seen_listing_repository", seen_repo),
            alert_repository=overrides.pop("alert_repository", alert_repo),
            notification_service=cast(Any, overrides.pop("notification_service", notifications)),
            session=overrides.pop("session", PollerSession(filter=saudi_filter)),
            clock=overrides.pop("clock", lambda: now_utc),
        )

    return _build
