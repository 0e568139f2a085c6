# -*- coding: utf-8 -*-
"""Unit tests for settings loading and container wiring."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from trait_watch.config import Settings, get_settings
from trait_watch.DI import Container
from trait_watch.persistence.stores import InMemoryKeyValueStore, JsonFileKeyValueStore
from trait_watch.services.monitor import ListingPoller


def test_defaults_describe_the_stock_watch() -> None:
    settings = Settings()

    assert settings.monitor.collection_symbol == "steadyteddys"
    assert settings.monitor.poll_seconds == 30.0
    assert settings.monitor.threshold == "200"
    assert settings.monitor.history_limit == 200
    assert settings.api.max_retries == 1
    assert settings.telegram.silent is True


def test_nested_env_vars_override_sections(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MONITOR__TRAIT_VALUE", "Egypt")
    monkeypatch.setenv("MONITOR__THRESHOLD", "75")
    monkeypatch.setenv("STORAGE__BACKEND", "memory")

    settings = Settings.from_env()

    assert settings.monitor.trait_value == "Egypt"
    assert settings.monitor.threshold == "75"
    assert settings.storage.backend == "memory"


def test_get_settings_reads_env_once_and_caches(monkeypatch: pytest.MonkeyPatch) -> None:
    get_settings.cache_clear()
    monkeypatch.setenv("MONITOR__COLLECTION_SYMBOL", "bearbros")
    try:
        first = get_settings()
        monkeypatch.setenv("MONITOR__COLLECTION_SYMBOL", "other")

        assert first.monitor.collection_symbol == "bearbros"
        assert get_settings() is first
    finally:
        get_settings.cache_clear()


def test_poll_interval_must_be_at_least_one_second() -> None:
    with pytest.raises(ValidationError):
        Settings(monitor={"poll_seconds": 0.5})


def test_container_builds_poller_with_memory_backend(settings: Settings) -> None:
    container = Container()
    container.config.override(settings)
    try:
        poller = container.listing_poller()
        assert isinstance(poller, ListingPoller)
        assert isinstance(container.key_value_store(), InMemoryKeyValueStore)
        assert container.alert_repository().max_size == 200
        assert poller.session.filter.trait_name == "Clothing"
    finally:
        container.config.reset_override()


def test_container_uses_json_file_backend(tmp_path: Path) -> None:
    settings = Settings(storage={"backend": "file", "path": str(tmp_path / "state.json")})
    container = Container()
    container.config.override(settings)
    try:
        store = container.key_value_store()
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.path == tmp_path / "state.json"
    finally:
        container.config.reset_override()
