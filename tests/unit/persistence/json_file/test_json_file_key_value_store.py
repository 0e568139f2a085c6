# -*- coding: utf-8 -*-
"""Unit tests for JsonFileKeyValueStore."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from trait_watch.models.alert import Alert
from trait_watch.persistence.repositories.key_value import KeyValueAlertRepository
from trait_watch.persistence.stores import JsonFileKeyValueStore


async def test_get_returns_none_when_file_missing(tmp_path: Path) -> None:
    store = JsonFileKeyValueStore(tmp_path / "state.json")
    assert await store.get("alerts") is None


async def test_set_creates_parent_dirs_and_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "state.json"
    store = JsonFileKeyValueStore(path)

    await store.set("alerts", "[]")
    await store.set("other", "x")

    assert json.loads(path.read_text(encoding="utf-8")) == {"alerts": "[]", "other": "x"}
    assert await store.get("alerts") == "[]"
    assert not path.with_suffix(".json.tmp").exists()


async def test_set_overwrites_existing_value(tmp_path: Path) -> None:
    store = JsonFileKeyValueStore(tmp_path / "state.json")

    await store.set("alerts", "[1]")
    await store.set("alerts", "[2]")

    assert await store.get("alerts") == "[2]"


async def test_corrupt_file_reads_as_empty_and_is_replaced_on_write(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text("{broken", encoding="utf-8")
    store = JsonFileKeyValueStore(path)

    assert await store.get("alerts") is None
    await store.set("alerts", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"alerts": "[]"}


async def test_undecodable_bytes_read_as_empty_and_are_replaced_on_write(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_bytes(b'{"alerts": "\xff"}')
    store = JsonFileKeyValueStore(path)

    assert await store.get("alerts") is None
    await store.set("alerts", "[]")
    assert json.loads(path.read_text(encoding="utf-8")) == {"alerts": "[]"}


async def test_undecodable_history_file_restores_no_alerts(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_bytes(b"\xff\xfe\x00garbage")

    assert await KeyValueAlertRepository(JsonFileKeyValueStore(path)).load_all() == []


async def test_non_string_value_reads_as_missing(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"alerts": [1, 2]}), encoding="utf-8")

    assert await JsonFileKeyValueStore(path).get("alerts") is None


async def test_alert_history_survives_restart(tmp_path: Path, now_utc: datetime) -> None:
    path = tmp_path / "state.json"
    alert = Alert(token_id="101", price=150.0, seller="sellerA", listing_id="L-1", time=now_utc)
    await KeyValueAlertRepository(JsonFileKeyValueStore(path)).append(alert)

    restored = await KeyValueAlertRepository(JsonFileKeyValueStore(path)).load_all()

    assert restored == [alert]
