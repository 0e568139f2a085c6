# -*- coding: utf-8 -*-
"""In-memory key-value store (tests, ephemeral runs)."""

from __future__ import annotations

from trait_watch.persistence.stores.interfaces.key_value_store import IKeyValueStore


class InMemoryKeyValueStore(IKeyValueStore):
    """Dict-backed implementation of IKeyValueStore."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> str | None:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value
