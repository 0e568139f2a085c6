# -*- coding: utf-8 -*-
"""JSON-file key-value store with atomic whole-file replacement."""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import structlog

from trait_watch.persistence.stores.interfaces.key_value_store import IKeyValueStore


class JsonFileKeyValueStore(IKeyValueStore):
    """Stores all keys in one JSON object file.

    Writes go to a sibling .tmp file which then replaces the target, so a
    crash mid-write leaves either the old or the new file, never a torn one.
    Blocking file IO runs in a worker thread.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            path: JSON file path; parent directories are created on first write.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._path = Path(path)
        self._lock = asyncio.Lock()
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> str | None:
        data = await asyncio.to_thread(self._read)
        value = data.get(key)
        return value if isinstance(value, str) else None

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._write_key, key, value)

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._logger.warning(
                "kv_store_file_corrupt",
                kv_store_path=str(self._path),
                error_message=str(e),
            )
            return {}
        if not isinstance(raw, dict):
            return {}
        return cast(dict[str, Any], raw)

    def _write_key(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            tmp_path.replace(self._path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()
