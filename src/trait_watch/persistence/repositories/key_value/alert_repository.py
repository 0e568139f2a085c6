# -*- coding: utf-8 -*-
"""Alert history persisted as one JSON blob in a key-value store."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, cast

import structlog

from trait_watch.exceptions import PersistenceError
from trait_watch.models.alert import Alert
from trait_watch.persistence.repositories.interfaces.alert_repository import IAlertRepository
from trait_watch.persistence.stores.interfaces.key_value_store import IKeyValueStore

DEFAULT_ALERTS_KEY = "alerts"
DEFAULT_HISTORY_LIMIT = 200


class KeyValueAlertRepository(IAlertRepository):
    """Newest-first alert history capped at max_size, saved whole on every append.

    The truncated list is written before the in-memory list is swapped, so a
    failed write never leaves memory ahead of what is durable.
    """

    def __init__(
        self,
        store: IKeyValueStore,
        *,
        key: str = DEFAULT_ALERTS_KEY,
        max_size: int = DEFAULT_HISTORY_LIMIT,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the repository.

        Args:
            store: Key-value store holding the serialized history.
            key: Key under which the history blob is stored.
            max_size: Maximum number of alerts kept (oldest dropped first).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")
        self._store = store
        self._key = key
        self._max_size = max_size
        self._alerts: list[Alert] = []
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @property
    def alerts(self) -> tuple[Alert, ...]:
        return tuple(self._alerts)

    @property
    def max_size(self) -> int:
        return self._max_size

    async def load_all(self) -> list[Alert]:
        """Load and cache the persisted history.

        A missing blob means an empty history. An unreadable blob is logged and
        treated as empty; individual bad entries are skipped.
        """
        raw = await self._store.get(self._key)
        if raw is None:
            self._alerts = []
            return []
        try:
            decoded = json.loads(raw)
        except json.JSONDecodeError as e:
            self._logger.warning(
                "alert_history_unreadable",
                alert_history_key=self._key,
                error_message=str(e),
            )
            self._alerts = []
            return []
        if not isinstance(decoded, list):
            self._logger.warning(
                "alert_history_unexpected_shape",
                alert_history_key=self._key,
                alert_history_type=type(decoded).__name__,
            )
            self._alerts = []
            return []

        loaded: list[Alert] = []
        skipped = 0
        for entry in cast(list[Any], decoded):
            if not isinstance(entry, dict):
                skipped += 1
                continue
            try:
                loaded.append(Alert.from_dict(cast(dict[str, Any], entry)))
            except (TypeError, ValueError):
                skipped += 1
        self._alerts = loaded[: self._max_size]
        self._logger.debug(
            "alert_history_loaded",
            alert_history_count=len(self._alerts),
            alert_history_skipped=skipped,
        )
        return list(self._alerts)

    async def append(self, alert: Alert) -> None:
        updated = [alert, *self._alerts][: self._max_size]
        payload = json.dumps([a.to_dict() for a in updated], ensure_ascii=False)
        try:
            await self._store.set(self._key, payload)
        except Exception as e:
            self._logger.error(
                "alert_history_persist_failed",
                alert_listing_id=alert.listing_id,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise PersistenceError(
                f"failed to persist alert history under {self._key!r}",
                key=self._key,
                cause=e,
            ) from e
        evicted = len(self._alerts) + 1 - len(updated)
        self._alerts = updated
        self._logger.debug(
            "alert_appended",
            alert_listing_id=alert.listing_id,
            alert_history_count=len(updated),
            alert_history_evicted=evicted,
        )
