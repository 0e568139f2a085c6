"""Repositories backed by a key-value store."""

from trait_watch.persistence.repositories.key_value.alert_repository import (
    KeyValueAlertRepository,
)

__all__ = ["KeyValueAlertRepository"]
