"""Persistence layer (key-value stores, repositories)."""

from trait_watch.persistence.repositories import (
    IAlertRepository,
    InMemorySeenListingRepository,
    ISeenListingRepository,
    KeyValueAlertRepository,
)
from trait_watch.persistence.stores import (
    IKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)

__all__ = [
    "IAlertRepository",
    "IKeyValueStore",
    "ISeenListingRepository",
    "InMemoryKeyValueStore",
    "InMemorySeenListingRepository",
    "JsonFileKeyValueStore",
    "KeyValueAlertRepository",
]
