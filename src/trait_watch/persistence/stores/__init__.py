# -*- coding: utf-8 -*-
"""Key-value stores: interface and implementations (in_memory, json_file)."""

from trait_watch.persistence.stores.in_memory.key_value_store import InMemoryKeyValueStore
from trait_watch.persistence.stores.interfaces.key_value_store import IKeyValueStore
from trait_watch.persistence.stores.json_file.key_value_store import JsonFileKeyValueStore

__all__ = [
    "IKeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
