# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, key_value)."""

from trait_watch.persistence.repositories.in_memory import InMemorySeenListingRepository
from trait_watch.persistence.repositories.interfaces import (
    IAlertRepository,
    ISeenListingRepository,
)
from trait_watch.persistence.repositories.key_value import KeyValueAlertRepository

__all__ = [
    "IAlertRepository",
    "ISeenListingRepository",
    "InMemorySeenListingRepository",
    "KeyValueAlertRepository",
]
