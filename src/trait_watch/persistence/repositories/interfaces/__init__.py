# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/, key_value/, etc."""

from trait_watch.persistence.repositories.interfaces.alert_repository import (
    IAlertRepository,
)
from trait_watch.persistence.repositories.interfaces.seen_listing_repository import (
    ISeenListingRepository,
)

__all__ = [
    "IAlertRepository",
    "ISeenListingRepository",
]
