"""Exceptions subpackage."""

from trait_watch.exceptions.exceptions import (
    MarketplaceAPIError,
    MissingRequiredConfigError,
    PersistenceError,
    TraitWatchError,
)

__all__ = [
    "MarketplaceAPIError",
    "MissingRequiredConfigError",
    "PersistenceError",
    "TraitWatchError",
]
