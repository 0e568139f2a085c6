"""In-memory repository implementations."""

from trait_watch.persistence.repositories.in_memory.seen_listing_repository import (
    InMemorySeenListingRepository,
)

__all__ = ["InMemorySeenListingRepository"]
