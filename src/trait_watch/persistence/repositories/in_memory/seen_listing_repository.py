# -*- coding: utf-8 -*-
"""In-memory seen listing repository (keyed by listing_id)."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Iterable

from trait_watch.models.seen_listing import SeenListing
from trait_watch.persistence.repositories.interfaces.seen_listing_repository import (
    ISeenListingRepository,
)


def _key(listing_id: str) -> str:
    """Normalize key for storage."""
    return listing_id.strip()


class InMemorySeenListingRepository(ISeenListingRepository):
    """In-memory implementation of ISeenListingRepository.

    Unbounded by default: once seen, a listing id stays suppressed for the
    life of the process even after it leaves the capped alert history. With
    max_size set, the oldest ids are evicted first.
    """

    def __init__(self, max_size: int | None = None) -> None:
        """Initialize an empty in-memory store."""
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be positive")
        self._max_size = max_size
        self._store: OrderedDict[str, SeenListing] = OrderedDict()

    async def has_seen(self, listing_id: str) -> bool:
        return _key(listing_id) in self._store

    async def mark_seen(self, seen_listing: SeenListing) -> None:
        """Record that a listing has been alerted on. Idempotent."""
        self._put(seen_listing)

    async def count(self) -> int:
        return len(self._store)

    async def seed(self, listing_ids: Iterable[str]) -> None:
        """Record restored ids in one pass; blank ids are ignored."""
        for listing_id in listing_ids:
            if listing_id and listing_id.strip():
                self._put(SeenListing.create(listing_id))

    def _put(self, seen_listing: SeenListing) -> None:
        k = _key(seen_listing.listing_id)
        if k in self._store:
            return
        self._store[k] = seen_listing
        if self._max_size is not None:
            while len(self._store) > self._max_size:
                self._store.popitem(last=False)
