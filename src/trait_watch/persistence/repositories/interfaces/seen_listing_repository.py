"""Abstract interface for the dedup ledger (in-memory, DB, etc.)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from trait_watch.models.seen_listing import SeenListing


class ISeenListingRepository(ABC):
    """Interface for the set of listing ids already alerted on."""

    @abstractmethod
    async def has_seen(self, listing_id: str) -> bool:
        """Return True if listing_id has already produced an alert."""
        ...

    @abstractmethod
    async def mark_seen(self, seen_listing: SeenListing) -> None:
        """Record that a listing has been alerted on. Idempotent (re-adding same id is no-op)."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Number of listing ids currently held."""
        ...

    async def seed(self, listing_ids: Iterable[str]) -> None:
        """Record ids restored from persisted history. Default impl calls mark_seen() for each."""
        for listing_id in listing_ids:
            await self.mark_seen(SeenListing.create(listing_id))
