"""SeenListing: domain entity for listing deduplication.

Identity is listing_id. A listing id recorded here never produces another
alert for the lifetime of the ledger that holds it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True, slots=True)
class SeenListing:
    """Record that a listing has already been alerted on."""

    listing_id: str
    """Stable key from utils.dedupe.listing_key() (feed id or tokenId-seller)."""
    seen_at: datetime
    """When the listing was first marked (for audit)."""

    @classmethod
    def create(
        cls,
        listing_id: str,
        *,
        seen_at: datetime | None = None,
    ) -> SeenListing:
        """Create a new SeenListing record."""
        listing_id = listing_id.strip()
        if not listing_id:
            raise ValueError("listing_id must be non-empty")
        return cls(listing_id=listing_id, seen_at=seen_at or datetime.now(UTC))
