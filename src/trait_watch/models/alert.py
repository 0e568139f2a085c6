"""Alert: record that a listing matched the filter for the first time.

Created once per distinct listing id and never mutated. Serialized with the
camelCase keys of the persisted history blob (tokenId, price, seller,
listingId, time).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from trait_watch.models.listing import Listing
from trait_watch.utils.dedupe import listing_key


@dataclass(frozen=True, slots=True)
class Alert:
    """One alert in the history (newest first in the store)."""

    token_id: str | None
    price: float
    seller: str | None
    listing_id: str
    time: datetime
    """When the alert was raised (UTC)."""

    @classmethod
    def from_listing(cls, listing: Listing, *, time: datetime | None = None) -> Alert:
        """Build the alert for a matching listing."""
        return cls(
            token_id=listing.token_id,
            price=listing.price,
            seller=listing.seller,
            listing_id=listing.listing_id,
            time=time or datetime.now(UTC),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict in the persisted (camelCase) shape."""
        return {
            "tokenId": self.token_id,
            "price": self.price,
            "seller": self.seller,
            "listingId": self.listing_id,
            "time": self.time.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Alert:
        """Build from a persisted dict.

        Entries written without a listingId get the same composite key a live
        listing would produce, so they still seed deduplication.

        Raises:
            ValueError: If price or time cannot be parsed.
        """
        token_id = data.get("tokenId")
        seller = data.get("seller")
        time_raw = data.get("time")
        if isinstance(time_raw, str) and time_raw:
            parsed = datetime.fromisoformat(time_raw.replace("Z", "+00:00"))
        else:
            raise ValueError("alert time is missing")
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        price_raw = data.get("price", 0)
        return cls(
            token_id=str(token_id) if token_id is not None else None,
            price=float(price_raw) if price_raw is not None else 0.0,
            seller=str(seller) if seller is not None else None,
            listing_id=listing_key(data.get("listingId"), token_id, seller),
            time=parsed,
        )
