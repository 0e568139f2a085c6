"""Deduplication key for listings."""

from __future__ import annotations

from typing import Any

# Placeholder seller used when the feed omits it, so the key stays stable across polls.
MISSING_SELLER = "s"


def listing_key(feed_listing_id: Any, token_id: Any, seller: Any) -> str:
    """Return a stable key to identify a listing (for deduplication).

    Prefers the feed-provided listing id, then the composite token_id-seller.
    A missing token id renders as "None" so records without one still dedupe
    consistently with each other.
    """
    if feed_listing_id is not None and str(feed_listing_id).strip():
        return str(feed_listing_id).strip()
    seller_part = str(seller) if seller is not None and str(seller).strip() else MISSING_SELLER
    return f"{token_id}-{seller_part}"
