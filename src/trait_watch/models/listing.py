"""Listing: canonical, immutable view of one marketplace offer.

Rebuilt from the raw feed on every poll cycle (see services.listing_normalizer);
never persisted. Trait names and values keep their original spelling and are
compared case-insensitively by the matcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from trait_watch.utils.dedupe import listing_key


@dataclass(frozen=True, slots=True)
class ListingTrait:
    """One (trait type, value) pair of a collectible."""

    trait_type: str
    value: str

    def matches(self, trait_type: str, value: str) -> bool:
        """Case-insensitive comparison on both name and value."""
        return (
            self.trait_type.casefold() == trait_type.casefold()
            and self.value.casefold() == value.casefold()
        )


@dataclass(frozen=True, slots=True)
class Listing:
    """A single offer of one collectible item at a price."""

    token_id: str | None
    """Token identifier; None when the feed record carries none."""
    price: float
    """Price in the feed's native currency (>= 0; malformed prices degrade to 0)."""
    seller: str | None = None
    traits: tuple[ListingTrait, ...] = ()
    feed_listing_id: str | None = None
    """Listing identifier as provided by the feed, if any."""

    @property
    def listing_id(self) -> str:
        """Stable deduplication key (feed id, else token id + seller)."""
        return listing_key(self.feed_listing_id, self.token_id, self.seller)

    @property
    def attributes(self) -> Mapping[str, str]:
        """Trait name (casefolded) -> trait value. Later duplicates win."""
        return MappingProxyType({t.trait_type.casefold(): t.value for t in self.traits})

    def has_trait(self, trait_type: str, value: str) -> bool:
        """Return True if any trait entry matches (case-insensitive)."""
        return any(t.matches(trait_type, value) for t in self.traits)
