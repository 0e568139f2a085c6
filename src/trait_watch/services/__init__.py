# -*- coding: utf-8 -*-
"""Application services."""

from trait_watch.services.listing_normalizer import (
    ExtractionRules,
    ListingNormalizer,
    normalize_listing,
)
from trait_watch.services.matching import matches, parse_threshold
from trait_watch.services.monitor import ListingPoller, PollCycleResult

__all__ = [
    "ExtractionRules",
    "ListingNormalizer",
    "ListingPoller",
    "PollCycleResult",
    "matches",
    "normalize_listing",
    "parse_threshold",
]
