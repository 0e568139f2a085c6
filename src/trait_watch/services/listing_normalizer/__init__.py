# -*- coding: utf-8 -*-
"""Raw feed record -> Listing normalization."""

from trait_watch.services.listing_normalizer.normalizer import (
    DEFAULT_RULES,
    ExtractionRules,
    ListingNormalizer,
    normalize_listing,
)

__all__ = ["DEFAULT_RULES", "ExtractionRules", "ListingNormalizer", "normalize_listing"]
