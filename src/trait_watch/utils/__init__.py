# -*- coding: utf-8 -*-
"""Utility modules."""

from trait_watch.utils.dedupe import MISSING_SELLER, listing_key
from trait_watch.utils.validation import coerce_number, first_present, leading_number, mask_address

__all__ = ["MISSING_SELLER", "coerce_number", "first_present", "leading_number", "listing_key", "mask_address"]
