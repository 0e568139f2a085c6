# -*- coding: utf-8 -*-
"""Domain models."""

from trait_watch.models.alert import Alert
from trait_watch.models.filter_config import FilterConfig
from trait_watch.models.listing import Listing, ListingTrait
from trait_watch.models.poller_session import PollerSession, PollerState
from trait_watch.models.seen_listing import SeenListing

__all__ = [
    "Alert",
    "FilterConfig",
    "Listing",
    "ListingTrait",
    "PollerSession",
    "PollerState",
    "SeenListing",
]
