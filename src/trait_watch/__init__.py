"""Trait watch: async marketplace listing monitor with trait + price alerts."""

from trait_watch.clients import AsyncHttpClient, MarketplaceApiClient
from trait_watch.config import get_settings
from trait_watch.DI import Container
from trait_watch.services import ListingPoller

__version__ = "0.1.0"
__all__ = [
    "AsyncHttpClient",
    "MarketplaceApiClient",
    "Container",
    "ListingPoller",
    "get_settings",
]
