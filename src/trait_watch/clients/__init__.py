"""HTTP and API clients."""

from trait_watch.clients.http import AsyncHttpClient
from trait_watch.clients.marketplace_api import MarketplaceApiClient, extract_listings

__all__ = [
    "AsyncHttpClient",
    "MarketplaceApiClient",
    "extract_listings",
]
