"""Trait + price predicate evaluated against normalized listings."""

from __future__ import annotations

from trait_watch.models.filter_config import FilterConfig
from trait_watch.models.listing import Listing
from trait_watch.utils.validation import coerce_number, leading_number

DEFAULT_THRESHOLD = 200.0


def parse_threshold(raw: str | float | None, default: float = DEFAULT_THRESHOLD) -> float:
    """Parse the configured price ceiling.

    Numbers are used as-is. Text is read up to the end of its leading number,
    so "150abc" gives 150. Anything else (empty, "abc", NaN) yields default;
    parsing never raises.
    """
    value = leading_number(raw) if isinstance(raw, str) else coerce_number(raw, allow_text=False)
    return default if value is None else value


def matches(
    listing: Listing,
    filter_config: FilterConfig,
    *,
    default_threshold: float = DEFAULT_THRESHOLD,
) -> bool:
    """Return True iff the listing carries the trait and is priced at or below the threshold.

    Trait name and value are compared case-insensitively.
    """
    threshold = parse_threshold(filter_config.threshold, default_threshold)
    if listing.price > threshold:
        return False
    return listing.has_trait(filter_config.trait_name, filter_config.trait_value)
