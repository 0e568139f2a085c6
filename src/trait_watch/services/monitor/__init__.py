"""Listing monitor (poller state machine and polling cycle)."""

from trait_watch.services.monitor.poller import (
    ListingPoller,
    PollCycleResult,
    describe_filter,
)

__all__ = ["ListingPoller", "PollCycleResult", "describe_filter"]
