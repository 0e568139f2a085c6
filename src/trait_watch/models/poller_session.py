"""PollerSession: explicit mutable state owned by the listing poller.

Holds the monitoring state, the current filter and the in-flight flag so the
single-writer rule (one cycle at a time) can be enforced and tested without
the poller's timer.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from trait_watch.models.filter_config import FilterConfig


class PollerState(str, Enum):
    """Poller lifecycle state."""

    IDLE = "IDLE"
    """Not monitoring; no timer armed."""
    ACTIVE = "ACTIVE"
    """Monitoring; timer armed."""


@dataclass(slots=True)
class PollerSession:
    """Session state shared by the poller's timer and its cycles."""

    filter: FilterConfig
    """Read fresh at the start of each cycle."""
    state: PollerState = PollerState.IDLE
    cycle_in_flight: bool = False
    started_at: datetime | None = None
    stopped_at: datetime | None = None
    cycles_run: int = 0

    @property
    def is_active(self) -> bool:
        return self.state is PollerState.ACTIVE

    def update_filter(self, new_filter: FilterConfig) -> None:
        """Replace the filter; takes effect on the next cycle."""
        self.filter = new_filter

    def activate(self, *, now: datetime | None = None) -> bool:
        """Move IDLE -> ACTIVE. Returns False if already active."""
        if self.state is PollerState.ACTIVE:
            return False
        self.state = PollerState.ACTIVE
        self.started_at = now or datetime.now(UTC)
        self.stopped_at = None
        return True

    def deactivate(self, *, now: datetime | None = None) -> bool:
        """Move ACTIVE -> IDLE. Returns False if already idle."""
        if self.state is PollerState.IDLE:
            return False
        self.state = PollerState.IDLE
        self.stopped_at = now or datetime.now(UTC)
        return True
