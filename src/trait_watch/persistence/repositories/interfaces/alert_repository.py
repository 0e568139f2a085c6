"""Abstract interface for the alert history store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from trait_watch.models.alert import Alert


class IAlertRepository(ABC):
    """Bounded, newest-first alert history."""

    @abstractmethod
    async def load_all(self) -> list[Alert]:
        """Load the persisted history (newest first). Called once at startup."""
        ...

    @abstractmethod
    async def append(self, alert: Alert) -> None:
        """Prepend an alert, truncate to the cap and persist before returning.

        Raises:
            PersistenceError: If the write fails; the in-memory history is left unchanged.
        """
        ...

    @property
    @abstractmethod
    def alerts(self) -> tuple[Alert, ...]:
        """Current in-memory history, newest first."""
        ...
