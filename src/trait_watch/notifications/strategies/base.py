# -*- coding: utf-8 -*-
"""Notification channel contract."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from trait_watch.notifications.types import NotificationMessage

if TYPE_CHECKING:  # pragma: no cover
    from trait_watch.config.config import Settings


class BaseNotificationStrategy(ABC):
    """One delivery channel (console, Telegram, ...).

    Lifecycle: initialize() once at startup is the channel's registration
    (credential or permission check). A channel that is not running after
    registration drops every message it is given without raising.
    """

    def __init__(self, settings: "Settings") -> None:
        self.settings = settings

    @property
    def name(self) -> str:
        """Channel name used in logs."""
        return type(self).__name__

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """True once registration succeeded and until shutdown()."""

    @abstractmethod
    async def initialize(self) -> None:
        """Register the channel; must not raise for a declined registration."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Stop accepting messages and release resources."""

    @abstractmethod
    async def send_notification(self, message: NotificationMessage) -> None:
        """Deliver one message, best effort (no delivery receipt)."""
