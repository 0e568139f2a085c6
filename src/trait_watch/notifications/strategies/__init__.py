"""Notification strategies."""

from trait_watch.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from trait_watch.notifications.strategies.console import ConsoleNotifier
from trait_watch.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
