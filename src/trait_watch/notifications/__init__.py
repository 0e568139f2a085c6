"""Notification subsystem."""

from trait_watch.notifications.notification_manager import (
    NotificationService,
)
from trait_watch.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from trait_watch.notifications.stylers import EventNotificationStyler
from trait_watch.notifications.types import (
    NotificationMessage,
    NotificationStyler,
)

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "EventNotificationStyler",
    "TelegramNotifier",
    "NotificationMessage",
    "NotificationService",
    "NotificationStyler",
]
