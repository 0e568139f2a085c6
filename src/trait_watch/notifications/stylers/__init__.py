"""Notification stylers."""

from trait_watch.notifications.stylers.notification_styler import EventNotificationStyler

__all__ = ["EventNotificationStyler"]
