"""Configuration subpackage."""

from trait_watch.config.config import (
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    MonitorSettings,
    Settings,
    StorageSettings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "LoggingSettings",
    "MonitorSettings",
    "Settings",
    "StorageSettings",
    "TelegramNotificationSettings",
    "ConsoleNotificationSettings",
    "get_settings",
]
