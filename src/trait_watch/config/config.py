# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, MONITOR__TRAIT_NAME.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from trait_watch.models.filter_config import FilterConfig


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "trait-watch"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    # Per-target levels (only the 5 standard levels)
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # Local outputs
    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/trait_watch.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    # Logfire integration via structlog
    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the marketplace listings feed (HTTP)."""

    model_config = SettingsConfigDict(extra="ignore")

    marketplace_host: str = Field(
        default="https://api-mainnet.magiceden.io",
        description="Marketplace API base URL.",
    )
    timeout_seconds: float = Field(
        default=15.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=1,
        ge=1,
        le=20,
        description="Attempts per request. 1 leaves retrying to the next poll cycle.",
    )


class MonitorSettings(BaseSettings):
    """Configuration for the listing poller and its initial filter."""

    model_config = SettingsConfigDict(extra="ignore")

    collection_symbol: str = Field(
        default="steadyteddys",
        description="Collection whose listings are watched.",
    )
    poll_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=3600.0,
        description="Interval between polling cycles in seconds.",
    )
    trait_name: str = "Clothing"
    trait_value: str = "Saudi"
    # Kept as text: an unparsable value falls back to default_threshold at evaluation time.
    threshold: str = "200"
    default_threshold: float = Field(default=200.0, ge=0.0)
    history_limit: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="Maximum number of alerts kept in the persisted history.",
    )
    currency_label: str = Field(
        default="BERA",
        description="Currency label used in notification text only.",
    )

    @field_validator("collection_symbol", "trait_name", "trait_value", "threshold", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    def initial_filter(self) -> FilterConfig:
        """Filter the poller starts with (replaceable at runtime)."""
        return FilterConfig(
            trait_name=self.trait_name,
            trait_value=self.trait_value,
            threshold=self.threshold,
        )


class StorageSettings(BaseSettings):
    """Key-value persistence for the alert history."""

    model_config = SettingsConfigDict(extra="ignore")

    backend: Literal["file", "memory"] = "file"
    path: str = "data/trait_watch.json"
    alerts_key: str = "alerts"


class TelegramNotificationSettings(BaseSettings):
    """Telegram notifications (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    chat_id: Optional[str] = Field(default=None, description="Telegram chat ID.")
    silent: bool = Field(
        default=True,
        description="Deliver messages without notification sound.",
    )
    messages_per_minute: int = Field(default=30, ge=1, le=120)
    max_retries: int = Field(default=5, ge=0, le=20)
    backoff_base_seconds: float = Field(default=1.0, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=10.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=20.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=10.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console notification settings."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, MONITOR__THRESHOLD.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as nested dicts, e.g.:
        - from_env(monitor={"poll_seconds": 5})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from trait_watch.config import get_settings

        settings = get_settings()
        symbol = settings.monitor.collection_symbol
    """
    return Settings.from_env()
