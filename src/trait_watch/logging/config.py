# -*- coding: utf-8 -*-
"""Logging configuration: structlog over stdlib handlers, optional Logfire.

structlog renders each event once (console or JSON) and hands the string to
the stdlib handlers, which only route it (console stream, rotating file).
"""

from __future__ import annotations

import logging
import logfire
import structlog
from typing import Any
from structlog.types import EventDict, Processor
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from trait_watch.config import Settings, get_settings

# Map standard logging levels to Logfire levels
LOG_LEVEL_TO_LOGFIRE: dict[str, str] = {
    "DEBUG": "debug",
    "INFO": "info",
    "WARNING": "warn",
    "ERROR": "error",
    "CRITICAL": "fatal",
}

# Chatty at INFO (telegram long-polls through httpx).
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "telegram", "aiohttp.access")


def _service_context_processor(settings: Settings) -> Processor:
    """Build a processor stamping app identity and the watched collection on every event."""
    app = settings.app
    static_fields: dict[str, Any] = {"app_name": app.app_name, "environment": app.environment}
    if app.service_name:
        static_fields["service_name"] = app.service_name
    if app.service_version:
        static_fields["service_version"] = app.service_version
    collection = settings.monitor.collection_symbol

    def _add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.update(static_fields)
        event_dict.setdefault("collection_symbol", collection)
        return event_dict

    return _add_service_context


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _build_handlers(settings: Settings) -> list[logging.Handler]:
    cfg = settings.logging
    handlers: list[logging.Handler] = []

    if cfg.log_to_console:
        console = logging.StreamHandler()
        console.setLevel(_level(cfg.console_level))
        handlers.append(console)

    if cfg.log_to_file:
        path = Path(cfg.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        rotating = TimedRotatingFileHandler(
            path,
            when=cfg.log_file_when,
            interval=cfg.log_file_interval,
            backupCount=cfg.log_file_backup_count,
            encoding="utf-8",
            utc=cfg.log_file_utc,
        )
        rotating.setLevel(_level(cfg.file_level))
        handlers.append(rotating)

    for handler in handlers:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handlers


def _renderer(settings: Settings) -> Processor:
    # A log file is always machine-readable, so it forces JSON for every handler.
    cfg = settings.logging
    if cfg.log_to_file or cfg.json_format:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _configure_logfire(settings: Settings) -> None:
    app = settings.app
    cfg = settings.logging
    logfire.configure(
        token=cfg.logfire_token,
        service_name=app.service_name or app.app_name,
        service_version=app.service_version,
        min_level=LOG_LEVEL_TO_LOGFIRE.get(cfg.logfire_level, "info"),  # type: ignore[arg-type]
        environment=app.environment,
    )


def configure_logging(settings: Settings | None = None) -> None:
    """Configure stdlib handlers, structlog and (optionally) Logfire from settings.

    Safe to call more than once; the last call wins.
    """
    settings = settings or get_settings()

    handlers = _build_handlers(settings)
    if handlers:
        min_level = min(h.level for h in handlers)
        logging.basicConfig(level=min_level, handlers=handlers, force=True)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(max(logging.WARNING, min_level))

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _service_context_processor(settings),
    ]
    if settings.logging.logfire_enabled:
        _configure_logfire(settings)
        processors.append(logfire.StructlogProcessor())  # type: ignore[arg-type]
    if handlers:
        renderer = _renderer(settings)
        if isinstance(renderer, structlog.processors.JSONRenderer):
            processors.append(structlog.processors.format_exc_info)
        processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
