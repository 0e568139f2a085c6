# -*- coding: utf-8 -*-
"""
Entry point for the listing watcher.

Startup: logging, settings check, container, notifier registration, history
restore, poller start (immediate cycle, then the interval timer). Shutdown on
SIGINT/SIGTERM or task cancellation: stop the timer, let the running cycle
finish, flush notifications, close the HTTP session.

Run with: python -m trait_watch.main  (or the ``trait-watch`` script)

Notebook usage:
    from trait_watch.main import run
    await run()  # Interrupt the kernel to stop.
"""
from __future__ import annotations

import asyncio
import signal
from contextlib import suppress
from typing import Any

import structlog

from trait_watch.DI import Container
from trait_watch.config import Settings, get_settings
from trait_watch.exceptions import MissingRequiredConfigError
from trait_watch.logging.config import configure_logging
from trait_watch.notifications.types import NotificationMessage
from trait_watch.services.monitor import ListingPoller, describe_filter


def _install_signal_handlers(stop_requested: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # add_signal_handler is unavailable on Windows event loops
        with suppress(NotImplementedError):
            loop.add_signal_handler(sig, stop_requested.set)


def _lifecycle_message(kind: str, settings: Settings, poller: ListingPoller) -> NotificationMessage:
    mon = settings.monitor
    verb = "started" if kind == "system_started" else "stopped"
    return NotificationMessage(
        event_type=kind,
        message=f"Watching {mon.collection_symbol} {verb}",
        payload={
            "collection_symbol": mon.collection_symbol,
            "filter": describe_filter(poller.session.filter, mon.default_threshold),
            "poll_seconds": f"{mon.poll_seconds:g}s",
        },
    )


def _require_settings(settings: Settings, logger: Any) -> None:
    if not settings.monitor.collection_symbol.strip():
        logger.error("main_missing_collection_symbol", setting="MONITOR__COLLECTION_SYMBOL")
        raise MissingRequiredConfigError("MONITOR__COLLECTION_SYMBOL")


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()
    _require_settings(settings, logger)

    container = Container()
    http_client = container.http_client()
    notifications = container.notification_service()
    poller = container.listing_poller()

    channels = await notifications.initialize()
    restored = await poller.restore_history()
    logger.info(
        "main_monitoring_started",
        poll_seconds=settings.monitor.poll_seconds,
        history_count=len(restored),
        notification_channels=channels,
    )
    notifications.notify(_lifecycle_message("system_started", settings, poller))

    stop_requested = asyncio.Event()
    _install_signal_handlers(stop_requested)
    try:
        await poller.start()
        await stop_requested.wait()
    finally:
        # Also reached on CancelledError, which then propagates.
        await poller.stop()
        await poller.wait_idle()
        notifications.notify(_lifecycle_message("system_stopped", settings, poller))
        await notifications.shutdown()
        await http_client.aclose()
        logger.info("main_shutdown_complete", cycles_run=poller.session.cycles_run)


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
