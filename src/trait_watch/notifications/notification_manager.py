"""Notification service: fan-out of messages to the registered channels."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog

from trait_watch.notifications.strategies import BaseNotificationStrategy
from trait_watch.notifications.types import NotificationMessage


@dataclass
class NotificationService:
    """Fan a message out to every channel that registered successfully.

    Alerts go through send(), which returns once every channel has been
    tried, so a poll cycle delivers its alerts in order. Lifecycle messages
    (monitor started/stopped) go through notify(), which only enqueues; a
    background worker drains the queue and shutdown() waits for it.

    A channel that raises is logged and skipped: one broken channel never
    blocks the others or fails the caller.
    """

    notifiers: list[BaseNotificationStrategy]
    queue_size: int = 100
    get_logger: Callable[[str], Any] = field(default=structlog.get_logger)
    _queue: asyncio.Queue[NotificationMessage] | None = field(init=False, default=None)
    _worker_task: asyncio.Task[None] | None = field(init=False, default=None)
    _logger: Any = field(init=False)

    def __post_init__(self) -> None:
        self._logger = self.get_logger("NotificationService")

    @property
    def active_channels(self) -> list[str]:
        """Names of channels currently accepting messages."""
        return [n.name for n in self.notifiers if n.is_running]

    async def initialize(self) -> list[str]:
        """Register every channel, then start the queue worker.

        Returns:
            Names of the channels whose registration succeeded.
        """
        for notifier in self.notifiers:
            await notifier.initialize()
        active = self.active_channels
        self._logger.info(
            "notification_channels_registered",
            notification_channels=active,
            notification_declined=len(self.notifiers) - len(active),
        )
        if self.notifiers:
            queue = asyncio.Queue[NotificationMessage](maxsize=self.queue_size)
            self._queue = queue
            self._worker_task = asyncio.create_task(self._drain_queue(queue))
        return active

    async def shutdown(self) -> None:
        """Deliver what is still queued, stop the worker, release every channel."""
        queue, worker = self._queue, self._worker_task
        self._queue = None
        self._worker_task = None
        if queue is not None:
            queue.shutdown()
            await queue.join()
        if worker is not None:
            await worker
        for notifier in self.notifiers:
            await notifier.shutdown()
        self._logger.debug("notification_shutdown_complete")

    def notify(self, message: NotificationMessage) -> None:
        """Queue a message for background delivery; returns immediately."""
        if self._queue is None:
            if self.notifiers:
                raise RuntimeError("NotificationService not initialized")
            return
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            self._logger.warning(
                "notification_queue_full_dropped",
                notification_event_type=message.event_type,
            )

    async def send(self, message: NotificationMessage) -> int:
        """Deliver a message to every channel before returning.

        Returns:
            Number of running channels that accepted the message without raising.
        """
        return await self._dispatch(message)

    async def _drain_queue(self, queue: asyncio.Queue[NotificationMessage]) -> None:
        while True:
            try:
                message = await queue.get()
            except asyncio.QueueShutDown:
                return
            try:
                await self._dispatch(message)
            finally:
                queue.task_done()

    async def _dispatch(self, message: NotificationMessage) -> int:
        delivered = 0
        for notifier in self.notifiers:
            if not notifier.is_running:
                continue
            try:
                await notifier.send_notification(message)
            except Exception as e:
                self._logger.error(
                    "notification_channel_failed",
                    notification_event_type=message.event_type,
                    notification_channel=notifier.name,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                continue
            delivered += 1
        self._logger.debug(
            "notification_dispatched",
            notification_event_type=message.event_type,
            notification_delivered=delivered,
        )
        return delivered
