# -*- coding: utf-8 -*-
"""Telegram channel (python-telegram-bot, async)."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from datetime import timedelta
from typing import Any, Callable, Optional, TYPE_CHECKING

import structlog
from telegram import Bot
from telegram.error import (
    BadRequest,
    Forbidden,
    InvalidToken,
    RetryAfter,
    TelegramError,
)
from telegram.request import HTTPXRequest

from trait_watch.exceptions import MissingRequiredConfigError
from trait_watch.notifications.types import NotificationMessage
from trait_watch.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from trait_watch.config.config import Settings
    from trait_watch.notifications.types import NotificationStyler

# Sliding window for the per-chat message budget.
_RATE_WINDOW_SECONDS = 60.0
_MAX_BACKOFF_SECONDS = 60.0


class TelegramNotifier(BaseNotificationStrategy):
    """Deliver HTML-formatted alerts to one Telegram chat.

    Registration calls get_me(); a rejected token leaves the channel off for
    the rest of the session. Messages go out with notification sound disabled
    while settings.telegram.silent is set.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        bot: Optional[Bot] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        cfg = settings.telegram
        if not cfg.api_key:
            raise MissingRequiredConfigError("TELEGRAM__API_KEY")
        if not cfg.chat_id:
            raise MissingRequiredConfigError("TELEGRAM__CHAT_ID")

        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._styler = styler
        self._bot = bot
        self._chat_id = str(cfg.chat_id)
        self._registered = False
        self._sent_at: deque[float] = deque()

    @property
    def is_running(self) -> bool:
        return self._registered

    def _make_bot(self) -> Bot:
        cfg = self.settings.telegram
        return Bot(
            token=str(cfg.api_key),
            request=HTTPXRequest(
                connect_timeout=cfg.connect_timeout,
                read_timeout=cfg.read_timeout,
                write_timeout=cfg.write_timeout,
                pool_timeout=cfg.pool_timeout,
            ),
        )

    async def initialize(self) -> None:
        if not self.settings.telegram.enabled or self._registered:
            return
        if self._bot is None:
            self._bot = self._make_bot()
        try:
            me = await self._bot.get_me()
        except TelegramError as exc:
            self._logger.warning(
                "telegram_registration_failed",
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            return
        self._registered = True
        self._logger.info("telegram_registered", telegram_bot_username=getattr(me, "username", None))

    async def shutdown(self) -> None:
        self._registered = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._registered or self._bot is None:
            self._logger.debug("telegram_message_dropped_not_registered")
            return
        text = self._styler.render(message, parse_html=True)
        await self._wait_for_budget()

        cfg = self.settings.telegram
        for attempt in range(1, cfg.max_retries + 1):
            try:
                await self._bot.send_message(
                    chat_id=self._chat_id,
                    text=text,
                    parse_mode="HTML",
                    disable_notification=cfg.silent,
                )
            except TelegramError as exc:
                delay = self._retry_delay(exc, attempt)
                if delay is None:
                    self._logger.error(
                        "telegram_message_rejected",
                        error_type=type(exc).__name__,
                        error_message=str(exc),
                    )
                    return
                self._logger.warning(
                    "telegram_send_retry",
                    error_type=type(exc).__name__,
                    telegram_attempt=attempt,
                    telegram_max_retries=cfg.max_retries,
                    telegram_retry_in_seconds=delay,
                )
                await asyncio.sleep(delay)
                continue
            self._sent_at.append(time.monotonic())
            return

        self._logger.error(
            "telegram_message_dropped_retries_exhausted",
            notification_event_type=message.event_type,
        )

    def _retry_delay(self, exc: TelegramError, attempt: int) -> Optional[float]:
        """Seconds to wait before retrying, or None when retrying cannot help."""
        if isinstance(exc, RetryAfter):
            wait = exc.retry_after
            return wait.total_seconds() if isinstance(wait, timedelta) else float(wait)
        # BadRequest subclasses NetworkError, so it is classified before the generic case.
        if isinstance(exc, (BadRequest, Forbidden, InvalidToken)):
            return None
        base = self.settings.telegram.backoff_base_seconds
        return min(_MAX_BACKOFF_SECONDS, base * 2 ** (attempt - 1))

    async def _wait_for_budget(self) -> None:
        """Block until another message fits in messages_per_minute."""
        budget = self.settings.telegram.messages_per_minute
        now = time.monotonic()
        while self._sent_at and now - self._sent_at[0] >= _RATE_WINDOW_SECONDS:
            self._sent_at.popleft()
        if len(self._sent_at) >= budget:
            await asyncio.sleep(_RATE_WINDOW_SECONDS - (now - self._sent_at[0]))
