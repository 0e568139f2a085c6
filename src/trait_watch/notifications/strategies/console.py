# -*- coding: utf-8 -*-
"""Console channel: alerts printed to a text stream."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from trait_watch.notifications.types import NotificationMessage
from trait_watch.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:  # pragma: no cover
    from trait_watch.config import Settings
    from trait_watch.notifications.types import NotificationStyler

_SEPARATOR = "─" * 32


class ConsoleNotifier(BaseNotificationStrategy):
    """Write plain-text notifications to stdout (or a given stream).

    Registration is granted unless the channel is disabled in settings.
    """

    def __init__(
        self,
        settings: "Settings",
        styler: "NotificationStyler",
        *,
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(settings)
        self._styler = styler
        # None means "sys.stdout at write time" so redirection keeps working.
        self._stream = stream
        self._registered = False

    @property
    def is_running(self) -> bool:
        return self._registered

    async def initialize(self) -> None:
        self._registered = self.settings.console.enabled

    async def shutdown(self) -> None:
        self._registered = False

    async def send_notification(self, message: NotificationMessage) -> None:
        if not self._registered:
            return
        stream = self._stream or sys.stdout
        stream.write(f"{_SEPARATOR}\n{self._styler.render(message)}\n")
        stream.flush()
