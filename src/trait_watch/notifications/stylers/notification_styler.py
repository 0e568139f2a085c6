# -*- coding: utf-8 -*-
"""Event-based notification styler with emoji separators (Telegram-style)."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Any

from trait_watch.notifications.types import NotificationMessage, NotificationStyler
from trait_watch.utils.validation import mask_address


class EventNotificationStyler(NotificationStyler):
    """Render notifications by event_type with emojis, separators and formatted sections.

    Plain text by default; HTML bold markup when parse_html is set (Telegram).
    """

    def render(self, message: NotificationMessage, *, parse_html: bool = False) -> str:
        """Dispatch to the appropriate renderer based on event_type."""
        if message.event_type == "listing_matched":
            return self._render_listing(message, parse_html)
        if message.event_type in ("system_started", "system_stopped"):
            return self._render_system(message, parse_html)
        return self._render_generic(message, parse_html)

    def _render_listing(self, message: NotificationMessage, html: bool) -> str:
        """Render a matched-listing alert."""
        payload: dict[str, Any] = dict(message.payload or {})
        emoji, default_title = self._title(message.event_type)
        title = message.title or default_title
        seller = payload.get("seller")

        lines = [
            f"{emoji} {self._bold(title, html)}\n",
            self._section(
                "💬 Alert",
                [("", message.message)],
                html,
            ),
            self._section(
                "🧸 Listing",
                [
                    ("🆔 Token", payload.get("token_id") or "N/A"),
                    ("💵 Price", self._format_price(payload.get("price"), payload.get("currency"))),
                    ("👛 Seller", mask_address(seller) if seller else "N/A"),
                    ("🔗 Listing ID", payload.get("listing_id") or ""),
                    ("🕒 Time", self._format_time(payload.get("time"))),
                ],
                html,
            ),
        ]
        filter_desc = payload.get("filter")
        if filter_desc:
            lines.append(self._section("🎯 Filter", [("", filter_desc)], html))
        return "\n".join([line for line in lines if line]).strip()

    def _render_system(self, message: NotificationMessage, html: bool) -> str:
        """Render system started/stopped notifications."""
        emoji, title = self._title(message.event_type)
        header = "🚀 Status" if message.event_type == "system_started" else "🛑 Status"
        lines = [f"{emoji} {self._bold(title, html)}\n", self._section(header, [("", message.message)], html)]
        payload = message.payload or {}
        details = [
            ("🧸 Collection", payload.get("collection_symbol") or ""),
            ("🎯 Filter", payload.get("filter") or ""),
            ("⏱️ Interval", payload.get("poll_seconds") or ""),
        ]
        lines.append(self._section("⚙️ Monitor", details, html))
        return "\n".join([line for line in lines if line]).strip()

    def _render_generic(self, message: NotificationMessage, html: bool) -> str:
        """Render unknown event types using message and payload."""
        emoji, title = self._title(message.event_type)
        lines = [f"{emoji} {self._bold(message.title or title, html)}", self._text(message.message, html)]
        if message.payload:
            for key in sorted(message.payload.keys()):
                value = message.payload.get(key)
                if value is not None:
                    lines.append(f"{self._bold(key + ':', html)} {self._text(str(value), html)}")
        return "\n".join(lines).strip()

    @staticmethod
    def _title(event_type: str) -> tuple[str, str]:
        """Get the emoji and title for the given event type."""
        mapping = {
            "listing_matched": ("✅", "NFT found"),
            "system_started": ("▶️", "Monitoring Started"),
            "system_stopped": ("⏹️", "Monitoring Stopped"),
        }
        return mapping.get(event_type, ("ℹ️", event_type.replace("_", " ").title()))

    def _section(self, header: str, rows: list[tuple[str, Any]], html: bool) -> str:
        """Format a section with a header and rows."""
        content_lines: list[str] = []
        for label, value in rows:
            if not value:
                continue
            text = self._text(str(value), html)
            if label:
                content_lines.append(f"{self._format_label(label, html)} {text}")
            else:
                content_lines.append(text)
        if not content_lines:
            return ""
        lines = [f"{self._format_heading(header, html)}\n{'─'*12}", *content_lines]
        return "\n".join(lines) + "\n"

    @staticmethod
    def _format_price(value: Any, currency: Any) -> str:
        """Format a price with up to 4 decimals and an optional currency label."""
        if value is None:
            return "N/A"
        try:
            number = float(value)
        except (TypeError, ValueError):
            return str(value)
        text = f"{number:,.4f}".rstrip("0").rstrip(".")
        return f"{text} {currency}" if currency else text

    @staticmethod
    def _format_time(value: Any) -> str:
        """Format an ISO-8601 timestamp for display when possible."""
        if not value:
            return "N/A"
        try:
            return datetime.fromisoformat(str(value)).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        except ValueError:
            return str(value)

    @staticmethod
    def _text(text: str, html: bool) -> str:
        return escape(text, quote=False) if html else text

    @classmethod
    def _bold(cls, text: str, html: bool) -> str:
        return f"<b>{cls._text(text, html)}</b>" if html else text

    @classmethod
    def _format_heading(cls, text: str, html: bool) -> str:
        """Format a section heading (emoji kept outside the bold markup)."""
        if not text:
            return ""
        emoji, _, remainder = text.partition(" ")
        if remainder:
            return f"{emoji} {cls._bold(remainder, html)}"
        return cls._bold(text, html)

    @classmethod
    def _format_label(cls, label: str, html: bool) -> str:
        """Format row labels."""
        if not label:
            return ""
        emoji, _, remainder = label.partition(" ")
        if remainder:
            return f"{emoji} {cls._bold(remainder + ':', html)}"
        return cls._bold(label + ":", html)
