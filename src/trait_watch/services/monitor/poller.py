"""Listing poller: fetch -> normalize -> match -> dedupe -> alert, on a fixed interval.

State machine: IDLE --start()--> ACTIVE --stop()--> IDLE. start() runs one
cycle immediately, then arms a repeating timer. Cycles never overlap: a
timer tick that finds a cycle still in flight is skipped. stop() disarms the
timer only; a cycle already running is allowed to finish.
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from trait_watch.exceptions import MarketplaceAPIError, PersistenceError
from trait_watch.models.alert import Alert
from trait_watch.models.filter_config import FilterConfig
from trait_watch.models.listing import Listing
from trait_watch.models.poller_session import PollerSession, PollerState
from trait_watch.models.seen_listing import SeenListing
from trait_watch.notifications.types import NotificationMessage
from trait_watch.services.listing_normalizer import ListingNormalizer
from trait_watch.services.matching import matches, parse_threshold
from trait_watch.utils.validation import mask_address

if TYPE_CHECKING:
    from trait_watch.clients.marketplace_api import MarketplaceApiClient
    from trait_watch.config import Settings
    from trait_watch.notifications.notification_manager import NotificationService
    from trait_watch.persistence.repositories.interfaces import (
        IAlertRepository,
        ISeenListingRepository,
    )


@dataclass(frozen=True)
class PollCycleResult:
    """Outcome of one polling cycle."""

    fetched: int = 0
    """Records in the feed snapshot."""
    matched: int = 0
    """Listings satisfying the filter (already-seen ones included)."""
    alerted: int = 0
    """New alerts raised."""
    skipped: int = 0
    """Records dropped because normalization or evaluation raised."""
    persist_failures: int = 0
    error: str | None = None
    """Set when the fetch failed and the cycle was aborted."""

    @property
    def success(self) -> bool:
        return self.error is None


def _format_price(price: float) -> str:
    if price.is_integer():
        return str(int(price))
    return f"{price:.6f}".rstrip("0").rstrip(".")


def describe_filter(filter_config: FilterConfig, default_threshold: float) -> str:
    """Human-readable filter summary for notifications and logs."""
    threshold = parse_threshold(filter_config.threshold, default_threshold)
    return f"{filter_config.trait_name}={filter_config.trait_value}, price <= {_format_price(threshold)}"


class ListingPoller:
    """Polls the marketplace feed and raises one alert per newly matching listing."""

    def __init__(
        self,
        settings: Settings,
        marketplace_api: MarketplaceApiClient,
        seen_listing_repository: ISeenListingRepository,
        alert_repository: IAlertRepository,
        notification_service: NotificationService,
        *,
        session: PollerSession | None = None,
        normalizer: ListingNormalizer | None = None,
        clock: Callable[[], datetime] | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the poller.

        Args:
            settings: Application settings (uses settings.monitor).
            marketplace_api: Listings feed client (injected).
            seen_listing_repository: Dedup ledger.
            alert_repository: Bounded alert history.
            notification_service: Notification fan-out; alerts use its awaited send().
            session: Poller session; built from settings.monitor when omitted.
            normalizer: Listing normalizer; default extraction rules when omitted.
            clock: Returns the current time for alert timestamps (UTC by default).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        mon = settings.monitor
        self._settings = settings
        self._api = marketplace_api
        self._seen_repo = seen_listing_repository
        self._alert_repo = alert_repository
        self._notifications = notification_service
        self._session = session or PollerSession(filter=mon.initial_filter())
        self._normalizer = normalizer or ListingNormalizer()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._timer_task: asyncio.Task[None] | None = None
        self._cycle_task: asyncio.Task[PollCycleResult | None] | None = None

    @property
    def session(self) -> PollerSession:
        return self._session

    @property
    def state(self) -> PollerState:
        return self._session.state

    @property
    def is_timer_armed(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    async def restore_history(self) -> list[Alert]:
        """Load the persisted alert history and seed the dedup ledger from it.

        Call once at startup, before start().
        """
        alerts = await self._alert_repo.load_all()
        await self._seen_repo.seed(a.listing_id for a in alerts)
        self._logger.info(
            "poller_history_restored",
            poller_history_count=len(alerts),
            poller_seen_count=await self._seen_repo.count(),
        )
        return alerts

    async def start(self) -> bool:
        """IDLE -> ACTIVE: run one cycle now, then arm the repeating timer.

        Returns:
            False if the poller was already active (no-op).
        """
        if not self._session.activate(now=self._clock()):
            self._logger.debug("poller_start_ignored_already_active")
            return False

        mon = self._settings.monitor
        self._logger.info(
            "poller_started",
            poller_poll_seconds=mon.poll_seconds,
            poller_filter=describe_filter(self._session.filter, mon.default_threshold),
        )
        await self.run_cycle()
        # stop() may have been called while the first cycle was running
        if self._session.is_active and not self.is_timer_armed:
            self._timer_task = asyncio.create_task(self._timer_loop(mon.poll_seconds))
        return True

    async def stop(self) -> bool:
        """ACTIVE -> IDLE: disarm the timer. A cycle in flight finishes on its own.

        Returns:
            False if the poller was already idle (no-op).
        """
        if not self._session.deactivate(now=self._clock()):
            self._logger.debug("poller_stop_ignored_already_idle")
            return False

        timer = self._timer_task
        self._timer_task = None
        if timer is not None:
            timer.cancel()
            try:
                await timer
            except asyncio.CancelledError:
                pass
        self._logger.info(
            "poller_stopped",
            poller_cycles_run=self._session.cycles_run,
            poller_cycle_in_flight=self._session.cycle_in_flight,
        )
        return True

    async def wait_idle(self) -> None:
        """Wait for a timer-spawned cycle that is still running (used on shutdown)."""
        task = self._cycle_task
        if task is not None and not task.done():
            await task

    def update_filter(self, filter_config: FilterConfig) -> None:
        """Replace the filter; the next cycle picks it up."""
        self._session.update_filter(filter_config)
        self._logger.info(
            "poller_filter_updated",
            poller_filter=describe_filter(filter_config, self._settings.monitor.default_threshold),
        )

    async def run_cycle(self) -> PollCycleResult | None:
        """Run one polling cycle unless another is in flight.

        Never raises for fetch, record or persistence errors; those are
        logged and reflected in the result.

        Returns:
            The cycle result, or None if skipped (in flight) or crashed.
        """
        if self._session.cycle_in_flight:
            self._logger.info("poll_cycle_skipped_in_flight")
            return None
        self._session.cycle_in_flight = True
        try:
            return await self._poll_once()
        except Exception as e:
            self._logger.exception(
                "poll_cycle_crashed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return None
        finally:
            self._session.cycle_in_flight = False

    async def _timer_loop(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            if not self._session.is_active:
                return
            if self._session.cycle_in_flight:
                self._logger.info("poll_cycle_skipped_in_flight")
                continue
            self._cycle_task = asyncio.create_task(self.run_cycle())

    async def _poll_once(self) -> PollCycleResult:
        mon = self._settings.monitor
        filter_config = self._session.filter
        with bound_contextvars(
            poll_cycle_id=uuid.uuid4().hex[:8],
            poll_collection=mon.collection_symbol,
        ):
            try:
                records = await self._api.get_listings(mon.collection_symbol)
            except MarketplaceAPIError as e:
                self._logger.warning(
                    "poll_fetch_failed",
                    http_status_code=e.status_code,
                    error_message=str(e),
                )
                return PollCycleResult(error=str(e))

            matched = alerted = skipped = persist_failures = 0
            for index, record in enumerate(records):
                try:
                    listing = self._normalizer.normalize(record)
                    is_match = matches(
                        listing,
                        filter_config,
                        default_threshold=mon.default_threshold,
                    )
                except Exception as e:
                    skipped += 1
                    self._logger.warning(
                        "poll_listing_skipped",
                        poll_record_index=index,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    continue
                if not is_match:
                    continue
                matched += 1
                outcome = await self._alert_if_new(listing, filter_config)
                if outcome is True:
                    alerted += 1
                elif outcome is None:
                    persist_failures += 1

            self._session.cycles_run += 1
            result = PollCycleResult(
                fetched=len(records),
                matched=matched,
                alerted=alerted,
                skipped=skipped,
                persist_failures=persist_failures,
            )
            self._logger.info(
                "poll_cycle_completed",
                poll_fetched=result.fetched,
                poll_matched=result.matched,
                poll_alerted=result.alerted,
                poll_skipped=result.skipped,
                poll_persist_failures=result.persist_failures,
            )
            return result

    async def _alert_if_new(self, listing: Listing, filter_config: FilterConfig) -> bool | None:
        """Persist, mark and notify for an unseen listing.

        Returns True if alerted, False if already seen, None if persisting
        failed (the listing stays unseen so the next cycle retries it).
        """
        listing_id = listing.listing_id
        if await self._seen_repo.has_seen(listing_id):
            return False

        alert = Alert.from_listing(listing, time=self._clock())
        try:
            await self._alert_repo.append(alert)
        except PersistenceError as e:
            self._logger.error(
                "poll_alert_persist_failed",
                listing_id=listing_id,
                error_message=str(e),
            )
            return None
        await self._seen_repo.mark_seen(SeenListing.create(listing_id, seen_at=alert.time))
        await self._notifications.send(self._build_message(alert, filter_config))
        self._logger.info(
            "poll_listing_alerted",
            listing_id=listing_id,
            listing_token_id=alert.token_id,
            listing_price=alert.price,
            listing_seller_masked=mask_address(alert.seller),
        )
        return True

    def _build_message(self, alert: Alert, filter_config: FilterConfig) -> NotificationMessage:
        mon = self._settings.monitor
        return NotificationMessage(
            event_type="listing_matched",
            title="NFT found",
            message=f"#{alert.token_id} listed at {_format_price(alert.price)} {mon.currency_label}",
            payload={
                "token_id": alert.token_id,
                "price": alert.price,
                "currency": mon.currency_label,
                "seller": alert.seller,
                "listing_id": alert.listing_id,
                "time": alert.time.isoformat(),
                "filter": describe_filter(filter_config, mon.default_threshold),
            },
        )
