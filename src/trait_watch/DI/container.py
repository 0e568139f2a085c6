# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from dependency_injector import containers, providers

from trait_watch.config import Settings, get_settings
from trait_watch.clients.http import AsyncHttpClient
from trait_watch.clients.marketplace_api import MarketplaceApiClient
from trait_watch.notifications.notification_manager import NotificationService
from trait_watch.notifications.strategies.base import BaseNotificationStrategy
from trait_watch.notifications.strategies.console import ConsoleNotifier
from trait_watch.notifications.strategies.telegram import TelegramNotifier
from trait_watch.notifications.stylers.notification_styler import EventNotificationStyler
from trait_watch.persistence.repositories.in_memory import InMemorySeenListingRepository
from trait_watch.persistence.repositories.key_value import KeyValueAlertRepository
from trait_watch.persistence.stores import (
    IKeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
)
from trait_watch.services.listing_normalizer import ListingNormalizer
from trait_watch.services.monitor import ListingPoller


def _build_key_value_store(settings: Settings) -> IKeyValueStore:
    """Pick the key-value backend from settings.storage."""
    if settings.storage.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.storage.path)


def _build_notification_notifiers(
    settings: Settings,
    styler: EventNotificationStyler,
) -> list[BaseNotificationStrategy]:
    notifiers: list[BaseNotificationStrategy] = []
    if settings.console.enabled:
        notifiers.append(ConsoleNotifier(settings=settings, styler=styler))
    if settings.telegram.enabled:
        notifiers.append(TelegramNotifier(settings=settings, styler=styler))
    return notifiers


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, feed client, stores, notifiers and the poller."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    marketplace_api_client = providers.Singleton(
        MarketplaceApiClient,
        http_client=http_client,
        settings=config,
    )

    notification_styler = providers.Singleton(EventNotificationStyler)

    notification_service = providers.Singleton(
        NotificationService,
        notifiers=providers.Callable(_build_notification_notifiers, config, notification_styler),
    )

    key_value_store = providers.Singleton(_build_key_value_store, config)

    seen_listing_repository = providers.Singleton(InMemorySeenListingRepository)

    alert_repository = providers.Singleton(
        KeyValueAlertRepository,
        store=key_value_store,
        key=config.provided.storage.alerts_key,
        max_size=config.provided.monitor.history_limit,
    )

    listing_normalizer = providers.Singleton(ListingNormalizer)

    listing_poller = providers.Singleton(
        ListingPoller,
        settings=config,
        marketplace_api=marketplace_api_client,
        seen_listing_repository=seen_listing_repository,
        alert_repository=alert_repository,
        notification_service=notification_service,
        normalizer=listing_normalizer,
    )
