# -*- coding: utf-8 -*-
"""Unit tests for Alert and Listing models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from trait_watch.models.alert import Alert
from trait_watch.models.listing import Listing, ListingTrait
from trait_watch.models.seen_listing import SeenListing


def _listing(**overrides: object) -> Listing:
    data: dict[str, object] = {
        "token_id": "101",
        "price": 150.0,
        "seller": "sellerA",
        "traits": (ListingTrait("Clothing", "Saudi"),),
    }
    data.update(overrides)
    return Listing(**data)  # type: ignore[arg-type]


def test_listing_id_prefers_feed_id_then_composite() -> None:
    assert _listing(feed_listing_id="L-1").listing_id == "L-1"
    assert _listing().listing_id == "101-sellerA"
    assert _listing(seller=None).listing_id == "101-s"


def test_listing_has_trait_is_case_insensitive() -> None:
    listing = _listing()
    assert listing.has_trait("clothing", "SAUDI") is True
    assert listing.has_trait("Clothing", "Egypt") is False
    assert listing.attributes["clothing"] == "Saudi"


def test_alert_from_listing_copies_fields(now_utc: datetime) -> None:
    alert = Alert.from_listing(_listing(), time=now_utc)

    assert alert.token_id == "101"
    assert alert.price == 150.0
    assert alert.seller == "sellerA"
    assert alert.listing_id == "101-sellerA"
    assert alert.time == now_utc


def test_alert_to_dict_uses_persisted_keys(now_utc: datetime) -> None:
    data = Alert.from_listing(_listing(feed_listing_id="L-1"), time=now_utc).to_dict()

    assert data == {
        "tokenId": "101",
        "price": 150.0,
        "seller": "sellerA",
        "listingId": "L-1",
        "time": "2026-02-13T12:00:00+00:00",
    }


def test_alert_from_dict_restores_dict_form(now_utc: datetime) -> None:
    original = Alert.from_listing(_listing(feed_listing_id="L-1"), time=now_utc)
    assert Alert.from_dict(original.to_dict()) == original


def test_alert_from_dict_accepts_zulu_time_and_missing_listing_id() -> None:
    alert = Alert.from_dict({"tokenId": 7, "price": "12.5", "seller": None, "time": "2026-01-01T00:00:00Z"})

    assert alert.token_id == "7"
    assert alert.price == 12.5
    assert alert.listing_id == "7-s"
    assert alert.time == datetime(2026, 1, 1, tzinfo=UTC)


def test_alert_from_dict_treats_naive_time_as_utc() -> None:
    alert = Alert.from_dict({"tokenId": "1", "price": 1, "listingId": "x", "time": "2026-01-01T08:30:00"})
    assert alert.time.tzinfo is UTC


@pytest.mark.parametrize(
    "data",
    [
        {"tokenId": "1", "price": 1},
        {"tokenId": "1", "price": 1, "time": "not-a-time"},
        {"tokenId": "1", "price": "abc", "time": "2026-01-01T00:00:00Z"},
    ],
)
def test_alert_from_dict_rejects_bad_entries(data: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        Alert.from_dict(data)


def test_seen_listing_create_strips_and_rejects_blank(now_utc: datetime) -> None:
    seen = SeenListing.create("  L-1 ", seen_at=now_utc)
    assert seen.listing_id == "L-1"
    assert seen.seen_at == now_utc
    with pytest.raises(ValueError):
        SeenListing.create("   ")
