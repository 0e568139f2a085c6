# -*- coding: utf-8 -*-
"""Unit tests for the trait + price predicate."""

from __future__ import annotations

import pytest

from trait_watch.models.filter_config import FilterConfig
from trait_watch.models.listing import Listing, ListingTrait
from trait_watch.services.matching import matches, parse_threshold


def _listing(price: float, clothing: str = "Saudi") -> Listing:
    return Listing(
        token_id="101",
        price=price,
        seller="sellerA",
        traits=(ListingTrait("Background", "Sand"), ListingTrait("Clothing", clothing)),
    )


def _filter(threshold: str | float = "200") -> FilterConfig:
    return FilterConfig(trait_name="Clothing", trait_value="Saudi", threshold=threshold)


def test_matches_trait_under_threshold() -> None:
    assert matches(_listing(150), _filter()) is True


def test_matches_price_equal_to_threshold() -> None:
    assert matches(_listing(200), _filter()) is True


def test_does_not_match_price_above_threshold() -> None:
    assert matches(_listing(250), _filter()) is False


def test_does_not_match_other_trait_value() -> None:
    assert matches(_listing(150, clothing="Egypt"), _filter()) is False


def test_matches_trait_case_insensitively() -> None:
    config = FilterConfig(trait_name="clothing", trait_value="SAUDI", threshold="200")
    assert matches(_listing(150), config) is True


def test_does_not_match_listing_without_traits() -> None:
    listing = Listing(token_id="101", price=1.0)
    assert matches(listing, _filter()) is False


def test_unparsable_threshold_uses_default() -> None:
    assert matches(_listing(150), _filter("abc")) is True
    assert matches(_listing(250), _filter("abc")) is False
    assert matches(_listing(250), _filter("abc"), default_threshold=300) is True


def test_zero_threshold_is_honoured() -> None:
    assert matches(_listing(0), _filter("0")) is True
    assert matches(_listing(1), _filter("0")) is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("150", 150.0),
        (" 42.5 ", 42.5),
        (75, 75.0),
        ("", 200.0),
        (None, 200.0),
        ("150abc", 150.0),
        ("  .5 BERA", 0.5),
        ("nan", 200.0),
        ("inf", 200.0),
        (float("nan"), 200.0),
    ],
)
def test_parse_threshold(raw: str | float | None, expected: float) -> None:
    assert parse_threshold(raw) == expected


def test_threshold_with_trailing_text_uses_leading_number() -> None:
    assert matches(_listing(150), _filter("150abc")) is True
    assert matches(_listing(180), _filter("150abc")) is False
