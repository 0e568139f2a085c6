# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

import pytest

from trait_watch.utils.validation import coerce_number, first_present, leading_number, mask_address


def test_first_present_returns_first_non_empty_value() -> None:
    record = {"tokenId": None, "tokenMint": "", "token": "T-9", "itemId": "I-1"}
    assert first_present(record, ("tokenId", "tokenMint", "token", "itemId")) == "T-9"


def test_first_present_keeps_falsy_non_empty_values() -> None:
    assert first_present({"price": 0}, ("price",)) == 0


def test_first_present_returns_none_when_nothing_qualifies() -> None:
    assert first_present({"a": None, "b": ""}, ("a", "b", "c")) is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (150, 150.0),
        (12.5, 12.5),
        ("200", 200.0),
        (" 99.5 ", 99.5),
        ("0", 0.0),
    ],
)
def test_coerce_number_accepts_numbers_and_numeric_text(raw: object, expected: float) -> None:
    assert coerce_number(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "150abc", True, False, float("nan"), "nan", [1], {}])
def test_coerce_number_rejects_non_numeric(raw: object) -> None:
    assert coerce_number(raw) is None


def test_coerce_number_can_refuse_text() -> None:
    assert coerce_number("200", allow_text=False) is None
    assert coerce_number(200, allow_text=False) == 200.0


def test_mask_address_shortens_long_addresses() -> None:
    assert mask_address("7xKXtg2CW87d97TXJSDpbD5jBkheTqA83TZRuJosgAsU") == "7xKXtg...gAsU"


def test_mask_address_keeps_short_values_and_placeholders_missing() -> None:
    assert mask_address("abc") == "abc"
    assert mask_address(None) == "***"
    assert mask_address("") == "***"


@pytest.mark.parametrize("raw", [float("inf"), "-inf", "1e309", 10**400])
def test_coerce_number_rejects_infinite_values(raw: object) -> None:
    assert coerce_number(raw) is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("150abc", 150.0),
        (" -2.5e1x", -25.0),
        ("0", 0.0),
        (".5", 0.5),
        ("abc", None),
        ("", None),
        ("nan", None),
        ("1e999", None),
    ],
)
def test_leading_number_reads_numeric_prefix(text: str, expected: float | None) -> None:
    assert leading_number(text) == expected
