"""Validation and coercion helpers for loosely-shaped feed records."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def first_present(record: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the value of the first key whose value is not None or "".

    Returns None when no key qualifies.
    """
    for key in keys:
        value = record.get(key)
        if value is None or value == "":
            continue
        return value
    return None


def coerce_number(value: Any, *, allow_text: bool = True) -> float | None:
    """Return value as a finite float, or None if it is not numeric.

    Booleans, NaN and infinities are rejected. Strings are parsed only when
    allow_text is set, and must be numeric in full.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw: Any = value
    elif allow_text and isinstance(value, str):
        raw = value.strip()
    else:
        return None
    try:
        number = float(raw)
    except (ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def leading_number(text: str) -> float | None:
    """Parse the number at the start of text, ignoring whatever trails it.

    "150abc" gives 150.0; text without leading digits gives None.
    """
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    number = float(match.group())
    return number if math.isfinite(number) else None


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. 7xKXtg...sgAs)."""
    if not addr or len(addr) < 10:
        return addr or "***"
    return f"{addr[:6]}...{addr[-4:]}"
