# -*- coding: utf-8 -*-
"""Listing predicate evaluation."""

from trait_watch.services.matching.predicate import (
    DEFAULT_THRESHOLD,
    matches,
    parse_threshold,
)

__all__ = ["DEFAULT_THRESHOLD", "matches", "parse_threshold"]
