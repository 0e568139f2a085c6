"""Listing normalizer: raw feed record -> canonical Listing.

Upstream responses nest fields differently, so each field is read through an
ordered table of alternative locations. Extending support for a new upstream
shape means adding a key to a table, not a branch to the code.

Normalization never raises for bad field values: missing or malformed data
degrades to None / 0 / no traits.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, cast

import structlog

from trait_watch.models.listing import Listing, ListingTrait
from trait_watch.utils.validation import coerce_number, first_present


@dataclass(frozen=True)
class ExtractionRules:
    """Ordered alternative field names per Listing field."""

    token_id_keys: tuple[str, ...] = ("tokenId", "tokenMint", "token", "itemId")
    listing_id_keys: tuple[str, ...] = ("listingId",)
    seller_keys: tuple[str, ...] = ("seller",)
    price_keys: tuple[str, ...] = ("price",)
    """Numeric value used as-is; numeric text parsed."""
    base_unit_price_keys: tuple[str, ...] = ("priceInLamports",)
    """Smallest-unit fallback, used raw when no price field is usable."""
    metadata_keys: tuple[str, ...] = ("extra", "metadata")
    """Nested containers holding the trait list; the record itself is the last resort."""
    trait_list_keys: tuple[str, ...] = ("attributes", "traits")
    trait_type_keys: tuple[str, ...] = ("trait_type", "traitType", "type")
    trait_value_keys: tuple[str, ...] = ("value", "val", "trait_value")


DEFAULT_RULES = ExtractionRules()


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


class ListingNormalizer:
    """Maps raw listing records to Listing values using ExtractionRules."""

    def __init__(
        self,
        rules: ExtractionRules = DEFAULT_RULES,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            rules: Field extraction tables (defaults cover the known feed shapes).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._rules = rules
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def normalize(self, record: Mapping[str, Any]) -> Listing:
        """Build a Listing from one raw record.

        Raises:
            TypeError: If record is not a mapping (the batch caller skips it).
        """
        if not isinstance(record, Mapping):
            raise TypeError(f"listing record must be a mapping, got {type(record).__name__}")
        rules = self._rules
        return Listing(
            token_id=_as_text(first_present(record, rules.token_id_keys)),
            price=self._price(record),
            seller=_as_text(first_present(record, rules.seller_keys)),
            traits=self._traits(record),
            feed_listing_id=_as_text(first_present(record, rules.listing_id_keys)),
        )

    def _price(self, record: Mapping[str, Any]) -> float:
        rules = self._rules
        for key in rules.price_keys:
            price = coerce_number(record.get(key))
            if price is not None:
                return max(price, 0.0)
        for key in rules.base_unit_price_keys:
            price = coerce_number(record.get(key))
            if price is not None:
                return max(price, 0.0)
        self._logger.debug(
            "normalizer_price_defaulted",
            normalizer_price_raw=repr(first_present(record, rules.price_keys)),
        )
        return 0.0

    def _metadata(self, record: Mapping[str, Any]) -> Mapping[str, Any]:
        for key in self._rules.metadata_keys:
            candidate = record.get(key)
            if isinstance(candidate, Mapping) and candidate:
                return cast(Mapping[str, Any], candidate)
        return record

    def _traits(self, record: Mapping[str, Any]) -> tuple[ListingTrait, ...]:
        rules = self._rules
        metadata = self._metadata(record)
        entries = first_present(metadata, rules.trait_list_keys)
        if isinstance(entries, Mapping):
            # {"Clothing": "Saudi"} form
            return tuple(
                ListingTrait(trait_type=str(k), value=_as_text(v) or "")
                for k, v in cast(Mapping[Any, Any], entries).items()
            )
        if not isinstance(entries, Sequence) or isinstance(entries, (str, bytes)):
            return ()
        traits: list[ListingTrait] = []
        for entry in cast(Sequence[Any], entries):
            if not isinstance(entry, Mapping):
                continue
            entry_map = cast(Mapping[str, Any], entry)
            trait_type = first_present(entry_map, rules.trait_type_keys)
            value = first_present(entry_map, rules.trait_value_keys)
            traits.append(
                ListingTrait(
                    trait_type=_as_text(trait_type) or "",
                    value=_as_text(value) or "",
                )
            )
        return tuple(traits)


def normalize_listing(
    record: Mapping[str, Any],
    rules: ExtractionRules = DEFAULT_RULES,
) -> Listing:
    """Normalize one record with the given (default) rules."""
    return ListingNormalizer(rules).normalize(record)
