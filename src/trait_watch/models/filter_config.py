"""FilterConfig: the user's trait + price predicate."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Trait name/value to look for and the price ceiling.

    threshold keeps the user's raw input (text or number); it is parsed at
    evaluation time so a bad value never blocks matching.
    """

    trait_name: str
    trait_value: str
    threshold: str | float

    def with_changes(
        self,
        *,
        trait_name: str | None = None,
        trait_value: str | None = None,
        threshold: str | float | None = None,
    ) -> FilterConfig:
        """Return a copy with the given fields replaced."""
        return replace(
            self,
            trait_name=self.trait_name if trait_name is None else trait_name,
            trait_value=self.trait_value if trait_value is None else trait_value,
            threshold=self.threshold if threshold is None else threshold,
        )
