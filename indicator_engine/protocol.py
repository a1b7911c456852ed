"""Indicator protocol defining the interface all indicators must implement.

Composite indicators hold their sources typed against this protocol, so any
object providing these members can be nested, not only the built-in
pydantic models.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Protocol, Sequence, runtime_checkable


@runtime_checkable
class Indicator(Protocol):
    """Protocol that all indicators must implement."""

    @property
    def count(self) -> int:
        """Total number of trailing data points needed for calculation,
        including offsets of this indicator and of any nested source.
        """
        ...

    @property
    def offset(self) -> int:
        """Number of most recent data points skipped during calculation."""
        ...

    def calc(self, values: Sequence[Decimal]) -> Decimal:
        """Calculate the indicator value from values ordered oldest first.

        Raises:
            InvalidIndicatorError: If the indicator was never validated.
            InsufficientDataError: If fewer than `count` values are given.
        """
        ...

    def equal(self, other: Indicator) -> bool:
        """Check whether `other` is the same variant with the same configuration."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Configuration with the indicator's registered name under "name"."""
        ...
