"""Windowing helpers over decimal sequences (pure math, no I/O)."""

from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Iterator, Sequence

from indicator_engine.config import get_settings
from indicator_engine.errors import InsufficientDataError

if TYPE_CHECKING:
    from indicator_engine.protocol import Indicator


def resize(values: Sequence[Decimal], length: int, offset: int) -> list[Decimal]:
    """
    Cut the window an indicator calculates on.

    The last `offset` values are dropped and the trailing `length` values
    of what remains are returned as a new list.

    Args:
        values: Sequence of values, oldest first
        length: Number of values to keep
        offset: Number of most recent values to skip

    Returns:
        List of `length` values

    Raises:
        InsufficientDataError: If fewer than `length + offset` values are given
    """
    if length < 0 or offset < 0:
        raise ValueError("length and offset must not be negative")

    required = length + offset
    if len(values) < required:
        raise InsufficientDataError(required, len(values))

    end = len(values) - offset
    return list(values[end - length : end])


def calc_multiple(
    source: Indicator,
    values: Sequence[Decimal],
    count: int,
) -> list[Decimal]:
    """
    Calculate `count` successive values of a source indicator.

    Each value is calculated on a window ending one point later than the
    previous one; the last value uses the most recent data.

    Args:
        source: Indicator to evaluate
        values: Sequence of values, oldest first
        count: Number of results to produce

    Returns:
        List of results, oldest first
    """
    values = resize(values, source.count + count - 1, 0)

    return [
        source.calc(values[: len(values) - count + i + 1])
        for i in range(count)
    ]


def mean(values: Sequence[Decimal]) -> Decimal:
    """Arithmetic mean of a non-empty sequence."""
    return sum(values, Decimal(0)) / len(values)


def mean_deviation(values: Sequence[Decimal]) -> Decimal:
    """Mean absolute deviation around the arithmetic mean."""
    m = mean(values)
    return sum((abs(v - m) for v in values), Decimal(0)) / len(values)


def standard_deviation(values: Sequence[Decimal]) -> Decimal:
    """Population standard deviation."""
    m = mean(values)
    variance = sum(((v - m) ** 2 for v in values), Decimal(0)) / len(values)
    return variance.sqrt()


@contextmanager
def decimal_context() -> Iterator[None]:
    """Apply the configured decimal precision for the enclosed calculation."""
    with localcontext() as ctx:
        ctx.prec = get_settings().decimal_precision
        yield
