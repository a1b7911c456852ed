"""Moving averages: SMA, EMA and WMA."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar, Sequence

from indicator_engine.errors import InvalidIndicatorError
from indicator_engine.indicators.base import WindowIndicator
from indicator_engine.registry import register_indicator
from indicator_engine.window import decimal_context, mean

SMA_NAME = "sma"
EMA_NAME = "ema"
WMA_NAME = "wma"


@register_indicator(SMA_NAME)
class SMA(WindowIndicator):
    """Simple moving average.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/s/sma.asp
    """

    name: ClassVar[str] = SMA_NAME

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        return mean(self.window(values))


@register_indicator(EMA_NAME)
class EMA(WindowIndicator):
    """Exponential moving average.

    The first `length` points of the window seed the average with their SMA;
    every later point is folded in with `calc_next`. Twice the length (minus
    one) is needed so the seed has settled by the most recent point.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/e/ema.asp
    """

    name: ClassVar[str] = EMA_NAME

    @property
    def count(self) -> int:
        return self.length * 2 + self.offset - 1

    @property
    def multiplier(self) -> Decimal:
        """Smoothing multiplier: 2 / (length + 1)."""
        return Decimal(2) / Decimal(self.length + 1)

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        result = SMA(length=self.length).calc(values[: self.length])
        for value in values[self.length :]:
            result = self.calc_next(result, value)

        return result

    def calc_next(self, last: Decimal, value: Decimal) -> Decimal:
        """
        Calculate the next EMA value from the previous one.

        Args:
            last: Previous EMA value
            value: Newest data point

        Returns:
            Updated EMA value
        """
        if not self._valid:
            raise InvalidIndicatorError()

        with decimal_context():
            m = self.multiplier
            return value * m + last * (1 - m)


@register_indicator(WMA_NAME)
class WMA(WindowIndicator):
    """Weighted moving average.

    The i-th point of the window (1-indexed, oldest first) has weight i.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/articles/technical/060401.asp
    """

    name: ClassVar[str] = WMA_NAME

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        total = sum(
            (value * (i + 1) for i, value in enumerate(values)), Decimal(0)
        )
        return total / (Decimal(self.length * (self.length + 1)) / 2)
