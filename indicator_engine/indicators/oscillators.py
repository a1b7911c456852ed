"""Momentum oscillators: ROC, RSI, Stoch and Aroon."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Mapping, Sequence

from pydantic import field_validator

from indicator_engine.errors import InvalidTrendError
from indicator_engine.indicators.base import HUNDRED, WindowIndicator
from indicator_engine.registry import register_indicator

ROC_NAME = "roc"
RSI_NAME = "rsi"
STOCH_NAME = "stoch"
AROON_NAME = "aroon"


class Trend(str, Enum):
    """Aroon trend direction."""

    UP = "up"
    DOWN = "down"


@register_indicator(ROC_NAME)
class ROC(WindowIndicator):
    """Rate of change, in percent.

    Compares the newest point with the point `length - 1` steps before it.
    A zero lagging value yields zero.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/p/pricerateofchange.asp
    """

    name: ClassVar[str] = ROC_NAME

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        newest = values[-1]
        lagging = values[-self.length]

        if lagging == 0:
            return Decimal(0)

        return (newest - lagging) / lagging * HUNDRED


@register_indicator(RSI_NAME)
class RSI(WindowIndicator):
    """Relative strength index.

    Gains and losses between consecutive points are averaged over `length`.
    A window without gains yields 0 and one without losses yields 100.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/r/rsi.asp
    """

    name: ClassVar[str] = RSI_NAME

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        gain = Decimal(0)
        loss = Decimal(0)

        for prev, curr in zip(values, values[1:]):
            change = curr - prev
            if change < 0:
                loss += -change
            else:
                gain += change

        if gain == 0:
            return Decimal(0)

        if loss == 0:
            return HUNDRED

        avg_gain = gain / self.length
        avg_loss = loss / self.length

        return HUNDRED - HUNDRED / (1 + avg_gain / avg_loss)


@register_indicator(STOCH_NAME)
class Stoch(WindowIndicator):
    """Stochastic oscillator.

    Position of the newest point within the window's range, in percent.
    A flat window yields zero.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/s/stochasticoscillator.asp
    """

    name: ClassVar[str] = STOCH_NAME

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        low = min(values)
        high = max(values)

        if high == low:
            return Decimal(0)

        return (values[-1] - low) / (high - low) * HUNDRED


@register_indicator(AROON_NAME)
class Aroon(WindowIndicator):
    """Aroon up/down indicator.

    Tracks how many periods have passed since the most recent new high
    (trend up) or new low (trend down) within the window.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/a/aroon.asp
    """

    name: ClassVar[str] = AROON_NAME

    trend: Trend

    @field_validator("trend", mode="before")
    @classmethod
    def _parse_trend(cls, value: Any) -> Trend:
        try:
            return Trend(value)
        except ValueError:
            raise InvalidTrendError() from None

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        extreme: Decimal | None = None
        periods = 0

        for i, value in enumerate(values):
            if (
                extreme is None
                or self.trend == Trend.UP and value >= extreme
                or self.trend == Trend.DOWN and value <= extreme
            ):
                extreme = value
                periods = self.length - i - 1

        return Decimal(self.length - periods) * HUNDRED / self.length

    def config(self) -> dict[str, Any]:
        return {"trend": self.trend.value, **super().config()}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(
            trend=data.get("trend", ""),
            length=data.get("length", 0),
            offset=data.get("offset", 0),
        )

    def _same_config(self, other: Any) -> bool:
        return self.trend == other.trend and super()._same_config(other)
