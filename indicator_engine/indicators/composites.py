"""Composite indicators built on top of other indicators.

Every nested source is encoded as a named object. DEMA, HMA and SRSI wrap a
fixed indicator type (EMA, WMA and RSI), so their nested name may be left out
when decoding. CCI and CD wrap arbitrary indicators decoded through the
registry.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any, ClassVar, Mapping, Sequence

from pydantic import Field, StrictBool, StrictInt, field_validator

from indicator_engine.config import get_settings
from indicator_engine.errors import (
    DecodeError,
    InvalidFactorError,
    InvalidLengthError,
    InvalidOffsetError,
    InvalidSourceError,
)
from indicator_engine.indicators.base import (
    HUNDRED,
    BaseIndicator,
    same_source,
)
from indicator_engine.indicators.moving_averages import EMA, SMA, WMA
from indicator_engine.indicators.oscillators import RSI
from indicator_engine.protocol import Indicator
from indicator_engine.registry import from_dict, register_indicator
from indicator_engine.window import calc_multiple, mean_deviation, resize

DEMA_NAME = "dema"
HMA_NAME = "hma"
SRSI_NAME = "srsi"
CCI_NAME = "cci"
CD_NAME = "cd"


def _nested_config(data: Mapping[str, Any], key: str, name: str) -> Mapping[str, Any]:
    """Fields of a nested indicator of fixed type; a "name" tag is optional."""
    nested = data.get(key)
    if not isinstance(nested, Mapping):
        raise DecodeError(f"'{key}' must be an object")

    nested = dict(nested)
    tag = nested.pop("name", name)
    if tag != name:
        raise DecodeError(f"'{key}' must be '{name}', got '{tag}'")

    return nested


def _source(data: Mapping[str, Any], key: str) -> Indicator:
    if data.get(key) is None:
        raise DecodeError(f"missing '{key}'")
    return from_dict(data[key])


def _detached(value: Any) -> Any:
    # Validation marks the model it runs on; work on a copy of the caller's
    return value.model_copy() if isinstance(value, BaseIndicator) else value


@register_indicator(DEMA_NAME)
class DEMA(BaseIndicator):
    """Double exponential moving average.

    One EMA value is produced per sliding position of the window, then that
    series is EMA-folded once more, seeded with its first value.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/d/double-exponential-moving-average.asp
    """

    name: ClassVar[str] = DEMA_NAME

    ema: EMA | None = None

    @field_validator("ema", mode="before")
    @classmethod
    def _detach_ema(cls, value: Any) -> Any:
        return _detached(value)

    def validate_config(self) -> None:
        if self.ema is None:
            raise InvalidSourceError()

    @property
    def count(self) -> int:
        return self.ema.count

    @property
    def offset(self) -> int:
        return self.ema.offset

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        length = self.ema.length
        values = resize(values, self.count - self.offset, self.offset)

        smoothed = [SMA(length=length).calc(values[:length])]
        for value in values[length:]:
            smoothed.append(self.ema.calc_next(smoothed[-1], value))

        result = smoothed[0]
        for value in smoothed:
            result = self.ema.calc_next(result, value)

        return result

    def config(self) -> dict[str, Any]:
        return {"ema": self.ema.to_dict()}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(ema=EMA.from_config(_nested_config(data, "ema", EMA.name)))

    def _same_config(self, other: Any) -> bool:
        return same_source(self.ema, other.ema)


@register_indicator(HMA_NAME)
class HMA(BaseIndicator):
    """Hull moving average.

    floor(sqrt(length)) values of 2*WMA(length/2) - WMA(length) are taken at
    progressively later windows, and the result is their WMA.

    Calculation is based on formula provided by fidelity.
    https://www.fidelity.com/learning-center/trading-investing/technical-analysis/technical-indicator-guide/hull-moving-average
    """

    name: ClassVar[str] = HMA_NAME

    wma: WMA | None = None

    @field_validator("wma", mode="before")
    @classmethod
    def _detach_wma(cls, value: Any) -> Any:
        return _detached(value)

    def validate_config(self) -> None:
        if self.wma is None:
            raise InvalidSourceError()

        # half-length WMA must be usable
        if self.wma.length < 2:
            raise InvalidLengthError()

    @property
    def count(self) -> int:
        return self.wma.count * 2 - self.wma.offset - 1

    @property
    def offset(self) -> int:
        return self.wma.offset

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        length = self.wma.length
        size = math.isqrt(length)

        half = WMA(length=length // 2)
        full = WMA(length=length)

        values = resize(values, self.count - self.offset, self.offset)

        derived = []
        for i in range(size):
            window = values[: len(values) - size + i + 1]
            derived.append(half.calc(window) * 2 - full.calc(window))

        return WMA(length=size).calc(derived)

    def config(self) -> dict[str, Any]:
        return {"wma": self.wma.to_dict()}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(wma=WMA.from_config(_nested_config(data, "wma", WMA.name)))

    def _same_config(self, other: Any) -> bool:
        return same_source(self.wma, other.wma)


@register_indicator(SRSI_NAME)
class SRSI(BaseIndicator):
    """Stochastic relative strength index.

    Places the most recent of `length` successive RSI values within the
    range of all of them. A flat run yields zero.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/s/stochrsi.asp
    """

    name: ClassVar[str] = SRSI_NAME

    rsi: RSI | None = None

    @field_validator("rsi", mode="before")
    @classmethod
    def _detach_rsi(cls, value: Any) -> Any:
        return _detached(value)

    def validate_config(self) -> None:
        if self.rsi is None:
            raise InvalidSourceError()

    @property
    def count(self) -> int:
        return self.rsi.length * 2 + self.rsi.offset - 1

    @property
    def offset(self) -> int:
        return self.rsi.offset

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        results = calc_multiple(self.rsi, values, self.rsi.length)

        low = min(results)
        high = max(results)

        if high == low:
            return Decimal(0)

        return (results[-1] - low) / (high - low)

    def config(self) -> dict[str, Any]:
        return {"rsi": self.rsi.to_dict()}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(rsi=RSI.from_config(_nested_config(data, "rsi", RSI.name)))

    def _same_config(self, other: Any) -> bool:
        return same_source(self.rsi, other.rsi)


@register_indicator(CCI_NAME)
class CCI(BaseIndicator):
    """Commodity channel index over an arbitrary source indicator.

    (latest - source) / (factor * mean deviation), where the latest point and
    the mean deviation are taken from the points the source looks at, up to
    its offset. A zero denominator yields zero.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/c/commoditychannelindex.asp
    """

    name: ClassVar[str] = CCI_NAME

    source: Indicator | None = None

    # Scales the result into a readable range; zero means the configured default
    factor: Decimal = Field(default=Decimal(0), validate_default=True)

    @field_validator("factor")
    @classmethod
    def _default_factor(cls, value: Decimal) -> Decimal:
        if value == 0:
            return get_settings().cci_default_factor
        return value

    def validate_config(self) -> None:
        if self.source is None:
            raise InvalidSourceError()

        if self.factor <= 0:
            raise InvalidFactorError()

    @property
    def count(self) -> int:
        return self.source.count

    @property
    def offset(self) -> int:
        return self.source.offset

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = resize(values, self.count, 0)

        typical = self.source.calc(values)

        window = values[: len(values) - self.offset]
        denom = self.factor * mean_deviation(window)

        if denom == 0:
            return Decimal(0)

        return (window[-1] - typical) / denom

    def config(self) -> dict[str, Any]:
        return {"source": self.source.to_dict(), "factor": str(self.factor)}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        factor = data.get("factor") or "0"
        return cls(source=_source(data, "source"), factor=factor)

    def _same_config(self, other: Any) -> bool:
        return self.factor == other.factor and same_source(self.source, other.source)


@register_indicator(CD_NAME)
class CD(BaseIndicator):
    """Difference between two arbitrary source indicators (MACD-style).

    source1 - source2, or with `percent` the difference as a percentage of
    source2 (zero when source2 is zero). Both sources see the same data,
    with CD's own offset removed first.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/m/macd.asp
    Any two indicators can be compared, not only EMAs.
    """

    name: ClassVar[str] = CD_NAME

    source1: Indicator | None = None
    source2: Indicator | None = None
    offset: StrictInt = 0
    percent: StrictBool = False

    def validate_config(self) -> None:
        if self.source1 is None or self.source2 is None:
            raise InvalidSourceError()

        if self.offset < 0:
            raise InvalidOffsetError()

    @property
    def count(self) -> int:
        return max(self.source1.count, self.source2.count) + self.offset

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = resize(values, self.count - self.offset, self.offset)

        base = self.source1.calc(values)
        counter = self.source2.calc(values)

        diff = base - counter
        if not self.percent:
            return diff

        if counter == 0:
            return Decimal(0)

        return diff / counter * HUNDRED

    def config(self) -> dict[str, Any]:
        return {
            "percent": self.percent,
            "source1": self.source1.to_dict(),
            "source2": self.source2.to_dict(),
            "offset": self.offset,
        }

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(
            source1=_source(data, "source1"),
            source2=_source(data, "source2"),
            offset=data.get("offset", 0),
            percent=data.get("percent", False),
        )

    def _same_config(self, other: Any) -> bool:
        return (
            self.offset == other.offset
            and self.percent == other.percent
            and same_source(self.source1, other.source1)
            and same_source(self.source2, other.source2)
        )
