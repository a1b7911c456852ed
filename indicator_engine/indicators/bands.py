"""Bollinger Bands."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, Mapping, Sequence

from pydantic import field_validator

from indicator_engine.errors import InvalidBandError, InvalidStandardDeviationsError
from indicator_engine.indicators.base import WindowIndicator
from indicator_engine.registry import register_indicator
from indicator_engine.window import mean, standard_deviation

BB_NAME = "bb"


class Band(str, Enum):
    """Bollinger band to calculate."""

    UPPER = "upper"
    MIDDLE = "middle"
    LOWER = "lower"


@register_indicator(BB_NAME)
class BB(WindowIndicator):
    """Bollinger Bands.

    The middle band is the SMA of the window; the upper and lower bands lie
    `standard_deviations` population standard deviations above and below it.

    Calculation is based on formula provided by investopedia.
    https://www.investopedia.com/terms/b/bollingerbands.asp
    """

    name: ClassVar[str] = BB_NAME

    band: Band
    standard_deviations: Decimal = Decimal(2)

    @field_validator("band", mode="before")
    @classmethod
    def _parse_band(cls, value: Any) -> Band:
        try:
            return Band(value)
        except ValueError:
            raise InvalidBandError() from None

    def validate_config(self) -> None:
        super().validate_config()

        if self.standard_deviations < 0:
            raise InvalidStandardDeviationsError()

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        values = self.window(values)

        middle = mean(values)
        if self.band == Band.MIDDLE:
            return middle

        width = standard_deviation(values) * self.standard_deviations
        if self.band == Band.UPPER:
            return middle + width

        return middle - width

    def config(self) -> dict[str, Any]:
        return {
            "band": self.band.value,
            "standard_deviations": str(self.standard_deviations),
            **super().config(),
        }

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(
            band=data.get("band", ""),
            standard_deviations=data.get(
                "standard_deviations",
                cls.model_fields["standard_deviations"].default,
            ),
            length=data.get("length", 0),
            offset=data.get("offset", 0),
        )

    def _same_config(self, other: Any) -> bool:
        return (
            self.band == other.band
            and self.standard_deviations == other.standard_deviations
            and super()._same_config(other)
        )
