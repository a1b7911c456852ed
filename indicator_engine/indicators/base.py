"""Base models shared by all indicators.

Every indicator is a frozen pydantic model. Construction runs the model's
validators, and only a successfully validated instance is marked valid;
instances created without validation (e.g. via ``model_construct``) refuse
to calculate.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, ClassVar, Mapping, Sequence

from pydantic import BaseModel, ConfigDict, PrivateAttr, StrictInt, model_validator

from indicator_engine.errors import (
    InvalidIndicatorError,
    InvalidLengthError,
    InvalidOffsetError,
)
from indicator_engine.protocol import Indicator
from indicator_engine.registry import to_json
from indicator_engine.window import decimal_context, resize

HUNDRED = Decimal(100)


class BaseIndicator(BaseModel):
    """Common behaviour of all built-in indicators.

    Subclasses implement `count`, `config`, `from_config`, `_calc` and
    `_same_config`, and may extend `validate_config`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Registered discriminator, emitted as "name" when encoding
    name: ClassVar[str] = ""

    _valid: bool = PrivateAttr(default=False)

    @model_validator(mode="after")
    def _validate(self):
        self.validate_config()
        self._valid = True
        return self

    def validate_config(self) -> None:
        """Check configuration bounds, raising InvalidConfigurationError."""

    @property
    def valid(self) -> bool:
        """Whether the indicator passed validation."""
        return self._valid

    @property
    def count(self) -> int:
        raise NotImplementedError

    def calc(self, values: Sequence[Decimal]) -> Decimal:
        """
        Calculate the indicator value.

        Args:
            values: Sequence of values, oldest first

        Returns:
            Indicator value for the most recent window

        Raises:
            InvalidIndicatorError: If the indicator was never validated
            InsufficientDataError: If fewer than `count` values are given
        """
        if not self._valid:
            raise InvalidIndicatorError()

        with decimal_context():
            return self._calc(values)

    def _calc(self, values: Sequence[Decimal]) -> Decimal:
        raise NotImplementedError

    def config(self) -> dict[str, Any]:
        """Configuration fields without the indicator name."""
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        """Configuration fields tagged with the indicator name."""
        return {"name": self.name, **self.config()}

    def to_json(self) -> str:
        """Named configuration encoded as JSON."""
        return to_json(self)

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        """Build a validated indicator from decoded configuration fields."""
        raise NotImplementedError

    def model_copy(
        self, *, update: Mapping[str, Any] | None = None, deep: bool = False
    ):
        """Copy the indicator.

        Updated fields go through validation like a new instance, so a copy
        is never marked valid with a configuration that was not checked.
        """
        copied = super().model_copy(deep=deep)
        if not update:
            return copied
        return type(self)(**{**dict(copied), **update})

    def equal(self, other: Indicator) -> bool:
        """Check whether `other` is the same variant with equal configuration.

        Unvalidated instances only equal themselves.
        """
        if other is self:
            return True
        if type(other) is not type(self):
            return False
        if not (self.valid and other.valid):
            return False
        return self._same_config(other)

    def _same_config(self, other: Any) -> bool:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Indicator):
            return NotImplemented
        return self.equal(other)

    def __hash__(self) -> int:
        # Equal configurations share variant, count and offset
        return hash((type(self).__name__, self.count, self.offset))


class WindowIndicator(BaseIndicator):
    """Leaf indicator configured by a window length and an offset."""

    length: StrictInt
    offset: StrictInt = 0

    def validate_config(self) -> None:
        if self.length < 1:
            raise InvalidLengthError()

        if self.offset < 0:
            raise InvalidOffsetError()

    @property
    def count(self) -> int:
        return self.length + self.offset

    def window(self, values: Sequence[Decimal]) -> list[Decimal]:
        """Trim values to the points used in calculation."""
        return resize(values, self.count - self.offset, self.offset)

    def config(self) -> dict[str, Any]:
        return {"length": self.length, "offset": self.offset}

    @classmethod
    def from_config(cls, data: Mapping[str, Any]):
        return cls(length=data.get("length", 0), offset=data.get("offset", 0))

    def _same_config(self, other: Any) -> bool:
        return self.length == other.length and self.offset == other.offset


def same_source(a: Indicator | None, b: Indicator | None) -> bool:
    """Structural comparison of nested sources."""
    if a is None or b is None:
        return a is b
    return a.equal(b)
