"""Exception types raised by the indicator engine.

None of these derive from ValueError: pydantic folds ValueError raised in
validators into its own ValidationError, and construction errors must reach
the caller with their own type.
"""


class IndicatorError(Exception):
    """Base exception for all engine errors."""


class InvalidConfigurationError(IndicatorError):
    """Raised when an indicator is built with invalid parameters."""


class InvalidLengthError(InvalidConfigurationError):
    """Raised when length is out of bounds."""

    def __init__(self, message: str = "invalid length") -> None:
        super().__init__(message)


class InvalidOffsetError(InvalidConfigurationError):
    """Raised when offset is negative."""

    def __init__(self, message: str = "invalid offset") -> None:
        super().__init__(message)


class InvalidTrendError(InvalidConfigurationError):
    """Raised when an Aroon trend is neither 'up' nor 'down'."""

    def __init__(self, message: str = "invalid trend") -> None:
        super().__init__(message)


class InvalidBandError(InvalidConfigurationError):
    """Raised when a Bollinger band is not upper, middle or lower."""

    def __init__(self, message: str = "invalid band") -> None:
        super().__init__(message)


class InvalidFactorError(InvalidConfigurationError):
    """Raised when a CCI factor is negative."""

    def __init__(self, message: str = "invalid factor") -> None:
        super().__init__(message)


class InvalidStandardDeviationsError(InvalidConfigurationError):
    """Raised when the Bollinger standard deviation multiplier is negative."""

    def __init__(self, message: str = "invalid standard deviations") -> None:
        super().__init__(message)


class InvalidSourceError(InvalidConfigurationError):
    """Raised when a composite indicator is missing a nested source."""

    def __init__(self, message: str = "invalid source") -> None:
        super().__init__(message)


class InvalidIndicatorError(IndicatorError):
    """Raised when calculation is attempted on an unvalidated indicator."""

    def __init__(self, message: str = "invalid indicator") -> None:
        super().__init__(message)


class InsufficientDataError(IndicatorError):
    """Raised when fewer data points are supplied than an indicator needs."""

    def __init__(self, required: int, available: int) -> None:
        self.required = required
        self.available = available
        super().__init__(
            f"insufficient data: {required} points required, {available} available"
        )


class DecodeError(IndicatorError):
    """Raised when an indicator payload cannot be decoded."""


class UnknownIndicatorError(DecodeError):
    """Raised when a payload names an indicator that is not registered."""

    def __init__(self, name: object, available: list[str]) -> None:
        self.name = name
        listed = ", ".join(available) or "(none)"
        super().__init__(f"Unknown indicator '{name}'. Available: {listed}")
