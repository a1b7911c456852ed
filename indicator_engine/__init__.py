"""Composable technical indicators over decimal sequences.

Public API:
- Indicator: Protocol that all indicators implement
- SMA, EMA, WMA, ROC, RSI, Stoch, Aroon, BB: indicators calculated directly
  from the input values
- DEMA, HMA, SRSI, CCI, CD: indicators built on other indicators
- from_json / to_json / from_dict / to_dict: named encoding, able to
  rebuild any composition of indicators
- register_indicator, create_indicator, list_indicators, get_indicator_class:
  registry of indicator names

Importing this package auto-registers all built-in indicators.
"""

from indicator_engine.errors import (
    DecodeError,
    IndicatorError,
    InsufficientDataError,
    InvalidBandError,
    InvalidConfigurationError,
    InvalidFactorError,
    InvalidIndicatorError,
    InvalidLengthError,
    InvalidOffsetError,
    InvalidSourceError,
    InvalidStandardDeviationsError,
    InvalidTrendError,
    UnknownIndicatorError,
)
from indicator_engine.protocol import Indicator
from indicator_engine.registry import (
    create_indicator,
    from_dict,
    from_json,
    get_indicator_class,
    list_indicators,
    register_indicator,
    to_dict,
    to_json,
)
from indicator_engine.window import resize

# Import built-in indicators to trigger auto-registration
from indicator_engine.indicators import (
    BB,
    CCI,
    CD,
    DEMA,
    EMA,
    HMA,
    ROC,
    RSI,
    SMA,
    SRSI,
    WMA,
    Aroon,
    Band,
    Stoch,
    Trend,
)

__all__ = [
    "Indicator",
    "SMA",
    "EMA",
    "WMA",
    "ROC",
    "RSI",
    "Stoch",
    "Aroon",
    "Trend",
    "BB",
    "Band",
    "DEMA",
    "HMA",
    "SRSI",
    "CCI",
    "CD",
    "resize",
    "register_indicator",
    "create_indicator",
    "get_indicator_class",
    "list_indicators",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
    "IndicatorError",
    "InvalidConfigurationError",
    "InvalidLengthError",
    "InvalidOffsetError",
    "InvalidTrendError",
    "InvalidBandError",
    "InvalidFactorError",
    "InvalidStandardDeviationsError",
    "InvalidSourceError",
    "InvalidIndicatorError",
    "InsufficientDataError",
    "DecodeError",
    "UnknownIndicatorError",
]
