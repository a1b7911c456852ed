"""Built-in indicators.

Importing this package registers every built-in indicator.
"""

from indicator_engine.indicators.base import BaseIndicator, WindowIndicator
from indicator_engine.indicators.moving_averages import EMA, SMA, WMA
from indicator_engine.indicators.oscillators import ROC, RSI, Aroon, Stoch, Trend
from indicator_engine.indicators.bands import BB, Band
from indicator_engine.indicators.composites import CCI, CD, DEMA, HMA, SRSI

__all__ = [
    "BaseIndicator",
    "WindowIndicator",
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
]
