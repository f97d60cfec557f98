"""
Domain enums shared by the calculation core and the indicator layer.

- Signal: per-bar trade classification
- MovingAvgType: closed set of averaging methods
- InputName: which price series an indicator reads
- IndicatorCategory: grouping used by the indicator registry
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from .exceptions import ConfigurationError


class Signal(Enum):
    """Discrete trade signal attached to each bar."""

    NONE = "none"
    STRONG_BUY = "strong_buy"
    BUY = "buy"
    SELL = "sell"
    STRONG_SELL = "strong_sell"

    # Neutral is the same member as NONE
    NEUTRAL = "none"

    @property
    def is_bullish(self) -> bool:
        return self in (Signal.BUY, Signal.STRONG_BUY)

    @property
    def is_bearish(self) -> bool:
        return self in (Signal.SELL, Signal.STRONG_SELL)


class MovingAvgType(Enum):
    """
    Averaging method selector.

    New methods are added here and in the engine's dispatch table.
    """

    SIMPLE = "simple"
    EXPONENTIAL = "exponential"
    WEIGHTED = "weighted"
    LINEAR_WEIGHTED = "linear_weighted"
    WILDERS_SMOOTHING = "wilders_smoothing"
    WILDERS_SUMMATION = "wilders_summation"
    DOUBLE_EXPONENTIAL = "double_exponential"
    TRIPLE_EXPONENTIAL = "triple_exponential"
    QUADRUPLE_EXPONENTIAL = "quadruple_exponential"
    PENTUPLE_EXPONENTIAL = "pentuple_exponential"
    T3 = "t3"
    TRIANGULAR = "triangular"
    HULL = "hull"
    ZERO_LAG_EXPONENTIAL = "zero_lag_exponential"
    ZERO_LAG_TRIPLE_EXPONENTIAL = "zero_lag_triple_exponential"
    LEAST_SQUARES = "least_squares"
    KAUFMAN_ADAPTIVE = "kaufman_adaptive"
    POWERED_KAUFMAN_ADAPTIVE = "powered_kaufman_adaptive"
    MOVING_AVERAGE_ADAPTIVE_Q = "moving_average_adaptive_q"
    MCGINLEY_DYNAMIC = "mcginley_dynamic"
    VARIABLE_LENGTH = "variable_length"
    AHRENS = "ahrens"
    ADAPTIVE = "adaptive"
    ADAPTIVE_EXPONENTIAL = "adaptive_exponential"
    ARNAUD_LEGOUX = "arnaud_legoux"
    CUBED_WEIGHTED = "cubed_weighted"
    FIBONACCI_WEIGHTED = "fibonacci_weighted"
    SYMMETRICALLY_WEIGHTED = "symmetrically_weighted"
    QUICK = "quick"
    QUADRATIC = "quadratic"
    JSA = "jsa"
    RECURSIVE_MOVING_TREND = "recursive_moving_trend"
    VOLUME_WEIGHTED_AVERAGE_PRICE = "volume_weighted_average_price"
    VOLUME_WEIGHTED_MOVING_AVERAGE = "volume_weighted_moving_average"

    @classmethod
    def parse(cls, value: Union["MovingAvgType", str]) -> "MovingAvgType":
        """
        Resolve a method from an enum member, its value or its name.

        Raises:
            ConfigurationError: If the value names no known method.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip()
            try:
                return cls(key.lower())
            except ValueError:
                pass
            if key.upper() in cls.__members__:
                return cls.__members__[key.upper()]
        raise ConfigurationError(f"Unknown moving average method: {value!r}")


class InputName(Enum):
    """Price series selectable as an indicator's input."""

    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    ADJUSTED_CLOSE = "adjusted_close"
    VOLUME = "volume"
    TYPICAL_PRICE = "typical_price"
    FULL_TYPICAL_PRICE = "full_typical_price"
    MEDIAN_PRICE = "median_price"
    WEIGHTED_CLOSE = "weighted_close"
    MIDPOINT = "midpoint"
    MIDPRICE = "midprice"


class IndicatorCategory(Enum):
    """Category of an indicator based on what it measures."""

    MOMENTUM = "momentum"
    TREND = "trend"
    VOLATILITY = "volatility"
    VOLUME = "volume"
