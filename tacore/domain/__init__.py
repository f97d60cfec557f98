"""
Technical analysis domain.

This package provides:
- RoundedSeries: Output series rounded to 4 decimals on append
- Rolling window operations (max, min, sum, average, variance, stddev)
- compute_moving_average / MovingAverageEngine: 34 averaging methods
- Signal classifiers: compare, RSI, volatility, bollinger, bullish/bearish
- StockData: OHLCV container with derived price inputs
- Indicators: auto-discovered by IndicatorRegistry

Usage:
    from tacore.domain import StockData, compute_moving_average
    from tacore.domain.indicators import get_indicator_registry

    sma = compute_moving_average("simple", 20, closes)

    stock = StockData.from_dataframe(bars)
    stock.apply(get_indicator_registry().get("rsi"))
"""

from .averages import MovingAverageEngine, compute_moving_average, supported_methods
from .exceptions import (
    CalculationError,
    ConfigurationError,
    FatalError,
    RecoverableError,
    TacoreError,
)
from .models import IndicatorCategory, InputName, MovingAvgType, Signal
from .rolling import (
    high_low_extremes,
    max_and_min,
    rolling_average,
    rolling_max,
    rolling_min,
    rolling_stddev,
    rolling_sum,
    rolling_variance,
    stddev_from_variance,
)
from .series import PRECISION, RoundedSeries, round_value
from .signals import (
    classify_bollinger,
    classify_bullish_bearish,
    classify_compare,
    classify_condition,
    classify_rsi,
    classify_volatility,
)
from .stock_data import StockData, select_input

__all__ = [
    # Engine
    "MovingAverageEngine",
    "compute_moving_average",
    "supported_methods",
    # Errors
    "TacoreError",
    "RecoverableError",
    "FatalError",
    "CalculationError",
    "ConfigurationError",
    # Models
    "IndicatorCategory",
    "InputName",
    "MovingAvgType",
    "Signal",
    # Rolling
    "rolling_max",
    "rolling_min",
    "rolling_sum",
    "rolling_average",
    "rolling_variance",
    "rolling_stddev",
    "stddev_from_variance",
    "max_and_min",
    "high_low_extremes",
    # Series
    "PRECISION",
    "RoundedSeries",
    "round_value",
    # Signals
    "classify_compare",
    "classify_rsi",
    "classify_volatility",
    "classify_bullish_bearish",
    "classify_condition",
    "classify_bollinger",
    # Data
    "StockData",
    "select_input",
]
