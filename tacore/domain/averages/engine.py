"""
Moving Average Engine.

Single entry point that dispatches an averaging method to its recurrence.

Contract:
- Output has the same length as the input.
- Output[i] depends only on input[0..i] (strictly causal).
- Every output value is rounded to 4 decimals on append.
- length <= 0 is clamped to 1; unknown methods raise ConfigurationError.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable, Dict, FrozenSet, Optional, Union

import numpy as np

from tacore.utils.logging_setup import get_logger

from ..exceptions import CalculationError, ConfigurationError
from ..models import MovingAvgType
from ..series import SeriesLike, as_array
from . import adaptive, basic, composite, volume, weighted

logger = get_logger(__name__)

AverageFunction = Callable[..., np.ndarray]

_DISPATCH: Dict[MovingAvgType, AverageFunction] = {
    MovingAvgType.SIMPLE: basic.sma,
    MovingAvgType.EXPONENTIAL: basic.ema,
    MovingAvgType.WEIGHTED: basic.wma,
    MovingAvgType.WILDERS_SMOOTHING: basic.wilders,
    MovingAvgType.WILDERS_SUMMATION: basic.wilders_summation,
    MovingAvgType.LINEAR_WEIGHTED: weighted.lwma,
    MovingAvgType.DOUBLE_EXPONENTIAL: composite.dema,
    MovingAvgType.TRIPLE_EXPONENTIAL: composite.tema,
    MovingAvgType.QUADRUPLE_EXPONENTIAL: composite.qema,
    MovingAvgType.PENTUPLE_EXPONENTIAL: composite.pema,
    MovingAvgType.T3: composite.t3,
    MovingAvgType.TRIANGULAR: composite.triangular,
    MovingAvgType.HULL: composite.hull,
    MovingAvgType.ZERO_LAG_EXPONENTIAL: composite.zlema,
    MovingAvgType.ZERO_LAG_TRIPLE_EXPONENTIAL: composite.zltema,
    MovingAvgType.LEAST_SQUARES: composite.lsma,
    MovingAvgType.KAUFMAN_ADAPTIVE: adaptive.kama,
    MovingAvgType.POWERED_KAUFMAN_ADAPTIVE: adaptive.powered_kama,
    MovingAvgType.MOVING_AVERAGE_ADAPTIVE_Q: adaptive.maaq,
    MovingAvgType.MCGINLEY_DYNAMIC: adaptive.mcginley,
    MovingAvgType.VARIABLE_LENGTH: adaptive.vlma,
    MovingAvgType.AHRENS: adaptive.ahrens,
    MovingAvgType.ADAPTIVE: adaptive.adaptive_ma,
    MovingAvgType.ADAPTIVE_EXPONENTIAL: adaptive.adaptive_ema,
    MovingAvgType.RECURSIVE_MOVING_TREND: adaptive.rmta,
    MovingAvgType.ARNAUD_LEGOUX: weighted.alma,
    MovingAvgType.CUBED_WEIGHTED: weighted.cubed_wma,
    MovingAvgType.FIBONACCI_WEIGHTED: weighted.fibonacci_wma,
    MovingAvgType.SYMMETRICALLY_WEIGHTED: weighted.symmetric_wma,
    MovingAvgType.QUICK: weighted.quick_ma,
    MovingAvgType.QUADRATIC: weighted.quadratic_ma,
    MovingAvgType.JSA: weighted.jsa,
    MovingAvgType.VOLUME_WEIGHTED_AVERAGE_PRICE: volume.vwap,
    MovingAvgType.VOLUME_WEIGHTED_MOVING_AVERAGE: volume.vwma,
}

# Methods that read a price channel; without one the input is its own channel
CHANNEL_METHODS: FrozenSet[MovingAvgType] = frozenset(
    {MovingAvgType.ADAPTIVE, MovingAvgType.ADAPTIVE_EXPONENTIAL}
)

VOLUME_METHODS: FrozenSet[MovingAvgType] = frozenset(
    {
        MovingAvgType.VOLUME_WEIGHTED_AVERAGE_PRICE,
        MovingAvgType.VOLUME_WEIGHTED_MOVING_AVERAGE,
    }
)


def supported_methods() -> list[MovingAvgType]:
    """All methods the engine can compute."""
    return list(_DISPATCH)


def normalize_length(length: Any) -> int:
    """
    Validate a lookback length.

    Raises:
        ConfigurationError: If the length is not an integer.
    """
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)):
        if isinstance(length, float) and length.is_integer():
            length = int(length)
        else:
            raise ConfigurationError(f"Length must be an integer, got {length!r}")
    length = int(length)
    if length <= 0:
        logger.warning(f"Non-positive length {length} clamped to 1")
        return 1
    return length


def _aligned(name: str, series: Optional[SeriesLike], n: int) -> Optional[np.ndarray]:
    if series is None:
        return None
    values = as_array(series)
    if len(values) != n:
        raise CalculationError(f"{name} series has {len(values)} bars, expected {n}")
    return values


def compute_moving_average(
    method: Union[MovingAvgType, str],
    length: int,
    series: SeriesLike,
    high: Optional[SeriesLike] = None,
    low: Optional[SeriesLike] = None,
    volume: Optional[SeriesLike] = None,
    **params: Any,
) -> np.ndarray:
    """
    Compute a moving average of ``series``.

    Args:
        method: MovingAvgType member or its string value (e.g. "exponential").
        length: Lookback length; values <= 0 are clamped to 1.
        series: Input values, oldest first.
        high: Optional high series for channel-based methods.
        low: Optional low series for channel-based methods.
        volume: Volume series, required by volume-weighted methods.
        **params: Method-specific parameters (e.g. ``fast_length`` for KAMA).

    Returns:
        New float64 array with one rounded value per input bar.

    Raises:
        ConfigurationError: Unknown method, non-integer length, missing
            volume, or a parameter the method does not accept.
        CalculationError: Auxiliary series length differs from ``series``.
    """
    ma_type = MovingAvgType.parse(method)
    func = _DISPATCH.get(ma_type)
    if func is None:
        raise ConfigurationError(f"No implementation for moving average {ma_type.value}")

    length = normalize_length(length)
    values = as_array(series)
    n = len(values)

    kwargs: Dict[str, Any] = dict(params)
    if ma_type in CHANNEL_METHODS:
        kwargs["high"] = _aligned("high", high, n)
        kwargs["low"] = _aligned("low", low, n)
    if ma_type in VOLUME_METHODS:
        volume_values = _aligned("volume", volume, n)
        if volume_values is None:
            raise ConfigurationError(f"{ma_type.value} requires a volume series")
        kwargs["volume"] = volume_values

    accepted = inspect.signature(func).parameters
    unknown = [key for key in kwargs if key not in accepted]
    if unknown:
        raise ConfigurationError(f"{ma_type.value} does not accept parameters {unknown}")

    logger.debug(f"Computing {ma_type.value} (length={length}) over {n} bars")

    if n == 0:
        return np.zeros(0, dtype=np.float64)
    return func(values, length, **kwargs)


class MovingAverageEngine:
    """
    Method-bound facade over compute_moving_average.

    Useful where a pipeline is configured once and applied to many series.

    Example:
        engine = MovingAverageEngine("wilders_smoothing", 14)
        atr = engine(true_range_series)
    """

    def __init__(self, method: Union[MovingAvgType, str], length: int, **params: Any) -> None:
        self.method = MovingAvgType.parse(method)
        self.length = normalize_length(length)
        self.params = params

    def __call__(self, series: SeriesLike, **inputs: Any) -> np.ndarray:
        return compute_moving_average(self.method, self.length, series, **inputs, **self.params)

    def __repr__(self) -> str:
        return f"MovingAverageEngine({self.method.value!r}, {self.length})"
