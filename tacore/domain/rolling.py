"""
Rolling-window statistics.

At bar ``i`` every function aggregates indices ``[max(0, i - window + 1), i]``:
near the start the window is simply shorter, never padded. Outputs have the
same length as the input and are rounded on append. A window of 0 or less
degenerates to the current value.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Tuple, Union

import numpy as np

from .exceptions import CalculationError
from .math_helpers import safe_sqrt
from .models import MovingAvgType
from .series import RoundedSeries, SeriesLike, as_array, as_rounded_array


def _window_start(i: int, window: int) -> int:
    return max(0, i - window + 1) if window > 0 else i


def _monotonic_extreme(series: SeriesLike, window: int, keep_max: bool) -> np.ndarray:
    """Sliding max/min with a monotonic index deque (O(n))."""
    values = as_rounded_array(series)
    window = int(window)
    out = RoundedSeries(len(values))
    candidates: Deque[int] = deque()

    for i, value in enumerate(values):
        start = _window_start(i, window)
        while candidates and candidates[0] < start:
            candidates.popleft()
        if keep_max:
            while candidates and values[candidates[-1]] <= value:
                candidates.pop()
        else:
            while candidates and values[candidates[-1]] >= value:
                candidates.pop()
        candidates.append(i)
        out.append(values[candidates[0]])

    return out.to_array()


def rolling_max(series: SeriesLike, window: int) -> np.ndarray:
    """Highest value of the trailing window."""
    return _monotonic_extreme(series, window, keep_max=True)


def rolling_min(series: SeriesLike, window: int) -> np.ndarray:
    """Lowest value of the trailing window."""
    return _monotonic_extreme(series, window, keep_max=False)


def rolling_sum(series: SeriesLike, window: int) -> np.ndarray:
    """Sum of the trailing window."""
    values = as_array(series)
    window = int(window)
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        out.append(float(np.sum(values[_window_start(i, window) : i + 1])))
    return out.to_array()


def rolling_average(series: SeriesLike, window: int) -> np.ndarray:
    """Mean of the trailing window, divided by the actual element count."""
    values = as_array(series)
    window = int(window)
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        chunk = values[_window_start(i, window) : i + 1]
        out.append(float(np.sum(chunk)) / len(chunk) if len(chunk) else 0.0)
    return out.to_array()


def rolling_variance(
    series: SeriesLike,
    window: int,
    ma_type: Union[MovingAvgType, str] = MovingAvgType.SIMPLE,
) -> np.ndarray:
    """
    Variance around a moving-average center line.

    Squared deviations from ``MA(ma_type, window)`` are rounded, then
    smoothed with the same method and window.
    """
    # Imported here: the engine builds its simple average on this module.
    from .averages.engine import compute_moving_average

    values = as_rounded_array(series)
    center = compute_moving_average(ma_type, window, values)
    squares = RoundedSeries(len(values))
    for value, mid in zip(values, center):
        squares.append((value - mid) ** 2)
    return compute_moving_average(ma_type, window, squares.to_array())


def stddev_from_variance(variance: SeriesLike) -> np.ndarray:
    """
    Square root of each variance value.

    Negative variance from floating-point cancellation is clamped to 0
    before the square root.
    """
    values = as_array(variance)
    out = RoundedSeries(len(values))
    for var in values:
        out.append(safe_sqrt(var))
    return out.to_array()


def rolling_stddev(
    series: SeriesLike,
    window: int,
    ma_type: Union[MovingAvgType, str] = MovingAvgType.SIMPLE,
) -> np.ndarray:
    """Standard deviation around a moving-average center line."""
    return stddev_from_variance(rolling_variance(series, window, ma_type))


def max_and_min(series: SeriesLike, window: int) -> Tuple[np.ndarray, np.ndarray]:
    """Highest and lowest values of one series (window floor of 2)."""
    window = max(int(window), 2)
    return rolling_max(series, window), rolling_min(series, window)


def high_low_extremes(
    high: SeriesLike, low: SeriesLike, window: int
) -> Tuple[np.ndarray, np.ndarray]:
    """Highest high and lowest low over the trailing window."""
    high_values = as_array(high)
    low_values = as_array(low)
    if len(high_values) != len(low_values):
        raise CalculationError(
            f"High/low length mismatch: {len(high_values)} != {len(low_values)}"
        )
    return rolling_max(high_values, window), rolling_min(low_values, window)
