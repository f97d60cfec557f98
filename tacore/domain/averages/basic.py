"""
Basic averaging recurrences.

Simple, exponential, weighted and Wilder families. Every other family in
this package is built from these. Recursive averages seed from 0, so the
first ``length`` outputs carry a warm-up transient.
"""

from __future__ import annotations

import numpy as np

from ..math_helpers import min_or_max
from ..rolling import rolling_average
from ..series import RoundedSeries, as_rounded_array

EMA_ALPHA_MIN = 0.01
EMA_ALPHA_MAX = 0.99


def ema_alpha(length: int) -> float:
    """Smoothing factor ``2 / (length + 1)`` clamped to [0.01, 0.99]."""
    return min_or_max(2.0 / (length + 1), EMA_ALPHA_MAX, EMA_ALPHA_MIN)


def ema_step(current: float, prev_ema: float, length: int) -> float:
    """One exponential smoothing step."""
    k = ema_alpha(length)
    return current * k + prev_ema * (1 - k)


def sma(values: np.ndarray, length: int) -> np.ndarray:
    """Arithmetic mean of the trailing window of rounded inputs."""
    return rolling_average(as_rounded_array(values), length)


def ema(values: np.ndarray, length: int) -> np.ndarray:
    """Exponential moving average seeded from 0."""
    out = RoundedSeries(len(values))
    for value in values:
        out.append(ema_step(value, out.last(), length))
    return out.to_array()


def wma(values: np.ndarray, length: int) -> np.ndarray:
    """
    Linearly weighted moving average.

    The k-th element from the oldest in the window gets weight k+1; the sum
    is normalized by the weights actually present, so short windows at the
    start of the series are not diluted.
    """
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        start = max(0, i - length + 1)
        window = values[start : i + 1]
        weights = np.arange(1, len(window) + 1, dtype=np.float64)
        weight_sum = float(weights.sum())
        out.append(float(np.dot(window, weights)) / weight_sum if weight_sum else 0.0)
    return out.to_array()


def wilders(values: np.ndarray, length: int) -> np.ndarray:
    """Wilder's smoothing: exponential recurrence with ``alpha = 1/length``."""
    k = 1.0 / length
    out = RoundedSeries(len(values))
    for value in values:
        out.append(value * k + out.last() * (1 - k))
    return out.to_array()


def wilders_summation(values: np.ndarray, length: int) -> np.ndarray:
    """Running Wilder sum: ``prev - prev/length + value``."""
    out = RoundedSeries(len(values))
    for value in values:
        prev = out.last()
        out.append(prev - prev / length + value)
    return out.to_array()
