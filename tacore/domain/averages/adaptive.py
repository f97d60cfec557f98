"""
Adaptive averages.

Smoothing constants vary bar by bar with an efficiency ratio, a volatility
band or a price channel. Several of these seed from the current value
instead of 0; each function notes its seed.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..math_helpers import min_or_max, safe_div, safe_pow
from ..rolling import high_low_extremes, rolling_stddev
from ..series import RoundedSeries, lag
from .basic import sma


def efficiency_ratio(values: np.ndarray, length: int) -> np.ndarray:
    """
    Kaufman efficiency ratio.

    ``|x[i] - x[i-length]| / sum(|x[j] - x[j-1]|)`` over the trailing
    ``length`` bars; lags before the series start read as 0.
    """
    n = len(values)
    volatility = np.zeros(n, dtype=np.float64)
    out = RoundedSeries(n)
    for i in range(n):
        current = float(values[i])
        volatility[i] = abs(current - lag(values, i, 1))
        volatility_sum = float(np.sum(volatility[max(0, i - length + 1) : i + 1]))
        momentum = abs(current - lag(values, i, length))
        out.append(safe_div(momentum, volatility_sum))
    return out.to_array()


def kama(
    values: np.ndarray, length: int, fast_length: int = 2, slow_length: int = 30
) -> np.ndarray:
    """Kaufman adaptive moving average, seeded from 0."""
    fast_alpha = 2.0 / (fast_length + 1)
    slow_alpha = 2.0 / (slow_length + 1)
    er = efficiency_ratio(values, length)
    out = RoundedSeries(len(values))
    for value, ratio in zip(values, er):
        sc = (ratio * (fast_alpha - slow_alpha) + slow_alpha) ** 2
        out.append(sc * value + (1 - sc) * out.last())
    return out.to_array()


def powered_kama(values: np.ndarray, length: int, factor: float = 3.0) -> np.ndarray:
    """Powered KAMA: smoothing ``er ** factor``, seeded from the current value."""
    er = efficiency_ratio(values, length)
    out = RoundedSeries(len(values))
    for value, ratio in zip(values, er):
        per = safe_pow(ratio, factor)
        prev = out.last(default=value)
        out.append(per * value + (1 - per) * prev)
    return out.to_array()


def maaq(
    values: np.ndarray,
    length: int,
    fast_alpha: float = 0.667,
    slow_alpha: float = 0.0645,
) -> np.ndarray:
    """Moving average adaptive Q, seeded from the current value."""
    er = efficiency_ratio(values, length)
    out = RoundedSeries(len(values))
    for value, ratio in zip(values, er):
        prev = out.last(default=value)
        temp = ratio * fast_alpha + slow_alpha
        out.append(prev + temp * temp * (value - prev))
    return out.to_array()


def mcginley(values: np.ndarray, length: int, k: float = 0.6) -> np.ndarray:
    """McGinley dynamic, seeded from the current value."""
    out = RoundedSeries(len(values))
    for value in values:
        prev = out.last(default=value)
        ratio = safe_div(value, prev)
        bottom = k * length * safe_pow(ratio, 4)
        out.append(prev + (value - prev) / max(bottom, 1) if bottom != 0 else value)
    return out.to_array()


def vlma(values: np.ndarray, length: int, min_length: int = 5) -> np.ndarray:
    """
    Variable length moving average.

    The effective length walks between ``min_length`` and ``length`` (the
    maximum): it grows while price sits inside the inner stddev band around
    SMA(length) and shrinks when price escapes the outer band. Seeded from
    the current value.
    """
    max_length = length
    min_length = min(min_length, max_length)
    center = sma(values, max_length)
    std = rolling_stddev(values, max_length)
    out = RoundedSeries(len(values))
    current_length = float(max_length)

    for value, mid, sd in zip(values, center, std):
        a = mid - 1.75 * sd
        b = mid - 0.25 * sd
        c = mid + 0.25 * sd
        d = mid + 1.75 * sd
        if b <= value <= c:
            current_length += 1
        elif value < a or value > d:
            current_length -= 1
        current_length = min_or_max(current_length, max_length, min_length)
        sc = 2.0 / (current_length + 1)
        prev = out.last(default=value)
        out.append(value * sc + (1 - sc) * prev)
    return out.to_array()


def ahrens(values: np.ndarray, length: int) -> np.ndarray:
    """Ahrens moving average; the ``length``-bar-old output defaults to the current value."""
    out = RoundedSeries(len(values))
    for i, value in enumerate(values):
        prior = out.lag(i, length, default=value)
        prev = out.last()
        out.append(prev + (value - (prev + prior) / 2) / length)
    return out.to_array()


def _channel(
    values: np.ndarray,
    high: Optional[np.ndarray],
    low: Optional[np.ndarray],
    window: int,
):
    high = values if high is None else high
    low = values if low is None else low
    return high_low_extremes(high, low, window)


def _channel_position(value: float, hh: float, ll: float) -> float:
    """Distance from the channel midpoint, 0 at the middle and 1 at an edge."""
    return min_or_max(safe_div(abs(2 * value - ll - hh), hh - ll), 1, 0)


def adaptive_ma(
    values: np.ndarray,
    length: int,
    high: Optional[np.ndarray] = None,
    low: Optional[np.ndarray] = None,
    fast_length: int = 2,
    slow_length: int = 14,
) -> np.ndarray:
    """Adaptive moving average over a ``length + 1`` high/low channel, seeded from 0."""
    fast_alpha = 2.0 / (fast_length + 1)
    slow_alpha = 2.0 / (slow_length + 1)
    highest, lowest = _channel(values, high, low, length + 1)
    out = RoundedSeries(len(values))
    for value, hh, ll in zip(values, highest, lowest):
        ssc = _channel_position(value, hh, ll) * (fast_alpha - slow_alpha) + slow_alpha
        prev = out.last()
        out.append(prev + ssc * ssc * (value - prev))
    return out.to_array()


def adaptive_ema(
    values: np.ndarray,
    length: int,
    high: Optional[np.ndarray] = None,
    low: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Adaptive EMA: the SMA through warm-up, then a channel-scaled EMA step."""
    highest, lowest = _channel(values, high, low, length)
    center = sma(values, length)
    base_rate = 2.0 / (length + 1)
    out = RoundedSeries(len(values))
    for i, value in enumerate(values):
        if i <= length:
            out.append(center[i])
            continue
        rate = base_rate * (1 + _channel_position(value, highest[i], lowest[i]))
        prev = out.last(default=value)
        out.append(prev + rate * (value - prev))
    return out.to_array()


def rmta(values: np.ndarray, length: int) -> np.ndarray:
    """Recursive moving trend average, seeded from the current value."""
    alpha = 2.0 / (length + 1)
    out = RoundedSeries(len(values))
    prev_bot: Optional[float] = None
    for value in values:
        value = float(value)
        prev_bot = value if prev_bot is None else prev_bot
        prev = out.last(default=value)
        bot = (1 - alpha) * prev_bot + value
        out.append((1 - alpha) * prev + alpha * (value + bot - prev_bot))
        prev_bot = bot
    return out.to_array()
