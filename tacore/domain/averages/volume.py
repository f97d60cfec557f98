"""Volume-weighted averages."""

from __future__ import annotations

import numpy as np

from ..math_helpers import safe_div
from ..series import RoundedSeries
from .basic import sma


def vwap(values: np.ndarray, length: int, volume: np.ndarray) -> np.ndarray:
    """
    Cumulative volume-weighted average price.

    ``length`` is accepted for a uniform signature; VWAP accumulates from
    the first bar.
    """
    out = RoundedSeries(len(values))
    price_volume_sum = 0.0
    volume_sum = 0.0
    for price, vol in zip(values, volume):
        price_volume_sum += price * vol
        volume_sum += vol
        out.append(safe_div(price_volume_sum, volume_sum))
    return out.to_array()


def vwma(values: np.ndarray, length: int, volume: np.ndarray) -> np.ndarray:
    """``SMA(price * volume) / SMA(volume)`` over the trailing window."""
    volume_sma = sma(volume, length)
    price_volume = np.asarray(values, dtype=np.float64) * np.asarray(volume, dtype=np.float64)
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        window = price_volume[max(0, i - length + 1) : i + 1]
        out.append(safe_div(float(np.mean(window)), volume_sma[i]))
    return out.to_array()
