"""
Fixed-weight window averages.

Each average applies a weight profile to the last ``length`` bars. Lags
before the start of the series read as 0 and keep their weight in the
denominator, so these averages ramp up from 0 during warm-up.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from ..math_helpers import clamp_length, safe_div, safe_exp, safe_sqrt
from ..series import RoundedSeries, lag

PHI = (1 + math.sqrt(5)) / 2


def _lagged_weighted(values: np.ndarray, weights: Sequence[float]) -> np.ndarray:
    """``sum(w[j] * x[i-j]) / sum(w)`` with ``weights[j]`` applied at lag ``j``."""
    weight_sum = float(sum(weights))
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        total = 0.0
        for j, weight in enumerate(weights):
            total += lag(values, i, j) * weight
        out.append(safe_div(total, weight_sum))
    return out.to_array()


def lwma(values: np.ndarray, length: int) -> np.ndarray:
    """Linear weights ``length - j`` at lag ``j``."""
    return _lagged_weighted(values, [length - j for j in range(length)])


def cubed_wma(values: np.ndarray, length: int) -> np.ndarray:
    """Cubed linear weights ``(length - j) ** 3``."""
    return _lagged_weighted(values, [(length - j) ** 3 for j in range(length)])


def fibonacci_wma(values: np.ndarray, length: int) -> np.ndarray:
    """Weights from Binet's Fibonacci formula."""
    weights = []
    for j in range(length):
        power = PHI ** (length - j)
        weights.append((power - ((-1) ** j) / power) / math.sqrt(5))
    return _lagged_weighted(values, weights)


def symmetric_wma(values: np.ndarray, length: int) -> np.ndarray:
    """Symmetrically weighted: weights rise to the middle of the window then fall."""
    floor_length = length // 2
    round_length = round(length / 2)
    weights = [0.0] * length
    if floor_length == round_length:
        right = range(0, floor_length)
        left = range(floor_length, length)
    else:
        right = range(0, floor_length + 1)
        left = range(round_length, length)
    for j in right:
        weights[j] = (j + 1) * length
    for j in left:
        weights[j] = (length - j) * length
    return _lagged_weighted(values, weights)


def quick_ma(values: np.ndarray, length: int) -> np.ndarray:
    """Quick moving average: triangular weights peaking at ``ceil(length/3)`` over ``length + 1`` bars."""
    peak = clamp_length(math.ceil(length / 3))
    weights = []
    for j in range(1, length + 2):
        if j <= peak:
            weights.append(j / peak)
        else:
            weights.append(safe_div(length + 1 - j, length + 1 - peak))
    return _lagged_weighted(values, weights)


def alma(
    values: np.ndarray, length: int, offset: float = 0.85, sigma: float = 6
) -> np.ndarray:
    """
    Arnaud Legoux moving average.

    Gaussian weights centered at ``offset * (length - 1)`` across the window,
    with index ``length - 1`` being the current bar.
    """
    m = offset * (length - 1)
    s = length / sigma
    weights = []
    for j in range(length):
        weights.append(safe_exp(-((j - m) ** 2) / (2 * s * s)) if s != 0 else 0.0)
    # Window position j is the bar at lag length - 1 - j
    return _lagged_weighted(values, weights[::-1])


def quadratic_ma(values: np.ndarray, length: int) -> np.ndarray:
    """Root mean square of the trailing window."""
    squares = np.asarray(values, dtype=np.float64) ** 2
    out = RoundedSeries(len(values))
    for i in range(len(values)):
        window = squares[max(0, i - length + 1) : i + 1]
        out.append(safe_sqrt(float(np.mean(window))))
    return out.to_array()


def jsa(values: np.ndarray, length: int) -> np.ndarray:
    """Midpoint of the current bar and the bar ``length`` back (0 before it exists)."""
    out = RoundedSeries(len(values))
    for i, value in enumerate(values):
        out.append((value + lag(values, i, length)) / 2)
    return out.to_array()
