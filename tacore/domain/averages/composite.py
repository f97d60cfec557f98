"""
Multi-pass averages composed from the basic recurrences.

Each function runs a fixed pipeline of EMA/SMA/WMA passes and combines
the passes bar by bar.
"""

from __future__ import annotations

import math
from typing import List

import numpy as np

from ..math_helpers import clamp_length, safe_sqrt
from ..series import RoundedSeries
from .basic import ema, sma, wma


def _ema_chain(values: np.ndarray, length: int, depth: int) -> List[np.ndarray]:
    """``[EMA(x), EMA(EMA(x)), ...]`` up to ``depth`` passes."""
    passes = []
    current = values
    for _ in range(depth):
        current = ema(current, length)
        passes.append(current)
    return passes


def _combine(passes: List[np.ndarray], coefficients: List[float]) -> np.ndarray:
    n = len(passes[0]) if passes else 0
    out = RoundedSeries(n)
    for i in range(n):
        out.append(sum(c * p[i] for c, p in zip(coefficients, passes)))
    return out.to_array()


def dema(values: np.ndarray, length: int) -> np.ndarray:
    """Double exponential: ``2*e1 - e2``."""
    return _combine(_ema_chain(values, length, 2), [2, -1])


def tema(values: np.ndarray, length: int) -> np.ndarray:
    """Triple exponential: ``3*e1 - 3*e2 + e3``."""
    return _combine(_ema_chain(values, length, 3), [3, -3, 1])


def qema(values: np.ndarray, length: int) -> np.ndarray:
    """Quadruple exponential: ``5e1 - 10e2 + 10e3 - 5e4 + e5``."""
    return _combine(_ema_chain(values, length, 5), [5, -10, 10, -5, 1])


def pema(values: np.ndarray, length: int) -> np.ndarray:
    """Pentuple exponential over eight chained EMAs."""
    return _combine(_ema_chain(values, length, 8), [8, -28, 56, -70, 56, -28, 8, -1])


def t3(values: np.ndarray, length: int, v_factor: float = 0.7) -> np.ndarray:
    """Tillson T3 from six chained EMAs."""
    v = v_factor
    c1 = -v * v * v
    c2 = 3 * v * v + 3 * v * v * v
    c3 = -6 * v * v - 3 * v - 3 * v * v * v
    c4 = 1 + 3 * v + v * v * v + 3 * v * v
    e = _ema_chain(values, length, 6)
    return _combine([e[5], e[4], e[3], e[2]], [c1, c2, c3, c4])


def triangular(values: np.ndarray, length: int) -> np.ndarray:
    """SMA of the SMA."""
    return sma(sma(values, length), length)


def hull(values: np.ndarray, length: int) -> np.ndarray:
    """Hull moving average: ``WMA(2*WMA(len/2) - WMA(len), sqrt(len))``."""
    half_length = clamp_length(math.ceil(length / 2))
    sqrt_length = clamp_length(math.ceil(safe_sqrt(length)))
    wma_full = wma(values, length)
    wma_half = wma(values, half_length)
    raw = _combine([wma_half, wma_full], [2, -1])
    return wma(raw, sqrt_length)


def zlema(values: np.ndarray, length: int) -> np.ndarray:
    """Zero-lag EMA: ``e1 + (e1 - EMA(e1))``."""
    e1, e2 = _ema_chain(values, length, 2)
    return _combine([e1, e2], [2, -1])


def zltema(values: np.ndarray, length: int) -> np.ndarray:
    """Zero-lag TEMA: ``t1 + (t1 - TEMA(t1))``."""
    t1 = tema(values, length)
    t2 = tema(t1, length)
    return _combine([t1, t2], [2, -1])


def lsma(values: np.ndarray, length: int) -> np.ndarray:
    """Least squares estimate: ``3*WMA - 2*SMA``."""
    return _combine([wma(values, length), sma(values, length)], [3, -2])
