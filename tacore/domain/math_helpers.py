"""
Scalar math helpers.

All helpers are total: domain errors resolve to 0 (or a cap) instead of
raising or returning NaN.
"""

from __future__ import annotations

import math

MIN_LENGTH = 2
MAX_LENGTH = 530
MAX_EXP_ARG = 100.0


def min_or_max(value: float, max_value: float, min_value: float) -> float:
    """Clamp ``value`` into ``[min_value, max_value]``."""
    return min(max(value, min_value), max_value)


def clamp_length(value: int) -> int:
    """Clamp a derived lookback length into ``[2, 530]``."""
    return int(min(max(value, MIN_LENGTH), MAX_LENGTH))


def safe_sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else 0.0


def safe_log(value: float) -> float:
    return math.log(value) if value > 0 else 0.0


def safe_exp(value: float) -> float:
    return math.exp(min(value, MAX_EXP_ARG))


def safe_pow(value: float, power: float) -> float:
    """``value ** power``; 0 where the result is undefined or overflows."""
    try:
        result = math.pow(value, power)
    except (OverflowError, ValueError):
        return 0.0
    return result if math.isfinite(result) else 0.0


def safe_div(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator != 0 else 0.0


def true_range(high: float, low: float, prev_close: float) -> float:
    """Wilder's true range."""
    return max(high - low, abs(high - prev_close), abs(low - prev_close))


def percent_change(current: float, previous: float) -> float:
    """Percent change relative to ``|previous|``; 0 when previous is 0."""
    return (current - previous) / abs(previous) * 100 if previous != 0 else 0.0


def rescale_value(
    value: float,
    old_max: float,
    old_min: float,
    new_max: float,
    new_min: float,
    is_reversed: bool = False,
) -> float:
    """Map ``value`` from ``[old_min, old_max]`` onto ``[new_min, new_max]``."""
    d = (old_max - value) if is_reversed else (value - old_min)
    ratio = safe_div(d, old_max - old_min)
    return ratio * (new_max - new_min) + new_min
