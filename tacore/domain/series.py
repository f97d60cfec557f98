"""
Series primitives.

Every output series is built through RoundedSeries, which rounds each
value to PRECISION decimals when it is appended. Chained calculations
therefore always read rounded values.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence, Union

import numpy as np

PRECISION = 4

SeriesLike = Union[Sequence[float], np.ndarray]


def round_value(value: float, precision: int = PRECISION) -> float:
    """Round a scalar, mapping NaN/Inf to 0."""
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return round(value, precision)


def as_array(series: SeriesLike) -> np.ndarray:
    """Copy any numeric sequence into a float64 array."""
    return np.array(series, dtype=np.float64).reshape(-1)


def as_rounded_array(series: SeriesLike, precision: int = PRECISION) -> np.ndarray:
    """Float64 copy with every element rounded."""
    values = as_array(series)
    values[~np.isfinite(values)] = 0.0
    return np.round(values, precision)


class RoundedSeries:
    """
    Append-only output series with rounding on insert.

    Storage is preallocated to the input length; ``append`` is the only
    write path.
    """

    __slots__ = ("_values", "_size", "_precision")

    def __init__(self, capacity: int, precision: int = PRECISION) -> None:
        self._values = np.zeros(capacity, dtype=np.float64)
        self._size = 0
        self._precision = precision

    def append(self, value: float) -> float:
        """Round and store a value; returns the stored value."""
        if self._size >= len(self._values):
            self._values = np.concatenate([self._values, np.zeros(max(1, len(self._values)))])
        stored = round_value(value, self._precision)
        self._values[self._size] = stored
        self._size += 1
        return stored

    def extend(self, values: Iterable[float]) -> None:
        for value in values:
            self.append(value)

    def last(self, default: float = 0.0) -> float:
        """Most recent value, or ``default`` when empty."""
        return float(self._values[self._size - 1]) if self._size else default

    def lag(self, i: int, k: int, default: float = 0.0) -> float:
        """Value at ``i - k``, or ``default`` when that bar does not exist yet."""
        j = i - k
        return float(self._values[j]) if 0 <= j < self._size else default

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, index: int) -> float:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(index)
        return float(self._values[index])

    def to_array(self) -> np.ndarray:
        """Copy of the appended values."""
        return self._values[: self._size].copy()


def lag(values: np.ndarray, i: int, k: int, default: float = 0.0) -> float:
    """``values[i - k]`` with the bootstrap default when ``i < k``."""
    return float(values[i - k]) if i >= k else default
