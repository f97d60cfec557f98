"""Unit tests for scalar math helpers and rounded series."""

import math

import numpy as np
import pytest

from tacore.domain.math_helpers import (
    clamp_length,
    min_or_max,
    percent_change,
    rescale_value,
    safe_div,
    safe_exp,
    safe_log,
    safe_pow,
    safe_sqrt,
    true_range,
)
from tacore.domain.series import RoundedSeries, as_rounded_array, lag, round_value


class TestSafeMath:
    """Helpers resolve domain errors to 0 instead of raising."""

    def test_safe_sqrt(self) -> None:
        """Negative input gives 0."""
        assert safe_sqrt(16) == 4.0
        assert safe_sqrt(-1) == 0.0

    def test_safe_log(self) -> None:
        """Non-positive input gives 0."""
        assert safe_log(math.e) == pytest.approx(1.0)
        assert safe_log(0) == 0.0
        assert safe_log(-5) == 0.0

    def test_safe_exp_capped(self) -> None:
        """Large exponents are capped instead of overflowing."""
        assert math.isfinite(safe_exp(1e6))
        assert safe_exp(0) == 1.0

    def test_safe_pow(self) -> None:
        """Undefined or overflowing powers give 0."""
        assert safe_pow(2, 3) == 8.0
        assert safe_pow(-8, 1 / 3) == 0.0
        assert safe_pow(10, 1000) == 0.0

    def test_safe_div(self) -> None:
        """Division by zero gives 0."""
        assert safe_div(6, 3) == 2.0
        assert safe_div(1, 0) == 0.0


class TestClamps:
    """Tests for clamp helpers."""

    @pytest.mark.parametrize(
        "value, expected",
        [(-4, 2), (0, 2), (2, 2), (100, 100), (530, 530), (10_000, 530)],
    )
    def test_clamp_length(self, value: int, expected: int) -> None:
        """Derived lengths stay in [2, 530]."""
        assert clamp_length(value) == expected

    def test_min_or_max(self) -> None:
        """Argument order is value, max, min."""
        assert min_or_max(5, 3, 1) == 3
        assert min_or_max(-5, 3, 1) == 1
        assert min_or_max(2, 3, 1) == 2


class TestPriceHelpers:
    """Tests for true range and friends."""

    def test_true_range_uses_gap(self) -> None:
        """A gap from the previous close widens the range."""
        assert true_range(12, 11, 8) == 4
        assert true_range(12, 10, 11) == 2

    def test_percent_change(self) -> None:
        """Relative to the absolute previous value."""
        assert percent_change(110, 100) == pytest.approx(10.0)
        assert percent_change(-90, -100) == pytest.approx(10.0)
        assert percent_change(5, 0) == 0.0

    def test_rescale_value(self) -> None:
        """Maps between ranges, optionally reversed."""
        assert rescale_value(5, 10, 0, 100, 0) == pytest.approx(50.0)
        assert rescale_value(2, 10, 0, 100, 0, is_reversed=True) == pytest.approx(80.0)
        assert rescale_value(5, 1, 1, 100, 0) == 0.0


class TestRoundedSeries:
    """Tests for the append-only rounding series."""

    def test_append_rounds(self) -> None:
        """Stored values carry four decimals."""
        series = RoundedSeries(2)
        assert series.append(1.234567) == 1.2346
        assert series[0] == 1.2346

    def test_non_finite_becomes_zero(self) -> None:
        """NaN and Inf are stored as 0."""
        series = RoundedSeries(2)
        series.append(float("nan"))
        series.append(float("inf"))
        np.testing.assert_array_equal(series.to_array(), [0.0, 0.0])

    def test_grows_past_capacity(self) -> None:
        """Appending beyond the preallocated size still works."""
        series = RoundedSeries(1)
        series.extend([1.0, 2.0, 3.0])
        assert len(series) == 3
        assert series.last() == 3.0

    def test_lag_bootstrap(self) -> None:
        """Missing lags fall back to the default."""
        series = RoundedSeries(3)
        series.extend([5.0, 6.0])
        assert series.lag(1, 1) == 5.0
        assert series.lag(1, 2) == 0.0
        assert series.lag(1, 2, default=-1.0) == -1.0

    def test_empty_last(self) -> None:
        """last() on an empty series gives the default."""
        assert RoundedSeries(0).last() == 0.0

    def test_index_out_of_range(self) -> None:
        """Only appended values are addressable."""
        series = RoundedSeries(5)
        series.append(1.0)
        with pytest.raises(IndexError):
            _ = series[1]

    def test_module_helpers(self) -> None:
        """round_value / as_rounded_array / lag agree with the series."""
        assert round_value(2.71828) == 2.7183
        assert round_value(float("-inf")) == 0.0
        np.testing.assert_array_equal(as_rounded_array([1.00004, np.nan]), [1.0, 0.0])
        values = np.array([1.0, 2.0, 3.0])
        assert lag(values, 2, 1) == 2.0
        assert lag(values, 0, 1) == 0.0
