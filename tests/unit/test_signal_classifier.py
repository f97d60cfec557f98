"""
Unit tests for signal classification.

Tests:
- Compare signal symmetry
- RSI grading and threshold crossings
- Volatility gating
- Bullish/bearish evaluation order
- Bollinger band re-entry
"""

import pytest

from tacore.domain.models import Signal
from tacore.domain.signals import (
    classify_bollinger,
    classify_bullish_bearish,
    classify_compare,
    classify_condition,
    classify_rsi,
    classify_volatility,
)


class TestSignalEnum:
    """Tests for the Signal enum."""

    def test_neutral_is_none(self) -> None:
        """NEUTRAL and NONE are the same member."""
        assert Signal.NEUTRAL is Signal.NONE

    def test_direction_helpers(self) -> None:
        """is_bullish / is_bearish group graded signals."""
        assert Signal.STRONG_BUY.is_bullish
        assert Signal.BUY.is_bullish
        assert Signal.SELL.is_bearish
        assert Signal.STRONG_SELL.is_bearish
        assert not Signal.NONE.is_bullish
        assert not Signal.NONE.is_bearish


class TestCompare:
    """Tests for classify_compare."""

    def test_symmetry(self) -> None:
        """Sign of the current delta decides the signal."""
        assert classify_compare(5, -3) == Signal.BUY
        assert classify_compare(-5, 3) == Signal.SELL
        assert classify_compare(0, 0) == Signal.NEUTRAL

    def test_no_grading(self) -> None:
        """A widening delta is still a plain BUY."""
        assert classify_compare(10, 1) == Signal.BUY
        assert classify_compare(-10, -1) == Signal.SELL

    def test_reversed(self) -> None:
        """Reversed mode swaps BUY and SELL."""
        assert classify_compare(5, 0, is_reversed=True) == Signal.SELL
        assert classify_compare(-5, 0, is_reversed=True) == Signal.BUY
        assert classify_compare(0, 0, is_reversed=True) == Signal.NONE


class TestRsi:
    """Tests for classify_rsi."""

    def test_strong_buy_on_rising_positive_slope(self) -> None:
        """Positive and rising slope is a strong buy."""
        assert classify_rsi(2, 1, 55, 50, 70, 30) == Signal.STRONG_BUY

    def test_strong_sell_on_falling_negative_slope(self) -> None:
        """Negative and falling slope is a strong sell."""
        assert classify_rsi(-2, -1, 45, 50, 70, 30) == Signal.STRONG_SELL

    def test_plain_buy_on_fading_positive_slope(self) -> None:
        """Positive slope that is shrinking is a plain buy."""
        assert classify_rsi(1, 2, 55, 50, 70, 30) == Signal.BUY

    def test_buy_on_oversold_exit(self) -> None:
        """Crossing back above oversold is a buy even with a flat slope."""
        assert classify_rsi(0, 0, 31, 29, 70, 30) == Signal.BUY

    def test_sell_on_overbought_exit(self) -> None:
        """Crossing back below overbought is a sell even with a flat slope."""
        assert classify_rsi(0, 0, 69, 71, 70, 30) == Signal.SELL

    def test_thresholds_are_strict(self) -> None:
        """Touching a level is not a crossing."""
        assert classify_rsi(0, 0, 30, 29, 70, 30) == Signal.NONE
        assert classify_rsi(0, 0, 70, 71, 70, 30) == Signal.NONE

    def test_reversed(self) -> None:
        """Reversed mode mirrors slope grading."""
        assert classify_rsi(-2, -1, 45, 50, 70, 30, is_reversed=True) == Signal.STRONG_BUY
        assert classify_rsi(2, 1, 55, 50, 70, 30, is_reversed=True) == Signal.STRONG_SELL


class TestVolatility:
    """Tests for classify_volatility."""

    def test_below_threshold_is_neutral(self) -> None:
        """No breakout, no signal."""
        assert classify_volatility(5, 1, 0.9, 1.0) == Signal.NONE

    def test_at_threshold_is_graded(self) -> None:
        """volatility >= threshold enables grading."""
        assert classify_volatility(5, 1, 1.0, 1.0) == Signal.STRONG_BUY
        assert classify_volatility(-5, -1, 2.0, 1.0) == Signal.STRONG_SELL

    @pytest.mark.parametrize(
        "slope, prev_slope, expected",
        [
            (1, 5, Signal.BUY),
            (-1, -5, Signal.SELL),
            (0, 3, Signal.NONE),
        ],
    )
    def test_plain_grades(self, slope: float, prev_slope: float, expected: Signal) -> None:
        """Fading slopes give plain signals during a breakout."""
        assert classify_volatility(slope, prev_slope, 3.0, 1.0) == expected


class TestBullishBearish:
    """Tests for classify_bullish_bearish."""

    def test_strong_bullish_wins(self) -> None:
        """Strong bullish is checked before strong bearish."""
        assert classify_bullish_bearish(2, 1, -2, -1) == Signal.STRONG_BUY

    def test_strong_bearish_before_plain_bullish(self) -> None:
        """A fading bullish slope yields to a strong bearish one."""
        assert classify_bullish_bearish(1, 2, -2, -1) == Signal.STRONG_SELL

    def test_plain_signals(self) -> None:
        """Plain bullish, then plain bearish, then neutral."""
        assert classify_bullish_bearish(1, 2, 0, 0) == Signal.BUY
        assert classify_bullish_bearish(0, 0, -1, -2) == Signal.SELL
        assert classify_bullish_bearish(0, 0, 0, 0) == Signal.NONE

    def test_reversed(self) -> None:
        """Reversed mode flips the slopes."""
        assert classify_bullish_bearish(-2, -1, 0, 0, is_reversed=True) == Signal.STRONG_BUY


class TestCondition:
    """Tests for classify_condition."""

    def test_condition(self) -> None:
        """Bullish wins over bearish."""
        assert classify_condition(True, True) == Signal.BUY
        assert classify_condition(False, True) == Signal.SELL
        assert classify_condition(False, False) == Signal.NONE


class TestBollinger:
    """Tests for classify_bollinger."""

    def test_graded_slope(self) -> None:
        """Slope grading comes first."""
        assert classify_bollinger(2, 1, 101, 100, 105, 105, 95, 95) == Signal.STRONG_BUY
        assert classify_bollinger(-2, -1, 99, 100, 105, 105, 95, 95) == Signal.STRONG_SELL

    def test_lower_band_reentry(self) -> None:
        """Price climbing back inside the lower band is a buy."""
        assert classify_bollinger(0, 0, 96, 94, 105, 105, 95, 95) == Signal.BUY

    def test_upper_band_reentry(self) -> None:
        """Price falling back inside the upper band is a sell."""
        assert classify_bollinger(0, 0, 104, 106, 105, 105, 95, 95) == Signal.SELL

    def test_inside_bands_flat(self) -> None:
        """No slope and no crossing is neutral."""
        assert classify_bollinger(0, 0, 100, 100, 105, 105, 95, 95) == Signal.NONE
