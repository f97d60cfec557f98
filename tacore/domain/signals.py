"""
Signal classification.

Pure functions mapping current/previous indicator deltas to a Signal.
Callers pass "previous" values from the prior bar explicitly; nothing is
retained between calls.

Graded variants (RSI, volatility, bollinger, bullish/bearish) emit
STRONG_BUY / STRONG_SELL when the delta is signed and still moving away
from zero. All threshold comparisons are strict unless noted.
"""

from __future__ import annotations

from .models import Signal


def _graded(current: float, previous: float) -> Signal:
    """STRONG/plain ladder on one delta pair; NONE when flat."""
    if current > 0 and current > previous:
        return Signal.STRONG_BUY
    if current < 0 and current < previous:
        return Signal.STRONG_SELL
    if current > 0:
        return Signal.BUY
    if current < 0:
        return Signal.SELL
    return Signal.NONE


def classify_compare(
    current_delta: float, previous_delta: float, is_reversed: bool = False
) -> Signal:
    """
    Simple crossover signal.

    BUY when the current delta is positive, SELL when negative, otherwise
    neutral. ``previous_delta`` is accepted for a uniform call shape with
    the other classifiers.
    """
    if is_reversed:
        current_delta = -current_delta
    if current_delta > 0:
        return Signal.BUY
    if current_delta < 0:
        return Signal.SELL
    return Signal.NONE


def classify_rsi(
    current_slope: float,
    prev_slope: float,
    current_value: float,
    prev_value: float,
    overbought: float,
    oversold: float,
    is_reversed: bool = False,
) -> Signal:
    """
    RSI-style signal.

    Graded compare on the slope, plus a BUY when the value climbs back over
    the oversold level and a SELL when it falls back under the overbought
    level. Reversed mode mirrors every comparison.
    """
    if is_reversed:
        if current_slope < 0 and current_slope < prev_slope:
            return Signal.STRONG_BUY
        if current_slope > 0 and current_slope > prev_slope:
            return Signal.STRONG_SELL
        if current_slope < 0 or (prev_value > oversold and current_value < oversold):
            return Signal.BUY
        if current_slope > 0 or (prev_value < overbought and current_value > overbought):
            return Signal.SELL
        return Signal.NONE

    if current_slope > 0 and current_slope > prev_slope:
        return Signal.STRONG_BUY
    if current_slope < 0 and current_slope < prev_slope:
        return Signal.STRONG_SELL
    if current_slope > 0 or (prev_value < oversold and current_value > oversold):
        return Signal.BUY
    if current_slope < 0 or (prev_value > overbought and current_value < overbought):
        return Signal.SELL
    return Signal.NONE


def classify_volatility(
    current_slope: float,
    prev_slope: float,
    volatility: float,
    threshold: float,
) -> Signal:
    """
    Volatility breakout signal.

    Neutral unless ``volatility >= threshold``; during a breakout the slope
    pair is graded like a compare signal.
    """
    if volatility >= threshold:
        return _graded(current_slope, prev_slope)
    return Signal.NONE


def classify_bullish_bearish(
    bullish_slope: float,
    prev_bullish_slope: float,
    bearish_slope: float,
    prev_bearish_slope: float,
    is_reversed: bool = False,
) -> Signal:
    """
    Dual-condition signal from two independent band crossings.

    Evaluation order (first match wins): strong bullish, strong bearish,
    bullish, bearish, neutral.
    """
    sign = -1 if is_reversed else 1
    bull, prev_bull = sign * bullish_slope, sign * prev_bullish_slope
    bear, prev_bear = sign * bearish_slope, sign * prev_bearish_slope

    if bull > 0 and bull > prev_bull:
        return Signal.STRONG_BUY
    if bear < 0 and bear < prev_bear:
        return Signal.STRONG_SELL
    if bull > 0:
        return Signal.BUY
    if bear < 0:
        return Signal.SELL
    return Signal.NONE


def classify_condition(bullish: bool, bearish: bool) -> Signal:
    """BUY if bullish, else SELL if bearish, else neutral."""
    if bullish:
        return Signal.BUY
    if bearish:
        return Signal.SELL
    return Signal.NONE


def classify_bollinger(
    current_slope: float,
    prev_slope: float,
    current_value: float,
    prev_value: float,
    upper_band: float,
    prev_upper_band: float,
    lower_band: float,
    prev_lower_band: float,
) -> Signal:
    """Graded compare plus re-entry into the bands from outside."""
    if current_slope > 0 and current_slope > prev_slope:
        return Signal.STRONG_BUY
    if current_slope < 0 and current_slope < prev_slope:
        return Signal.STRONG_SELL
    if current_slope > 0 or (prev_value < prev_lower_band and current_value > lower_band):
        return Signal.BUY
    if current_slope < 0 or (prev_value > prev_upper_band and current_value < upper_band):
        return Signal.SELL
    return Signal.NONE
