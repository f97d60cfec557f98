"""Application layer: batch indicator calculation."""

from .calculator import IndicatorCalculator, load_bars

__all__ = ["IndicatorCalculator", "load_bars"]
