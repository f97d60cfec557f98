"""
Moving average families and the dispatching engine.

Usage:
    from tacore.domain.averages import compute_moving_average
    ema = compute_moving_average("exponential", 20, closes)
"""

from .engine import (
    MovingAverageEngine,
    compute_moving_average,
    normalize_length,
    supported_methods,
)

__all__ = [
    "MovingAverageEngine",
    "compute_moving_average",
    "normalize_length",
    "supported_methods",
]
