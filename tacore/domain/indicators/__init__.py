"""
Indicators package.

Provides:
- Indicator: Protocol for all indicator implementations
- IndicatorBase: Base class with common functionality
- IndicatorRegistry: Auto-discovery and management of indicators
"""

from .base import Indicator, IndicatorBase
from .registry import IndicatorRegistry, get_indicator_registry

__all__ = [
    "Indicator",
    "IndicatorBase",
    "IndicatorRegistry",
    "get_indicator_registry",
]
