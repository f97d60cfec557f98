"""
Indicator lookup by name, filled by scanning the category packages.

Each ``IndicatorCategory`` value names a subpackage (``trend``, ``momentum``,
...). Every concrete ``IndicatorBase`` subclass defined in one of its modules
is instantiated once and stored under its ``name``.
"""

from __future__ import annotations

import importlib
import pkgutil
from types import ModuleType
from typing import Dict, Iterator, List, Optional

from tacore.utils.logging_setup import get_logger

from ..models import IndicatorCategory
from .base import Indicator, IndicatorBase

logger = get_logger(__name__)


def is_indicator_class(obj: object) -> bool:
    """True for concrete IndicatorBase subclasses (not instances)."""
    return isinstance(obj, type) and issubclass(obj, IndicatorBase) and obj is not IndicatorBase


def _category_modules(category: IndicatorCategory) -> Iterator[ModuleType]:
    package = importlib.import_module(f"{__package__}.{category.value}")
    for info in pkgutil.iter_modules(package.__path__):
        if not info.name.startswith("_"):
            yield importlib.import_module(f"{package.__name__}.{info.name}")


def _defined_indicators(module: ModuleType) -> Iterator[type]:
    # Re-exported classes belong to the module that defines them
    for obj in vars(module).values():
        if is_indicator_class(obj) and obj.__module__ == module.__name__:
            yield obj


class IndicatorRegistry:
    """Name -> indicator instance map."""

    def __init__(self) -> None:
        self._indicators: Dict[str, Indicator] = {}

    def discover(self) -> int:
        """Register every indicator found in the category packages; returns the count."""
        found = 0
        for category in IndicatorCategory:
            for module in _category_modules(category):
                for cls in _defined_indicators(module):
                    try:
                        indicator = cls()
                    except TypeError as e:
                        logger.warning(
                            f"Skipping {cls.__name__}: constructor requires arguments ({e})"
                        )
                        continue
                    self.register(indicator)
                    found += 1
        logger.info(f"Discovered {found} indicators")
        return found

    def register(self, indicator: Indicator) -> None:
        """Store ``indicator`` under its name, replacing any previous entry."""
        if indicator.name in self._indicators:
            logger.debug(f"Replacing indicator {indicator.name}")
        self._indicators[indicator.name] = indicator

    def get(self, name: str) -> Optional[Indicator]:
        return self._indicators.get(name)

    def get_names(self) -> List[str]:
        return list(self._indicators)

    def get_by_category(self, category: IndicatorCategory) -> List[Indicator]:
        """Indicators of one category, sorted by name."""
        return sorted(
            (ind for ind in self._indicators.values() if ind.category == category),
            key=lambda ind: ind.name,
        )

    def __len__(self) -> int:
        return len(self._indicators)

    def __contains__(self, name: str) -> bool:
        return name in self._indicators


_global_registry: Optional[IndicatorRegistry] = None


def get_indicator_registry() -> IndicatorRegistry:
    """Shared registry, discovered on first use."""
    global _global_registry
    if _global_registry is None:
        _global_registry = IndicatorRegistry()
        _global_registry.discover()
    return _global_registry
