"""
Indicator Protocol and Base Class.

Defines the unified interface for indicators built on the moving average
engine and signal classifiers. Concrete subclasses in the category packages
are auto-discovered by IndicatorRegistry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

import numpy as np
import pandas as pd

from ..exceptions import CalculationError, ConfigurationError
from ..models import IndicatorCategory, InputName, Signal
from ..stock_data import select_input

# Parameters every indicator accepts in addition to its own defaults
COMMON_PARAMS = frozenset({"input"})


@runtime_checkable
class Indicator(Protocol):
    """
    Protocol for all technical indicators.

    Each indicator must define:
    - name: Unique identifier (e.g., "rsi", "macd")
    - category: IndicatorCategory (MOMENTUM, TREND, etc.)
    - required_fields: OHLCV fields needed (e.g., ["close"] or ["high", "low", "close"])
    - warmup_periods: Bars before outputs leave the bootstrap region
    - primary_output: Column usable as a single chained series, or None

    And implement:
    - calculate(): Compute output columns plus a ``signal`` column
    - get_state(): Extract a state dict for one bar
    """

    name: str
    category: IndicatorCategory
    required_fields: List[str]
    warmup_periods: int
    primary_output: Optional[str]

    @property
    def default_params(self) -> Dict[str, Any]:
        """Default parameters for this indicator."""
        ...

    def calculate(
        self, data: pd.DataFrame, params: Optional[Dict[str, Any]] = None
    ) -> pd.DataFrame:
        """
        Calculate indicator values from OHLCV data.

        Args:
            data: DataFrame with OHLCV columns (open, high, low, close, volume)
            params: Calculation parameters (merged with default_params)

        Returns:
            DataFrame with indicator columns and ``signal``, same index as input
        """
        ...

    def get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Extract state dictionary for one bar.

        Args:
            current: Current row of indicator values
            previous: Previous row (None on the first bar)
            params: Optional overrides merged with default_params

        Returns:
            State dictionary with at minimum {"signal": ...}
        """
        ...


class IndicatorBase(ABC):
    """
    Abstract base class for indicators with common functionality.

    Provides:
    - Parameter merging with defaults and rejection of unknown keys
    - Data validation
    - Input series selection (close, typical price, ...)
    - Assembly of the output DataFrame with its ``signal`` column

    Subclasses must implement:
    - _calculate(): Core calculation logic
    - _get_state(): State extraction logic
    """

    name: str = ""
    category: IndicatorCategory = IndicatorCategory.TREND
    required_fields: List[str] = ["close"]
    warmup_periods: int = 14
    primary_output: Optional[str] = None

    _default_params: Dict[str, Any] = {}

    @property
    def default_params(self) -> Dict[str, Any]:
        """Default parameters for this indicator."""
        return self._default_params.copy()

    def calculate(
        self, data: pd.DataFrame, params: Optional[Dict[str, Any]] = None
    ) -> pd.DataFrame:
        """
        Calculate indicator with parameter merging and validation.

        Args:
            data: OHLCV DataFrame
            params: User-provided parameters

        Returns:
            DataFrame with indicator columns

        Raises:
            ConfigurationError: If a parameter is not recognized
            CalculationError: If required fields are missing
        """
        merged_params = self._merge_params(params)
        self._validate_data(data)
        return self._calculate(data, merged_params)

    def get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Extract state with parameter merging.

        Args:
            current: Current indicator values
            previous: Previous indicator values (may be None)
            params: Optional parameters (merged with defaults)

        Returns:
            State dictionary
        """
        merged_params = {**self.default_params, **(params or {})}
        return self._get_state(current, previous, merged_params)

    @abstractmethod
    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """
        Core calculation logic - must be implemented by subclasses.

        Args:
            data: Validated OHLCV DataFrame
            params: Merged parameters

        Returns:
            DataFrame with indicator columns
        """
        ...

    @abstractmethod
    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        """State extraction logic - must be implemented by subclasses."""
        ...

    def _merge_params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        params = params or {}
        unknown = [
            key for key in params
            if key not in self._default_params and key not in COMMON_PARAMS
        ]
        if unknown:
            raise ConfigurationError(
                f"Indicator {self.name} does not accept parameters {unknown}"
            )
        return {**self.default_params, **params}

    def _validate_data(self, data: pd.DataFrame) -> None:
        """
        Validate that required fields are present.

        Raises:
            CalculationError: If required fields are missing
        """
        missing = [f for f in self.required_fields if f not in data.columns]
        if missing:
            raise CalculationError(
                f"Indicator {self.name} requires fields {self.required_fields}, "
                f"missing: {missing}"
            )

    def _input(self, data: pd.DataFrame, params: Dict[str, Any]) -> np.ndarray:
        """Selected input series (``params["input"]``, close by default)."""
        return select_input(data, params.get("input", InputName.CLOSE))

    def _column(self, data: pd.DataFrame, field: str) -> np.ndarray:
        return data[field].to_numpy(dtype=np.float64)

    def _frame(
        self,
        data: pd.DataFrame,
        outputs: Dict[str, np.ndarray],
        signals: Sequence[Signal],
    ) -> pd.DataFrame:
        """Assemble outputs and signals into a DataFrame aligned with ``data``."""
        frame = pd.DataFrame(
            {name: np.asarray(values, dtype=np.float64) for name, values in outputs.items()},
            index=data.index,
        )
        frame["signal"] = pd.Series(list(signals), index=data.index, dtype=object)
        return frame

    def _safe_get(
        self,
        series: Optional[pd.Series],
        field: str,
        default: Any = None,
    ) -> Any:
        """
        Safely get value from series with default.

        Args:
            series: Pandas Series (may be None)
            field: Field name to get
            default: Default value if missing

        Returns:
            Field value or default
        """
        if series is None:
            return default
        return series.get(field, default)

    def _signal_state(self, current: pd.Series) -> str:
        signal = self._safe_get(current, "signal", Signal.NONE)
        return signal.value if isinstance(signal, Signal) else str(signal)
