"""
Indicator Calculator - batch calculation over one OHLCV frame.

Resolves indicators from the registry, merges configured parameter
overrides, and times each calculation:

    calculator = IndicatorCalculator(config)
    results = calculator.run(bars, ["rsi", "atr"])
    states = calculator.latest_states(results)
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from config.models import AppConfig

from ..domain.exceptions import ConfigurationError, RecoverableError
from ..domain.indicators import Indicator, IndicatorRegistry, get_indicator_registry
from ..domain.series import PRECISION
from ..domain.stock_data import OHLCV_FIELDS
from ..utils.logging_setup import get_logger
from ..utils.perf_logger import log_timing, timed

logger = get_logger(__name__)


@timed("load_bars")
def load_bars(path: Union[str, Path]) -> pd.DataFrame:
    """
    Load OHLCV bars from a CSV file.

    Column names are lowercased; a ``date`` column becomes the index.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If an OHLCV column is missing.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")

    bars = pd.read_csv(path)
    bars.columns = [str(col).strip().lower() for col in bars.columns]
    missing = [f for f in OHLCV_FIELDS if f not in bars.columns]
    if missing:
        raise ConfigurationError(f"{path.name} missing columns: {missing}")

    if "date" in bars.columns:
        bars["date"] = pd.to_datetime(bars["date"])
        bars = bars.set_index("date")

    logger.info(f"Loaded {len(bars)} bars from {path.name}")
    return bars


class IndicatorCalculator:
    """
    Runs registered indicators over a DataFrame with config overrides.

    Parameter precedence (highest first): explicit ``params`` argument,
    ``indicators.<name>.params`` from config, RSI thresholds from the
    ``calculation`` section, indicator defaults.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        registry: Optional[IndicatorRegistry] = None,
    ) -> None:
        if config is not None and config.calculation.precision != PRECISION:
            raise ConfigurationError(
                f"Output precision is fixed at {PRECISION} decimals, "
                f"got {config.calculation.precision}"
            )

        self._config = config
        self._registry = registry or get_indicator_registry()

        self._indicators_computed = 0
        self._failures = 0

    @property
    def registry(self) -> IndicatorRegistry:
        return self._registry

    def resolve(self, name: str) -> Indicator:
        """
        Look up an indicator by name.

        Raises:
            ConfigurationError: If no indicator has that name.
        """
        indicator = self._registry.get(name)
        if indicator is None:
            raise ConfigurationError(
                f"Unknown indicator '{name}'. Available: {sorted(self._registry.get_names())}"
            )
        return indicator

    def enabled_indicators(self) -> List[str]:
        """Registered indicator names not disabled in config."""
        names = sorted(self._registry.get_names())
        if self._config is None:
            return names
        return [
            name for name in names
            if name not in self._config.indicators or self._config.indicators[name].enabled
        ]

    def params_for(self, name: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Effective parameter overrides for one indicator."""
        indicator = self.resolve(name)
        params: Dict[str, Any] = {}

        if self._config is not None:
            defaults = indicator.default_params
            calc = self._config.calculation
            if "overbought" in defaults:
                params["overbought"] = calc.rsi_overbought
            if "oversold" in defaults:
                params["oversold"] = calc.rsi_oversold
            params.update(self._config.indicator_params(name))

        params.update(overrides or {})
        return params

    def calculate(
        self,
        data: pd.DataFrame,
        name: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> pd.DataFrame:
        """Calculate one indicator, timed under ``indicator.<name>``."""
        indicator = self.resolve(name)
        merged = self.params_for(name, params)

        with log_timing(f"indicator.{name}", extra={"bars": len(data)}) as ctx:
            result = indicator.calculate(data, merged)
            ctx["columns"] = list(result.columns)

        self._indicators_computed += 1
        return result

    def run(
        self,
        data: pd.DataFrame,
        names: Optional[Iterable[str]] = None,
        params: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> Dict[str, pd.DataFrame]:
        """
        Calculate several indicators on the same data.

        Indicators failing with a recoverable error are logged and skipped;
        configuration errors propagate.

        Args:
            data: OHLCV DataFrame
            names: Indicator names (default: all enabled)
            params: Per-indicator overrides keyed by name

        Returns:
            Results keyed by indicator name, in request order
        """
        requested = list(names) if names is not None else self.enabled_indicators()
        params = params or {}
        results: Dict[str, pd.DataFrame] = {}

        with log_timing("indicator_batch", extra={"bars": len(data)}) as ctx:
            for name in requested:
                try:
                    results[name] = self.calculate(data, name, params.get(name))
                except RecoverableError as e:
                    self._failures += 1
                    logger.warning(f"Skipping {name}: {e}")
            ctx["indicators"] = len(results)

        logger.info(
            f"Calculated {len(results)}/{len(requested)} indicators over {len(data)} bars"
        )
        return results

    def latest_states(self, results: Dict[str, pd.DataFrame]) -> Dict[str, Dict[str, Any]]:
        """State of each indicator on its last bar."""
        states: Dict[str, Dict[str, Any]] = {}
        for name, frame in results.items():
            if frame.empty:
                continue
            current = frame.iloc[-1]
            previous = frame.iloc[-2] if len(frame) > 1 else None
            states[name] = self.resolve(name).get_state(
                current, previous, self.params_for(name)
            )
        return states

    def stats(self) -> Dict[str, Any]:
        """Counts since construction."""
        return {
            "indicators_available": len(self._registry),
            "indicators_computed": self._indicators_computed,
            "failures": self._failures,
        }
