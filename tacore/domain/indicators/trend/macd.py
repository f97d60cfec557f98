"""
MACD (Moving Average Convergence Divergence) Indicator.

Measures the relationship between a fast and a slow moving average.

Signals:
- Buy: Histogram positive (MACD above its signal line)
- Sell: Histogram negative
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...averages import compute_moving_average
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import RoundedSeries, lag
from ...signals import classify_compare
from ..base import IndicatorBase


class MACDIndicator(IndicatorBase):
    """
    MACD indicator with line, signal line, and histogram.

    Default Parameters:
        fast_length: 12
        slow_length: 26
        signal_length: 9
        method: "exponential"
        input: close

    State Output:
        macd: MACD line value
        macd_signal: Signal line value
        histogram: MACD - signal line
        direction: "bullish" or "bearish" based on MACD vs signal line
        signal: Compare signal on the histogram
    """

    name = "macd"
    category = IndicatorCategory.TREND
    required_fields = ["close"]
    warmup_periods = 35  # slow_length + signal_length
    primary_output = "macd"

    _default_params = {
        "fast_length": 12,
        "slow_length": 26,
        "signal_length": 9,
        "method": MovingAvgType.EXPONENTIAL.value,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate MACD line, signal line, and histogram."""
        values = self._input(data, params)
        method = params["method"]

        fast_ma = compute_moving_average(method, params["fast_length"], values)
        slow_ma = compute_moving_average(method, params["slow_length"], values)

        macd = RoundedSeries(len(values))
        macd.extend(fast_ma - slow_ma)
        macd_values = macd.to_array()

        signal_line = compute_moving_average(method, params["signal_length"], macd_values)

        histogram = RoundedSeries(len(values))
        histogram.extend(macd_values - signal_line)
        hist_values = histogram.to_array()

        signals = [
            classify_compare(hist_values[i], lag(hist_values, i, 1))
            for i in range(len(values))
        ]
        return self._frame(
            data,
            {"macd": macd_values, "macd_signal": signal_line, "histogram": hist_values},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        macd = float(self._safe_get(current, "macd", 0.0))
        signal_line = float(self._safe_get(current, "macd_signal", 0.0))
        histogram = float(self._safe_get(current, "histogram", 0.0))
        return {
            "macd": macd,
            "macd_signal": signal_line,
            "histogram": histogram,
            "direction": "bullish" if macd >= signal_line else "bearish",
            "signal": self._signal_state(current),
        }
