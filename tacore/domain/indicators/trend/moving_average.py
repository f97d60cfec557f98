"""
Moving Average Indicator.

Smooths the selected input with any method supported by the moving average
engine.

Signals:
- Buy: Input above the average
- Sell: Input below the average
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...averages import compute_moving_average
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import lag
from ...signals import classify_compare
from ..base import IndicatorBase


class MovingAverageIndicator(IndicatorBase):
    """
    Generic moving average indicator.

    Default Parameters:
        method: "simple" (any MovingAvgType value)
        length: 14
        input: close

    State Output:
        value: Average value
        direction: "rising", "falling" or "flat" vs the previous bar
        signal: Compare signal on input vs average
    """

    name = "moving_average"
    category = IndicatorCategory.TREND
    required_fields = ["close"]
    warmup_periods = 14
    primary_output = "ma"

    _default_params = {
        "method": MovingAvgType.SIMPLE.value,
        "length": 14,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate the average and its crossover signal."""
        values = self._input(data, params)
        high = self._column(data, "high") if "high" in data.columns else None
        low = self._column(data, "low") if "low" in data.columns else None
        volume = self._column(data, "volume") if "volume" in data.columns else None

        method = MovingAvgType.parse(params["method"])
        ma = compute_moving_average(
            method,
            params["length"],
            values,
            high=high,
            low=low,
            volume=volume,
        )

        signals = [
            classify_compare(
                values[i] - ma[i],
                lag(values, i, 1) - lag(ma, i, 1),
            )
            for i in range(len(values))
        ]
        return self._frame(data, {"ma": ma}, signals)

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        value = float(self._safe_get(current, "ma", 0.0))
        prev_value = float(self._safe_get(previous, "ma", value))
        if value > prev_value:
            direction = "rising"
        elif value < prev_value:
            direction = "falling"
        else:
            direction = "flat"
        return {
            "value": value,
            "direction": direction,
            "signal": self._signal_state(current),
        }
