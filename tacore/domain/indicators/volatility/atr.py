"""
ATR (Average True Range) Indicator.

Measures market volatility by averaging true ranges over a period.

Signals:
- Breakout: ATR at or above its own average, graded by the input's
  distance from its average
- Neutral: ATR below its average
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...averages import compute_moving_average
from ...math_helpers import true_range
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import RoundedSeries, lag
from ...signals import classify_volatility
from ..base import IndicatorBase


class ATRIndicator(IndicatorBase):
    """
    Average True Range indicator.

    The previous close is 0 on the first bar, so the first true range is
    the larger of the bar's range and its high.

    Default Parameters:
        length: 14
        method: "wilders_smoothing"
        input: close

    State Output:
        atr: ATR value in price units
        volatility: "high", "normal", or "low" based on the change vs previous ATR
        signal: Volatility signal
    """

    name = "atr"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["high", "low", "close"]
    warmup_periods = 15
    primary_output = "atr"

    _default_params = {
        "length": 14,
        "method": MovingAvgType.WILDERS_SMOOTHING.value,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate ATR values."""
        length = params["length"]
        method = params["method"]

        values = self._input(data, params)
        high = self._column(data, "high")
        low = self._column(data, "low")
        n = len(values)

        tr = RoundedSeries(n)
        for i in range(n):
            tr.append(true_range(high[i], low[i], lag(values, i, 1)))

        ma = compute_moving_average(method, length, values)
        atr = compute_moving_average(method, length, tr.to_array())
        atr_ma = compute_moving_average(method, length, atr)

        signals = [
            classify_volatility(
                values[i] - ma[i],
                lag(values, i, 1) - lag(ma, i, 1),
                atr[i],
                atr_ma[i],
            )
            for i in range(n)
        ]
        return self._frame(data, {"atr": atr}, signals)

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Extract ATR state."""
        atr = current.get("atr", 0)

        if pd.isna(atr):
            return {"atr": 0.0, "volatility": "normal", "signal": self._signal_state(current)}

        volatility = "normal"
        if previous is not None:
            prev_atr = previous.get("atr", 0)
            if not pd.isna(prev_atr) and prev_atr != 0:
                change = (atr - prev_atr) / prev_atr
                if change > 0.1:
                    volatility = "high"
                elif change < -0.1:
                    volatility = "low"

        return {
            "atr": float(atr),
            "volatility": volatility,
            "signal": self._signal_state(current),
        }
