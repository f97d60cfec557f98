"""
ADX (Average Directional Index) Indicator.

Measures trend strength from directional movement.

Signals:
- Buy: +DI spread over -DI positive
- Sell: +DI spread over -DI negative
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from ...averages import compute_moving_average
from ...math_helpers import min_or_max, safe_div, true_range
from ...models import IndicatorCategory, MovingAvgType
from ...series import RoundedSeries, lag
from ...signals import classify_compare
from ..base import IndicatorBase


class ADXIndicator(IndicatorBase):
    """
    Average Directional Index indicator.

    Previous high, low and close are taken as 0 on the first bar, so the
    first true range and directional movements are seeded from the bar
    itself.

    Default Parameters:
        length: 14
        method: "wilders_smoothing"

    State Output:
        adx: ADX value (0-100)
        di_plus: +DI value
        di_minus: -DI value
        trend_strength: "strong" (>25), "weak" (<20), or "moderate"
        signal: Compare signal on the DI spread
    """

    name = "adx"
    category = IndicatorCategory.TREND
    required_fields = ["high", "low", "close"]
    warmup_periods = 28  # 2 * length
    primary_output = "adx"

    _default_params = {
        "length": 14,
        "method": MovingAvgType.WILDERS_SMOOTHING.value,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate +DI, -DI and ADX."""
        length = params["length"]
        method = params["method"]

        high = self._column(data, "high")
        low = self._column(data, "low")
        close = self._column(data, "close")
        n = len(close)

        tr = RoundedSeries(n)
        dm_plus = RoundedSeries(n)
        dm_minus = RoundedSeries(n)
        for i in range(n):
            tr.append(true_range(high[i], low[i], lag(close, i, 1)))

            high_diff = high[i] - lag(high, i, 1)
            low_diff = lag(low, i, 1) - low[i]
            dm_plus.append(max(high_diff, 0.0) if high_diff > low_diff else 0.0)
            dm_minus.append(max(low_diff, 0.0) if low_diff > high_diff else 0.0)

        tr_smooth = compute_moving_average(method, length, tr.to_array())
        dm_plus_smooth = compute_moving_average(method, length, dm_plus.to_array())
        dm_minus_smooth = compute_moving_average(method, length, dm_minus.to_array())

        di_plus = RoundedSeries(n)
        di_minus = RoundedSeries(n)
        dx = RoundedSeries(n)
        for i in range(n):
            plus = di_plus.append(
                min_or_max(100 * safe_div(dm_plus_smooth[i], tr_smooth[i]), 100, 0)
            )
            minus = di_minus.append(
                min_or_max(100 * safe_div(dm_minus_smooth[i], tr_smooth[i]), 100, 0)
            )
            dx.append(min_or_max(100 * safe_div(abs(plus - minus), plus + minus), 100, 0))

        adx = compute_moving_average(method, length, dx.to_array())

        plus_values = di_plus.to_array()
        minus_values = di_minus.to_array()
        spread = plus_values - minus_values
        signals = [
            classify_compare(spread[i], lag(spread, i, 1)) for i in range(n)
        ]
        return self._frame(
            data,
            {"di_plus": plus_values, "di_minus": minus_values, "adx": np.asarray(adx)},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        adx = float(self._safe_get(current, "adx", 0.0))
        if adx > 25:
            strength = "strong"
        elif adx < 20:
            strength = "weak"
        else:
            strength = "moderate"
        return {
            "adx": adx,
            "di_plus": float(self._safe_get(current, "di_plus", 0.0)),
            "di_minus": float(self._safe_get(current, "di_minus", 0.0)),
            "trend_strength": strength,
            "signal": self._signal_state(current),
        }
