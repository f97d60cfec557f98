"""
Donchian Channels Indicator.

Highest high and lowest low over a lookback window.

Signals:
- Buy: Input above the middle channel
- Sell: Input below the middle channel
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...models import IndicatorCategory, InputName
from ...rolling import high_low_extremes
from ...series import RoundedSeries, lag
from ...signals import classify_compare
from ..base import IndicatorBase


class DonchianChannelsIndicator(IndicatorBase):
    """
    Donchian Channels indicator.

    Default Parameters:
        length: 20
        input: close

    State Output:
        upper: Upper channel
        middle: Middle channel
        lower: Lower channel
        signal: Compare signal on input vs middle channel
    """

    name = "donchian"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["high", "low", "close"]
    warmup_periods = 20

    _default_params = {
        "length": 20,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate upper, middle and lower channels."""
        values = self._input(data, params)
        highest, lowest = high_low_extremes(
            self._column(data, "high"), self._column(data, "low"), params["length"]
        )
        n = len(values)

        middle = RoundedSeries(n)
        signals = []
        for i in range(n):
            prev_middle = middle.last()
            current_middle = middle.append((highest[i] + lowest[i]) / 2)
            signals.append(
                classify_compare(
                    values[i] - current_middle, lag(values, i, 1) - prev_middle
                )
            )

        return self._frame(
            data,
            {"dc_upper": highest, "dc_middle": middle.to_array(), "dc_lower": lowest},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        return {
            "upper": float(self._safe_get(current, "dc_upper", 0.0)),
            "middle": float(self._safe_get(current, "dc_middle", 0.0)),
            "lower": float(self._safe_get(current, "dc_lower", 0.0)),
            "signal": self._signal_state(current),
        }
