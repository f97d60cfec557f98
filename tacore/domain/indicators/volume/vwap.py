"""
VWAP (Volume Weighted Average Price) Indicator.

Cumulative volume-weighted average of the typical price.

Signals:
- Buy: Input above VWAP
- Sell: Input below VWAP
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...averages import compute_moving_average
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import lag
from ...signals import classify_compare
from ..base import IndicatorBase


class VWAPIndicator(IndicatorBase):
    """
    Volume Weighted Average Price indicator.

    Default Parameters:
        input: typical_price

    State Output:
        vwap: VWAP value
        signal: Compare signal on input vs VWAP
    """

    name = "vwap"
    category = IndicatorCategory.VOLUME
    required_fields = ["high", "low", "close", "volume"]
    warmup_periods = 1
    primary_output = "vwap"

    _default_params = {
        "input": InputName.TYPICAL_PRICE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate cumulative VWAP."""
        values = self._input(data, params)
        vwap = compute_moving_average(
            MovingAvgType.VOLUME_WEIGHTED_AVERAGE_PRICE,
            1,
            values,
            volume=self._column(data, "volume"),
        )

        signals = [
            classify_compare(values[i] - vwap[i], lag(values, i, 1) - lag(vwap, i, 1))
            for i in range(len(values))
        ]
        return self._frame(data, {"vwap": vwap}, signals)

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        return {
            "vwap": float(self._safe_get(current, "vwap", 0.0)),
            "signal": self._signal_state(current),
        }
