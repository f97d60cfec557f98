"""
Bollinger Bands Indicator.

Standard deviation bands around a moving average.

Signals:
- Strong buy/sell: Input moving away from the middle band
- Buy: Input above the middle band, or re-entering from below the lower band
- Sell: Input below the middle band, or re-entering from above the upper band
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import RoundedSeries, lag
from ...signals import classify_bollinger
from ..base import IndicatorBase
from .stddev import stddev_volatility


class BollingerBandsIndicator(IndicatorBase):
    """
    Bollinger Bands indicator.

    Three outputs and no single chained series. Previous bands are 0 on
    the first bar.

    Default Parameters:
        length: 20
        std_dev_mult: 2.0
        method: "simple"
        input: close

    State Output:
        upper: Upper band value
        middle: Middle band value
        lower: Lower band value
        bandwidth: (Upper - Lower) / Middle * 100
        signal: Bollinger signal
    """

    name = "bollinger"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["close"]
    warmup_periods = 20

    _default_params = {
        "length": 20,
        "std_dev_mult": 2.0,
        "method": MovingAvgType.SIMPLE.value,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate Bollinger Bands values."""
        values = self._input(data, params)
        mult = float(params["std_dev_mult"])
        n = len(values)

        stddev, _, middle = stddev_volatility(values, params["method"], params["length"])

        upper = RoundedSeries(n)
        lower = RoundedSeries(n)
        signals = []
        for i in range(n):
            prev_upper = upper.last()
            prev_lower = lower.last()
            upper_band = upper.append(middle[i] + stddev[i] * mult)
            lower_band = lower.append(middle[i] - stddev[i] * mult)

            signals.append(
                classify_bollinger(
                    values[i] - middle[i],
                    lag(values, i, 1) - lag(middle, i, 1),
                    values[i],
                    lag(values, i, 1),
                    upper_band,
                    prev_upper,
                    lower_band,
                    prev_lower,
                )
            )

        return self._frame(
            data,
            {"bb_upper": upper.to_array(), "bb_middle": middle, "bb_lower": lower.to_array()},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        upper = float(self._safe_get(current, "bb_upper", 0.0))
        middle = float(self._safe_get(current, "bb_middle", 0.0))
        lower = float(self._safe_get(current, "bb_lower", 0.0))
        bandwidth = (upper - lower) / middle * 100 if middle != 0 else 0.0
        return {
            "upper": upper,
            "middle": middle,
            "lower": lower,
            "bandwidth": bandwidth,
            "signal": self._signal_state(current),
        }
