"""
RSI (Relative Strength Index) Indicator.

Measures the speed and magnitude of recent price changes to evaluate
overbought or oversold conditions.

Signals:
- Strong buy/sell: Histogram (RSI minus its signal line) widening
- Buy: Histogram positive, or RSI climbing back over the oversold level
- Sell: Histogram negative, or RSI falling back under the overbought level
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd

from ...averages import compute_moving_average
from ...math_helpers import min_or_max
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...series import RoundedSeries, lag
from ...signals import classify_rsi
from ..base import IndicatorBase


class RSIIndicator(IndicatorBase):
    """
    Relative Strength Index indicator.

    Gains and losses are smoothed with ``method`` (Wilder by default). The
    first bar has no price change, so its gain and loss are both 0.

    Default Parameters:
        length: 14
        signal_length: 3
        method: "wilders_smoothing"
        overbought: 70
        oversold: 30
        input: close

    State Output:
        value: Current RSI value (0-100)
        zone: "overbought", "oversold", or "neutral"
        signal: RSI signal
    """

    name = "rsi"
    category = IndicatorCategory.MOMENTUM
    required_fields = ["close"]
    warmup_periods = 15
    primary_output = "rsi"

    _default_params = {
        "length": 14,
        "signal_length": 3,
        "method": MovingAvgType.WILDERS_SMOOTHING.value,
        "overbought": 70,
        "oversold": 30,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """
        Calculate RSI, its signal line and histogram.

        Args:
            data: DataFrame with the selected input column(s)
            params: Merged parameters

        Returns:
            DataFrame with 'rsi', 'rsi_signal', 'histogram' and 'signal'
        """
        values = self._input(data, params)
        method = params["method"]
        n = len(values)

        gains = RoundedSeries(n)
        losses = RoundedSeries(n)
        for i in range(n):
            change = values[i] - values[i - 1] if i >= 1 else 0.0
            gains.append(max(change, 0.0))
            losses.append(max(-change, 0.0))

        avg_gain = compute_moving_average(method, params["length"], gains.to_array())
        avg_loss = compute_moving_average(method, params["length"], losses.to_array())

        rsi = RoundedSeries(n)
        for gain, loss in zip(avg_gain, avg_loss):
            if loss == 0:
                rsi.append(100.0)
            elif gain == 0:
                rsi.append(0.0)
            else:
                rs = gain / loss
                rsi.append(min_or_max(100 - 100 / (1 + rs), 100, 0))
        rsi_values = rsi.to_array()

        signal_line = compute_moving_average(method, params["signal_length"], rsi_values)

        histogram = RoundedSeries(n)
        histogram.extend(rsi_values - signal_line)
        hist_values = histogram.to_array()

        signals = [
            classify_rsi(
                hist_values[i],
                lag(hist_values, i, 1),
                rsi_values[i],
                lag(rsi_values, i, 1),
                params["overbought"],
                params["oversold"],
            )
            for i in range(n)
        ]
        return self._frame(
            data,
            {"rsi": rsi_values, "rsi_signal": signal_line, "histogram": hist_values},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Extract RSI state.

        Args:
            current: Current indicator values
            previous: Previous indicator values
            params: Merged parameters including overbought/oversold thresholds

        Returns:
            State dict with value, zone and signal
        """
        rsi = current.get("rsi", 50)
        overbought = params["overbought"]
        oversold = params["oversold"]

        if pd.isna(rsi):
            zone = "neutral"
            rsi = 50
        elif rsi >= overbought:
            zone = "overbought"
        elif rsi <= oversold:
            zone = "oversold"
        else:
            zone = "neutral"

        return {
            "value": float(rsi),
            "zone": zone,
            "signal": self._signal_state(current),
        }
