"""
Standard Deviation Volatility Indicator.

Dispersion of the input around its moving average.

Signals:
- Breakout: Standard deviation at or above its own average, graded by the
  input's distance from its average
- Neutral: Standard deviation below its average
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union

import numpy as np
import pandas as pd

from ...averages import compute_moving_average
from ...models import IndicatorCategory, InputName, MovingAvgType
from ...rolling import rolling_variance, stddev_from_variance
from ...series import as_rounded_array, lag
from ...signals import classify_volatility
from ..base import IndicatorBase


def stddev_volatility(
    values: np.ndarray,
    method: Union[MovingAvgType, str],
    length: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Standard deviation, variance and center line of ``values``.

    Returns:
        (stddev, variance, center) arrays
    """
    center = compute_moving_average(method, length, as_rounded_array(values))
    variance = rolling_variance(values, length, method)
    return stddev_from_variance(variance), variance, center


class StdDevVolatilityIndicator(IndicatorBase):
    """
    Standard deviation volatility indicator.

    Default Parameters:
        length: 20
        method: "simple"
        input: close

    State Output:
        stddev: Standard deviation
        expanding: Whether stddev is above its signal line
        signal: Volatility signal
    """

    name = "stddev"
    category = IndicatorCategory.VOLATILITY
    required_fields = ["close"]
    warmup_periods = 20
    primary_output = "stddev"

    _default_params = {
        "length": 20,
        "method": MovingAvgType.SIMPLE.value,
        "input": InputName.CLOSE,
    }

    def _calculate(self, data: pd.DataFrame, params: Dict[str, Any]) -> pd.DataFrame:
        """Calculate standard deviation, variance and the stddev signal line."""
        values = self._input(data, params)
        method = params["method"]
        length = params["length"]

        stddev, variance, center = stddev_volatility(values, method, length)
        stddev_ma = compute_moving_average(method, length, stddev)

        signals = [
            classify_volatility(
                values[i] - center[i],
                lag(values, i, 1) - lag(center, i, 1),
                stddev[i],
                stddev_ma[i],
            )
            for i in range(len(values))
        ]
        return self._frame(
            data,
            {"stddev": stddev, "variance": variance, "stddev_signal": stddev_ma},
            signals,
        )

    def _get_state(
        self,
        current: pd.Series,
        previous: Optional[pd.Series],
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        stddev = float(self._safe_get(current, "stddev", 0.0))
        stddev_ma = float(self._safe_get(current, "stddev_signal", 0.0))
        return {
            "stddev": stddev,
            "expanding": stddev >= stddev_ma,
            "signal": self._signal_state(current),
        }
