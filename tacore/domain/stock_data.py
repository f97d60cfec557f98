"""
Stock data container and input-series extraction.

StockData holds OHLCV series for one symbol plus the outputs of the last
indicator applied to it. Derived price inputs (typical price, median
price, ...) are computed here and rounded like every other series.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from tacore.utils.logging_setup import get_logger

from .exceptions import CalculationError, ConfigurationError
from .models import InputName, Signal
from .rolling import high_low_extremes, max_and_min
from .series import RoundedSeries, SeriesLike, as_array

if TYPE_CHECKING:
    from .indicators.base import Indicator

logger = get_logger(__name__)

OHLCV_FIELDS = ["open", "high", "low", "close", "volume"]

DEFAULT_CHANNEL_WINDOW = 14


# =============================================================================
# DERIVED PRICE SERIES
# =============================================================================

def _rounded(values: np.ndarray) -> np.ndarray:
    out = RoundedSeries(len(values))
    out.extend(values)
    return out.to_array()


def typical_price(high: SeriesLike, low: SeriesLike, close: SeriesLike) -> np.ndarray:
    """``(high + low + close) / 3``"""
    return _rounded((as_array(high) + as_array(low) + as_array(close)) / 3)


def full_typical_price(
    open_: SeriesLike, high: SeriesLike, low: SeriesLike, close: SeriesLike
) -> np.ndarray:
    """``(open + high + low + close) / 4``"""
    return _rounded((as_array(open_) + as_array(high) + as_array(low) + as_array(close)) / 4)


def median_price(high: SeriesLike, low: SeriesLike) -> np.ndarray:
    """``(high + low) / 2``"""
    return _rounded((as_array(high) + as_array(low)) / 2)


def weighted_close(high: SeriesLike, low: SeriesLike, close: SeriesLike) -> np.ndarray:
    """``(high + low + 2 * close) / 4``"""
    return _rounded((as_array(high) + as_array(low) + 2 * as_array(close)) / 4)


def midpoint(close: SeriesLike, window: int = DEFAULT_CHANNEL_WINDOW) -> np.ndarray:
    """Middle of the highest and lowest close over the window."""
    highest, lowest = max_and_min(close, window)
    return _rounded((highest + lowest) / 2)


def midprice(
    high: SeriesLike, low: SeriesLike, window: int = DEFAULT_CHANNEL_WINDOW
) -> np.ndarray:
    """Middle of the highest high and lowest low over the window."""
    highest, lowest = high_low_extremes(high, low, window)
    return _rounded((highest + lowest) / 2)


def select_input(
    data: pd.DataFrame,
    name: Union[InputName, str] = InputName.CLOSE,
    window: int = DEFAULT_CHANNEL_WINDOW,
) -> np.ndarray:
    """
    Extract an input series from an OHLCV DataFrame.

    Args:
        data: DataFrame with lowercase OHLCV columns.
        name: Which series to extract.
        window: Lookback for MIDPOINT / MIDPRICE.

    Returns:
        float64 array aligned with ``data``.
    """
    if isinstance(name, str):
        try:
            input_name = InputName(name.strip().lower())
        except ValueError:
            raise ConfigurationError(f"Unknown input series: {name!r}") from None
    else:
        input_name = name

    def col(field: str) -> np.ndarray:
        if field not in data.columns:
            raise CalculationError(f"Input {input_name.value} requires column '{field}'")
        return data[field].to_numpy(dtype=np.float64)

    if input_name in (InputName.CLOSE, InputName.ADJUSTED_CLOSE):
        return col("close")
    if input_name == InputName.OPEN:
        return col("open")
    if input_name == InputName.HIGH:
        return col("high")
    if input_name == InputName.LOW:
        return col("low")
    if input_name == InputName.VOLUME:
        return col("volume")
    if input_name == InputName.TYPICAL_PRICE:
        return typical_price(col("high"), col("low"), col("close"))
    if input_name == InputName.FULL_TYPICAL_PRICE:
        return full_typical_price(col("open"), col("high"), col("low"), col("close"))
    if input_name == InputName.MEDIAN_PRICE:
        return median_price(col("high"), col("low"))
    if input_name == InputName.WEIGHTED_CLOSE:
        return weighted_close(col("high"), col("low"), col("close"))
    if input_name == InputName.MIDPOINT:
        return midpoint(col("close"), window)
    return midprice(col("high"), col("low"), window)


# =============================================================================
# CONTAINER
# =============================================================================

class StockData:
    """
    OHLCV series plus the outputs of the most recent calculation.

    Example:
        stock = StockData.from_dataframe(bars)
        frame = stock.apply(RSIIndicator())
        stock.output_values["rsi"], stock.signals[-1]
    """

    def __init__(
        self,
        open_: SeriesLike,
        high: SeriesLike,
        low: SeriesLike,
        close: SeriesLike,
        volume: SeriesLike,
        dates: Optional[Sequence[datetime]] = None,
        input_name: Optional[InputName] = None,
    ) -> None:
        self.open = as_array(open_)
        self.high = as_array(high)
        self.low = as_array(low)
        self.close = as_array(close)
        self.volume = as_array(volume)
        self.dates = pd.DatetimeIndex(dates) if dates is not None else None
        self.input_name = input_name

        lengths = {len(s) for s in (self.open, self.high, self.low, self.close, self.volume)}
        if self.dates is not None:
            lengths.add(len(self.dates))
        if len(lengths) > 1:
            raise CalculationError(f"OHLCV series lengths differ: {sorted(lengths)}")

        self.indicator_name: Optional[str] = None
        self.output_values: Dict[str, np.ndarray] = {}
        self.signals: List[Signal] = []
        self.custom_values: np.ndarray = np.zeros(0, dtype=np.float64)

    @classmethod
    def from_dataframe(
        cls, data: pd.DataFrame, input_name: Optional[InputName] = None
    ) -> "StockData":
        """
        Build from a DataFrame with open/high/low/close/volume columns.

        Column names are matched case-insensitively; a DatetimeIndex (or a
        ``date`` column) becomes ``dates``.
        """
        frame = data.rename(columns=str.lower)
        missing = [f for f in OHLCV_FIELDS if f not in frame.columns]
        if missing:
            raise CalculationError(f"DataFrame missing columns: {missing}")

        dates = None
        if "date" in frame.columns:
            dates = pd.to_datetime(frame["date"])
        elif isinstance(frame.index, pd.DatetimeIndex):
            dates = frame.index

        return cls(
            frame["open"].to_numpy(dtype=np.float64),
            frame["high"].to_numpy(dtype=np.float64),
            frame["low"].to_numpy(dtype=np.float64),
            frame["close"].to_numpy(dtype=np.float64),
            frame["volume"].to_numpy(dtype=np.float64),
            dates=dates,
            input_name=input_name,
        )

    @property
    def count(self) -> int:
        return len(self.close)

    def to_frame(self) -> pd.DataFrame:
        """OHLCV as a DataFrame indexed by date (or position)."""
        return pd.DataFrame(
            {
                "open": self.open,
                "high": self.high,
                "low": self.low,
                "close": self.close,
                "volume": self.volume,
            },
            index=self.dates if self.dates is not None else pd.RangeIndex(self.count),
        )

    def input_values(
        self,
        name: Optional[InputName] = None,
        window: int = DEFAULT_CHANNEL_WINDOW,
    ) -> np.ndarray:
        """The configured (or requested) input series."""
        return select_input(self.to_frame(), name or self.input_name or InputName.CLOSE, window)

    def apply(self, indicator: "Indicator", params: Optional[Dict[str, Any]] = None) -> pd.DataFrame:
        """
        Run an indicator and store its outputs on this container.

        The indicator's ``signal`` column becomes ``signals``; its primary
        output column (if it has one) becomes ``custom_values``. A container
        built with an ``input_name`` feeds that input unless ``params`` names one.
        """
        merged = dict(params or {})
        if self.input_name is not None:
            merged.setdefault("input", self.input_name)
        result = indicator.calculate(self.to_frame(), merged)

        self.indicator_name = indicator.name
        self.output_values = {
            col: result[col].to_numpy(dtype=np.float64)
            for col in result.columns
            if col != "signal"
        }
        self.signals = list(result["signal"]) if "signal" in result.columns else []

        primary = getattr(indicator, "primary_output", None)
        if primary and primary in self.output_values:
            self.custom_values = self.output_values[primary].copy()
        else:
            self.custom_values = np.zeros(0, dtype=np.float64)

        logger.debug(
            f"Applied {indicator.name} to {self.count} bars",
            extra={"data": {"outputs": list(self.output_values)}},
        )
        return result

    def primary_values(self) -> np.ndarray:
        """
        Single output series of the last indicator, for chaining.

        Raises:
            CalculationError: If the last indicator has no single output.
        """
        if len(self.custom_values) == 0 and self.count > 0:
            raise CalculationError(
                f"Calculations based off of {self.indicator_name} can't be completed "
                "because this indicator doesn't have a single output"
            )
        return self.custom_values.copy()

    def clear(self) -> None:
        """Drop outputs so the same input data can feed another indicator."""
        self.indicator_name = None
        self.output_values = {}
        self.signals = []
        self.custom_values = np.zeros(0, dtype=np.float64)
