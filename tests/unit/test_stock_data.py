"""
Unit tests for StockData and input-series selection.

Tests:
- Construction from DataFrames and validation
- Derived price inputs
- Applying indicators and chaining their primary output
"""

import numpy as np
import pandas as pd
import pytest

from tacore.domain.exceptions import CalculationError, ConfigurationError
from tacore.domain.indicators.trend.moving_average import MovingAverageIndicator
from tacore.domain.indicators.volatility.bollinger import BollingerBandsIndicator
from tacore.domain.indicators.volume.vwap import VWAPIndicator
from tacore.domain.models import InputName, Signal
from tacore.domain.stock_data import (
    StockData,
    median_price,
    midprice,
    select_input,
    typical_price,
    weighted_close,
)


class TestDerivedInputs:
    """Tests for derived price series."""

    def test_typical_price(self) -> None:
        """(H + L + C) / 3, rounded."""
        result = typical_price([3.0, 10.0], [1.0, 0.0], [2.0, 0.0])
        np.testing.assert_array_equal(result, [2.0, 3.3333])

    def test_median_and_weighted_close(self) -> None:
        """Median and weighted close formulas."""
        np.testing.assert_array_equal(median_price([4.0], [2.0]), [3.0])
        np.testing.assert_array_equal(weighted_close([4.0], [2.0], [3.0]), [3.0])

    def test_midprice(self) -> None:
        """Middle of the highest high and lowest low."""
        result = midprice([10.0, 12.0, 11.0], [8.0, 9.0, 7.0], window=2)
        np.testing.assert_array_equal(result, [9.0, 10.0, 9.5])


class TestSelectInput:
    """Tests for select_input."""

    def test_default_is_close(self, sample_ohlcv: pd.DataFrame) -> None:
        """Close is the default input."""
        result = select_input(sample_ohlcv)
        np.testing.assert_array_equal(result, sample_ohlcv["close"].to_numpy())

    def test_string_names_case_insensitive(self, sample_ohlcv: pd.DataFrame) -> None:
        """String names are parsed case-insensitively."""
        by_enum = select_input(sample_ohlcv, InputName.TYPICAL_PRICE)
        by_name = select_input(sample_ohlcv, "Typical_Price")
        np.testing.assert_array_equal(by_enum, by_name)

    def test_unknown_name(self, sample_ohlcv: pd.DataFrame) -> None:
        """Unknown input names raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            select_input(sample_ohlcv, "hlc4")

    def test_missing_column(self) -> None:
        """A derived input needs its source columns."""
        data = pd.DataFrame({"close": [1.0, 2.0]})
        with pytest.raises(CalculationError, match="high"):
            select_input(data, InputName.MEDIAN_PRICE)


class TestStockDataConstruction:
    """Tests for building StockData."""

    def test_from_dataframe(self, sample_ohlcv: pd.DataFrame) -> None:
        """OHLCV columns and DatetimeIndex are picked up."""
        stock = StockData.from_dataframe(sample_ohlcv)

        assert stock.count == 120
        assert stock.dates is not None
        assert stock.dates[0] == sample_ohlcv.index[0]
        np.testing.assert_array_equal(stock.close, sample_ohlcv["close"].to_numpy())

    def test_column_names_case_insensitive(self, sample_ohlcv: pd.DataFrame) -> None:
        """Upper-case column names are accepted."""
        stock = StockData.from_dataframe(sample_ohlcv.rename(columns=str.upper))
        assert stock.count == 120

    def test_missing_columns(self, sample_ohlcv: pd.DataFrame) -> None:
        """Missing OHLCV columns raise CalculationError."""
        with pytest.raises(CalculationError, match="volume"):
            StockData.from_dataframe(sample_ohlcv.drop(columns=["volume"]))

    def test_length_mismatch(self) -> None:
        """All series must have the same length."""
        with pytest.raises(CalculationError):
            StockData([1, 2], [1, 2], [1, 2], [1, 2, 3], [1, 2])

    def test_to_frame_round_trip(self, sample_ohlcv: pd.DataFrame) -> None:
        """to_frame restores the OHLCV columns and index."""
        frame = StockData.from_dataframe(sample_ohlcv).to_frame()
        assert list(frame.columns) == ["open", "high", "low", "close", "volume"]
        pd.testing.assert_index_equal(frame.index, sample_ohlcv.index, check_names=False)

    def test_input_values(self, sample_ohlcv: pd.DataFrame) -> None:
        """Configured input name drives input_values."""
        stock = StockData.from_dataframe(sample_ohlcv, input_name=InputName.HIGH)
        np.testing.assert_array_equal(stock.input_values(), sample_ohlcv["high"].to_numpy())
        np.testing.assert_array_equal(
            stock.input_values(InputName.LOW), sample_ohlcv["low"].to_numpy()
        )


class TestApply:
    """Tests for StockData.apply and chaining."""

    def test_apply_stores_outputs(self, sample_ohlcv: pd.DataFrame) -> None:
        """Outputs, signals and the primary series are stored."""
        stock = StockData.from_dataframe(sample_ohlcv)
        result = stock.apply(MovingAverageIndicator(), {"length": 10})

        assert stock.indicator_name == "moving_average"
        assert set(stock.output_values) == {"ma"}
        assert len(stock.signals) == stock.count
        assert all(isinstance(s, Signal) for s in stock.signals)
        np.testing.assert_array_equal(stock.primary_values(), result["ma"].to_numpy())

    def test_chained_calculation(self, sample_ohlcv: pd.DataFrame) -> None:
        """An indicator's primary output can feed another average."""
        stock = StockData.from_dataframe(sample_ohlcv)
        stock.apply(MovingAverageIndicator(), {"length": 5})
        chained = pd.DataFrame({"close": stock.primary_values()}, index=sample_ohlcv.index)

        smoothed = MovingAverageIndicator().calculate(chained, {"length": 5})
        assert len(smoothed) == stock.count

    def test_multi_output_has_no_primary(self, sample_ohlcv: pd.DataFrame) -> None:
        """Bollinger Bands cannot be chained."""
        stock = StockData.from_dataframe(sample_ohlcv)
        stock.apply(BollingerBandsIndicator())

        assert set(stock.output_values) == {"bb_upper", "bb_middle", "bb_lower"}
        with pytest.raises(CalculationError, match="single output"):
            stock.primary_values()

    def test_input_name_feeds_indicator(self, sample_ohlcv: pd.DataFrame) -> None:
        """A container input name is used unless params override it."""
        stock = StockData.from_dataframe(sample_ohlcv, input_name=InputName.HIGH)
        stock.apply(MovingAverageIndicator(), {"length": 1})
        np.testing.assert_array_equal(
            stock.output_values["ma"], np.round(sample_ohlcv["high"].to_numpy(), 4)
        )

        stock.apply(MovingAverageIndicator(), {"length": 1, "input": InputName.LOW})
        np.testing.assert_array_equal(
            stock.output_values["ma"], np.round(sample_ohlcv["low"].to_numpy(), 4)
        )

    def test_indicator_default_input_kept(self, sample_ohlcv: pd.DataFrame) -> None:
        """Without a container input name, VWAP keeps its typical price default."""
        stock = StockData.from_dataframe(sample_ohlcv)
        stock.apply(VWAPIndicator())

        expected = VWAPIndicator().calculate(sample_ohlcv)
        np.testing.assert_array_equal(stock.output_values["vwap"], expected["vwap"].to_numpy())

    def test_clear(self, sample_ohlcv: pd.DataFrame) -> None:
        """clear() drops all outputs but keeps the bars."""
        stock = StockData.from_dataframe(sample_ohlcv)
        stock.apply(MovingAverageIndicator())
        stock.clear()

        assert stock.indicator_name is None
        assert stock.output_values == {}
        assert stock.signals == []
        assert stock.count == 120
