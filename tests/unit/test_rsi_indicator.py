"""
Unit tests for RSI Indicator.

Tests:
- Normal calculation
- Edge cases: empty data, short data, integer dtype, flat prices
- State extraction
- Zone classification
"""

import numpy as np
import pandas as pd
import pytest

from tacore.domain.indicators.momentum.rsi import RSIIndicator
from tacore.domain.models import IndicatorCategory, Signal


class TestRSIIndicator:
    """Tests for RSI indicator."""

    @pytest.fixture
    def rsi(self) -> RSIIndicator:
        """Create RSI indicator instance."""
        return RSIIndicator()

    @pytest.fixture
    def sample_data(self) -> pd.DataFrame:
        """Create sample OHLCV data."""
        np.random.seed(42)
        dates = pd.date_range(start="2024-01-01", periods=50, freq="1h")
        close = 100 + np.cumsum(np.random.randn(50) * 0.5)
        return pd.DataFrame(
            {
                "open": close - np.random.rand(50) * 0.5,
                "high": close + np.random.rand(50) * 0.5,
                "low": close - np.random.rand(50) * 0.5,
                "close": close,
                "volume": np.random.randint(1000, 10000, 50),
            },
            index=dates,
        )

    def test_indicator_properties(self, rsi: RSIIndicator) -> None:
        """Test indicator metadata properties."""
        assert rsi.name == "rsi"
        assert rsi.category == IndicatorCategory.MOMENTUM
        assert rsi.required_fields == ["close"]
        assert rsi.warmup_periods == 15
        assert rsi.primary_output == "rsi"

    def test_default_params(self, rsi: RSIIndicator) -> None:
        """Test default parameters."""
        params = rsi.default_params
        assert params["length"] == 14
        assert params["signal_length"] == 3
        assert params["method"] == "wilders_smoothing"
        assert params["overbought"] == 70
        assert params["oversold"] == 30

    def test_calculate_normal(self, rsi: RSIIndicator, sample_data: pd.DataFrame) -> None:
        """Every bar gets a bounded, rounded RSI value."""
        result = rsi.calculate(sample_data, {})

        assert list(result.columns) == ["rsi", "rsi_signal", "histogram", "signal"]
        assert len(result) == len(sample_data)
        assert not result["rsi"].isna().any()
        assert (result["rsi"] >= 0).all()
        assert (result["rsi"] <= 100).all()
        np.testing.assert_array_equal(result["rsi"], result["rsi"].round(4))

    def test_histogram_is_rsi_minus_signal_line(
        self, rsi: RSIIndicator, sample_data: pd.DataFrame
    ) -> None:
        """Histogram is RSI minus its signal line."""
        result = rsi.calculate(sample_data, {})
        expected = (result["rsi"] - result["rsi_signal"]).round(4)
        np.testing.assert_allclose(result["histogram"], expected, atol=1e-9)

    def test_calculate_empty_data(self, rsi: RSIIndicator) -> None:
        """Test RSI with empty DataFrame."""
        empty_data = pd.DataFrame(columns=["open", "high", "low", "close", "volume"])
        result = rsi.calculate(empty_data, {})

        assert "rsi" in result.columns
        assert len(result) == 0

    def test_calculate_short_data(self, rsi: RSIIndicator) -> None:
        """Data shorter than the length still yields a value per bar."""
        short_data = pd.DataFrame(
            {"close": [100.0, 101.0, 99.0, 100.5, 102.0]},
            index=pd.date_range("2024-01-01", periods=5, freq="1h"),
        )
        result = rsi.calculate(short_data, {"length": 14})

        assert len(result) == 5
        assert result["rsi"].notna().all()

    def test_first_bar_has_no_change(self, rsi: RSIIndicator) -> None:
        """The first bar has zero gain and loss, so RSI starts at 100."""
        data = pd.DataFrame({"close": [100.0, 99.0, 98.0]})
        result = rsi.calculate(data, {})
        assert result["rsi"].iloc[0] == 100.0

    def test_calculate_integer_dtype(self, rsi: RSIIndicator) -> None:
        """Test RSI with integer close prices (should not crash)."""
        int_data = pd.DataFrame(
            {"close": np.arange(100, 150, dtype=np.int64)},
            index=pd.date_range("2024-01-01", periods=50, freq="1h"),
        )
        result = rsi.calculate(int_data, {})

        assert result["rsi"].dtype == np.float64

    def test_flat_prices(self, rsi: RSIIndicator, constant_ohlcv: pd.DataFrame) -> None:
        """No losses means RSI of 100; the signal line converges up to it."""
        result = rsi.calculate(constant_ohlcv, {})

        assert (result["rsi"] == 100.0).all()
        assert result["rsi_signal"].is_monotonic_increasing
        assert result["rsi_signal"].iloc[-1] == pytest.approx(100.0, abs=1e-3)

    def test_all_gains_rsi(self, rsi: RSIIndicator) -> None:
        """Test RSI when price only goes up."""
        rising_data = pd.DataFrame(
            {"close": np.arange(100, 150, dtype=float)},
            index=pd.date_range("2024-01-01", periods=50, freq="1h"),
        )
        result = rsi.calculate(rising_data, {})
        assert result["rsi"].iloc[-1] == 100.0

    def test_all_losses_rsi(self, rsi: RSIIndicator) -> None:
        """Test RSI when price only goes down."""
        falling_data = pd.DataFrame(
            {"close": np.arange(150, 100, -1, dtype=float)},
            index=pd.date_range("2024-01-01", periods=50, freq="1h"),
        )
        result = rsi.calculate(falling_data, {})
        assert result["rsi"].iloc[-1] == 0.0

    def test_custom_method(self, rsi: RSIIndicator, sample_data: pd.DataFrame) -> None:
        """A different smoothing method changes the result."""
        wilder = rsi.calculate(sample_data, {})
        simple = rsi.calculate(sample_data, {"method": "simple"})
        assert not np.array_equal(wilder["rsi"], simple["rsi"])

    def test_get_state_overbought(self, rsi: RSIIndicator) -> None:
        """Test state extraction for overbought condition."""
        current = pd.Series({"rsi": 75.0, "signal": Signal.SELL})
        state = rsi.get_state(current, pd.Series({"rsi": 70.0}))

        assert state["value"] == 75.0
        assert state["zone"] == "overbought"
        assert state["signal"] == "sell"

    def test_get_state_oversold(self, rsi: RSIIndicator) -> None:
        """Test state extraction for oversold condition."""
        state = rsi.get_state(pd.Series({"rsi": 25.0}), pd.Series({"rsi": 30.0}))

        assert state["value"] == 25.0
        assert state["zone"] == "oversold"
        assert state["signal"] == "none"

    def test_get_state_nan_handling(self, rsi: RSIIndicator) -> None:
        """Test state extraction handles NaN values."""
        state = rsi.get_state(pd.Series({"rsi": np.nan}), None)

        assert state["zone"] == "neutral"
        assert state["value"] == 50

    def test_get_state_boundary_values(self, rsi: RSIIndicator) -> None:
        """Test state at exact boundary values."""
        assert rsi.get_state(pd.Series({"rsi": 70.0}), None)["zone"] == "overbought"
        assert rsi.get_state(pd.Series({"rsi": 30.0}), None)["zone"] == "oversold"
        assert rsi.get_state(pd.Series({"rsi": 69.99}), None)["zone"] == "neutral"
        assert rsi.get_state(pd.Series({"rsi": 30.01}), None)["zone"] == "neutral"

    def test_get_state_custom_thresholds(self, rsi: RSIIndicator) -> None:
        """Test state extraction with custom overbought/oversold thresholds."""
        current = pd.Series({"rsi": 75.0})
        assert rsi.get_state(current, None)["zone"] == "overbought"

        state_custom = rsi.get_state(current, None, params={"overbought": 80, "oversold": 20})
        assert state_custom["zone"] == "neutral"
        assert state_custom["value"] == 75.0

        current_25 = pd.Series({"rsi": 25.0})
        assert rsi.get_state(current_25, None)["zone"] == "oversold"
        assert rsi.get_state(current_25, None, params={"oversold": 20})["zone"] == "neutral"
