"""Pytest configuration and fixtures."""

import numpy as np
import pandas as pd
import pytest

from tacore.domain.indicators import IndicatorRegistry


@pytest.fixture
def sample_ohlcv() -> pd.DataFrame:
    """Random-walk OHLCV bars, 120 hourly bars."""
    np.random.seed(42)
    n = 120
    dates = pd.date_range(start="2024-01-01", periods=n, freq="1h")
    close = 100 + np.cumsum(np.random.randn(n) * 0.5)
    return pd.DataFrame(
        {
            "open": close - np.random.rand(n) * 0.5,
            "high": close + np.random.rand(n) * 0.5 + 0.1,
            "low": close - np.random.rand(n) * 0.5 - 0.1,
            "close": close,
            "volume": np.random.randint(1000, 10000, n).astype(float),
        },
        index=dates,
    )


@pytest.fixture
def constant_ohlcv() -> pd.DataFrame:
    """Flat bars: every price 50, volume 1000."""
    n = 40
    dates = pd.date_range(start="2024-01-01", periods=n, freq="1D")
    return pd.DataFrame(
        {
            "open": np.full(n, 50.0),
            "high": np.full(n, 50.0),
            "low": np.full(n, 50.0),
            "close": np.full(n, 50.0),
            "volume": np.full(n, 1000.0),
        },
        index=dates,
    )


@pytest.fixture
def random_closes() -> np.ndarray:
    """Random-walk close prices, 200 bars."""
    np.random.seed(42)
    return 100 + np.cumsum(np.random.randn(200))


@pytest.fixture
def registry() -> IndicatorRegistry:
    """Fresh registry with all indicators discovered."""
    reg = IndicatorRegistry()
    reg.discover()
    return reg
