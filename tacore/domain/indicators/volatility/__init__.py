"""
Volatility indicators package.

Volatility indicators measure the magnitude of price fluctuations
and identify breakout opportunities.

Indicators:
- ATR: Average True Range
- Bollinger Bands
- Standard Deviation Volatility
- Donchian Channels
"""

# Indicators will be auto-discovered by IndicatorRegistry
VOLATILITY_INDICATORS: list[str] = ["atr", "bollinger", "stddev", "donchian"]
