"""
Trend indicators package.

Trend indicators follow the direction of price through smoothed averages.

Indicators:
- Moving Average (any engine method)
- MACD: Moving Average Convergence Divergence
- ADX: Average Directional Index
"""

# Indicators will be auto-discovered by IndicatorRegistry
TREND_INDICATORS: list[str] = ["moving_average", "macd", "adx"]
