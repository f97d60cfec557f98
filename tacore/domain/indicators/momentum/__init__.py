"""
Momentum indicators package.

Indicators:
- RSI: Relative Strength Index
"""

# Indicators will be auto-discovered by IndicatorRegistry
MOMENTUM_INDICATORS: list[str] = ["rsi"]
