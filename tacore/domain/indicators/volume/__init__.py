"""
Volume indicators package.

Indicators:
- VWAP: Volume Weighted Average Price
"""

# Indicators will be auto-discovered by IndicatorRegistry
VOLUME_INDICATORS: list[str] = ["vwap"]
