"""Configuration data models."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass
class CalculationConfig:
    """Calculation defaults shared by indicators."""
    precision: int = 4  # Decimal places applied when appending to a series
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0


@dataclass
class IndicatorConfig:
    """Per-indicator overrides."""
    enabled: bool = True
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    json: bool = False
    file: str = ""  # Empty disables file logging
    rotation: str = "time"  # "size" or "time"
    max_bytes: int = 10 * 1024 * 1024  # For size-based rotation
    backup_count: int = 7
    when: str = "midnight"  # For time-based rotation: "midnight", "H", "D", "W0"
    interval: int = 1
    timezone: str = "local"  # "UTC", "America/New_York", or "local"


@dataclass
class AppConfig:
    """Complete application configuration."""
    calculation: CalculationConfig
    logging: LoggingConfig
    indicators: Dict[str, IndicatorConfig]
    raw: Dict[str, Any]  # Raw merged config dict

    def indicator_params(self, name: str) -> Dict[str, Any]:
        """Configured parameter overrides for an indicator (empty if none)."""
        indicator = self.indicators.get(name)
        return dict(indicator.params) if indicator else {}
