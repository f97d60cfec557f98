"""Configuration management."""

from .config_manager import ConfigManager
from .models import AppConfig, CalculationConfig, IndicatorConfig, LoggingConfig

__all__ = [
    "ConfigManager",
    "AppConfig",
    "CalculationConfig",
    "IndicatorConfig",
    "LoggingConfig",
]
