"""
Configuration manager with environment-based loading.

Supports:
- Base configuration (base.yaml)
- Environment-specific overrides (dev.yaml, prod.yaml)
"""

from __future__ import annotations
from pathlib import Path
from typing import Dict, Any
import yaml
import logging

from .models import (
    AppConfig,
    CalculationConfig,
    IndicatorConfig,
    LoggingConfig,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).parent


class ConfigManager:
    """
    Configuration manager with environment support.

    Loads configuration in this order:
    1. base.yaml (default config)
    2. {env}.yaml (environment-specific, e.g., dev.yaml)

    Later configs override earlier ones.
    """

    def __init__(self, config_dir: str | Path = DEFAULT_CONFIG_DIR, env: str = "dev"):
        """
        Initialize config manager.

        Args:
            config_dir: Directory containing config files.
            env: Environment name (dev, prod, etc).
        """
        self.config_dir = Path(config_dir)
        self.env = env
        self.config: Dict[str, Any] = {}

    def load(self) -> AppConfig:
        """
        Load configuration from YAML files.

        Returns:
            AppConfig object.

        Raises:
            FileNotFoundError: If base config not found.
            ValueError: If config is invalid.
        """
        base_path = self.config_dir / "base.yaml"
        if not base_path.exists():
            raise FileNotFoundError(f"Base config not found: {base_path}")

        self.config = self._load_yaml(base_path)
        logger.info(f"Loaded base config from {base_path}")

        env_path = self.config_dir / f"{self.env}.yaml"
        if env_path.exists():
            env_config = self._load_yaml(env_path)
            self.config = self._merge_dicts(self.config, env_config)
            logger.info(f"Loaded {self.env} config from {env_path}")

        return self._parse_config()

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML file."""
        with open(path, "r") as f:
            return yaml.safe_load(f) or {}

    def _merge_dicts(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dicts (override wins)."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_dicts(result[key], value)
            else:
                result[key] = value
        return result

    def _parse_config(self) -> AppConfig:
        """Parse raw dict into AppConfig."""
        try:
            calc_raw = self.config.get("calculation", {})
            calculation = CalculationConfig(
                precision=int(calc_raw.get("precision", 4)),
                rsi_overbought=float(calc_raw.get("rsi_overbought", 70)),
                rsi_oversold=float(calc_raw.get("rsi_oversold", 30)),
            )

            logging_raw = self.config.get("logging", {})
            logging_config = LoggingConfig(
                level=logging_raw.get("level", "INFO"),
                json=logging_raw.get("json", False),
                file=logging_raw.get("file", ""),
                rotation=logging_raw.get("rotation", "time"),
                max_bytes=logging_raw.get("max_bytes", 10 * 1024 * 1024),
                backup_count=logging_raw.get("backup_count", 7),
                when=logging_raw.get("when", "midnight"),
                interval=logging_raw.get("interval", 1),
                timezone=logging_raw.get("timezone", "local"),
            )

            indicators: Dict[str, IndicatorConfig] = {}
            for name, ind_raw in (self.config.get("indicators") or {}).items():
                ind_raw = ind_raw or {}
                indicators[name] = IndicatorConfig(
                    enabled=ind_raw.get("enabled", True),
                    params=dict(ind_raw.get("params") or {}),
                )

            return AppConfig(
                calculation=calculation,
                logging=logging_config,
                indicators=indicators,
                raw=self.config,
            )

        except Exception as e:
            raise ValueError(f"Failed to parse config: {e}")
