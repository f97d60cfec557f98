"""
tacore - Technical Analysis Calculator - Main Entry Point

Usage:
    python main.py --input bars.csv --indicator rsi
    python main.py --input bars.csv --indicator moving_average --param method=hull --param length=9
    python main.py --input bars.csv --env prod      # All enabled indicators
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import yaml

from config.config_manager import DEFAULT_CONFIG_DIR, ConfigManager
from tacore.application import IndicatorCalculator, load_bars
from tacore.domain.exceptions import FatalError
from tacore.utils import get_logger, setup_logging, shutdown_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Technical analysis indicator calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --input bars.csv --indicator rsi
  python main.py --input bars.csv --indicator rsi --indicator atr --tail 10
  python main.py --input bars.csv --indicator moving_average --param method=kaufman_adaptive
  python main.py --input bars.csv --indicator rsi --param rsi.length=21 --env prod
        """
    )

    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="CSV file with date, open, high, low, close, volume columns"
    )

    parser.add_argument(
        "--indicator",
        type=str,
        action="append",
        dest="indicators",
        help="Indicator name (repeatable; default: all enabled indicators)"
    )

    parser.add_argument(
        "--param",
        type=str,
        action="append",
        default=[],
        help="Parameter override KEY=VALUE or INDICATOR.KEY=VALUE (repeatable)"
    )

    parser.add_argument(
        "--env",
        type=str,
        default="dev",
        choices=["dev", "prod"],
        help="Environment to run in (default: dev)"
    )

    parser.add_argument(
        "--config-dir",
        type=str,
        default=str(DEFAULT_CONFIG_DIR),
        help="Directory containing base.yaml and environment overrides"
    )

    parser.add_argument(
        "--tail",
        type=int,
        default=5,
        help="Number of trailing bars to print (default: 5)"
    )

    return parser.parse_args(argv)


def parse_param(raw: str) -> Tuple[Optional[str], str, Any]:
    """
    Split ``[indicator.]key=value``; the value is parsed as YAML scalar.

    Raises:
        ValueError: If there is no ``=``.
    """
    if "=" not in raw:
        raise ValueError(f"Invalid --param '{raw}', expected KEY=VALUE")
    key, value = raw.split("=", 1)
    indicator = None
    if "." in key:
        indicator, key = key.split(".", 1)
    return indicator, key.strip(), yaml.safe_load(value)


def build_overrides(raw_params: List[str], indicators: List[str]) -> Dict[str, Dict[str, Any]]:
    """Per-indicator overrides; unscoped keys apply to every requested indicator."""
    overrides: Dict[str, Dict[str, Any]] = {name: {} for name in indicators}
    for raw in raw_params:
        target, key, value = parse_param(raw)
        for name in ([target] if target else indicators):
            overrides.setdefault(name, {})[key] = value
    return overrides


def run(args: argparse.Namespace) -> int:
    """Load config and bars, calculate, print results."""
    config = ConfigManager(config_dir=args.config_dir, env=args.env).load()
    setup_logging(config.logging)
    logger = get_logger("tacore.application")

    try:
        calculator = IndicatorCalculator(config)
        bars = load_bars(args.input)

        names = args.indicators or calculator.enabled_indicators()
        overrides = build_overrides(args.param, names)
        results = calculator.run(bars, names, overrides)
        states = calculator.latest_states(results)

        with pd.option_context("display.width", 160, "display.max_columns", 20):
            for name, frame in results.items():
                print(f"\n=== {name} ===")
                print(frame.tail(args.tail).to_string())
                if name in states:
                    print(f"state: {states[name]}")

        logger.info("Run complete", extra={"data": calculator.stats()})
        return 0 if len(results) == len(names) else 2
    finally:
        shutdown_logging()


def main() -> None:
    """Main entry point."""
    args = parse_args()

    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        print("Shutdown requested")
        sys.exit(0)
    except (FatalError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
