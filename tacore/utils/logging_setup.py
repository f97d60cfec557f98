"""
Logging setup with categories and JSON formatting.

Provides:
- 5 log categories: system, calc, signal, data, perf
- Automatic module → category routing
- Console output with colors, or JSON for machine consumption
- Per-category log files written through queue listeners
- Configurable timezone for log timestamps

Categories:
- system: Startup, config, CLI, registry
- calc: Moving averages, rolling statistics, math helpers
- signal: Signal classification and indicator output
- data: Stock data containers and input extraction
- perf: Timing diagnostics
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from queue import Queue
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from config.models import LoggingConfig

# =============================================================================
# GLOBAL STATE
# =============================================================================

_log_timezone: Optional[ZoneInfo] = None

_category_loggers: Dict[str, logging.Logger] = {}

_queue_listeners: List[logging.handlers.QueueListener] = []

ROOT_LOGGER = "tacore"

# =============================================================================
# LOG CATEGORIES AND ROUTING
# =============================================================================

CATEGORIES = ["system", "calc", "signal", "data", "perf"]

CATEGORY_SUFFIXES = {
    "system": "sys",
    "calc": "clc",
    "signal": "sig",
    "data": "dat",
    "perf": "prf",
}

# More specific paths first
MODULE_ROUTING: List[tuple[str, str]] = [
    ("tacore.domain.averages", "calc"),
    ("tacore.domain.rolling", "calc"),
    ("tacore.domain.math_helpers", "calc"),
    ("tacore.domain.series", "calc"),
    ("tacore.domain.signals", "signal"),
    ("tacore.domain.indicators.registry", "system"),
    ("tacore.domain.indicators", "signal"),
    ("tacore.domain.stock_data", "data"),
    ("tacore.application", "system"),
    ("tacore.utils.perf_logger", "perf"),
    ("config", "system"),
    ("tacore", "system"),
]


def get_category_for_module(module_name: str) -> str:
    """
    Determine the log category for a given module name.

    Args:
        module_name: Full module path (e.g., "tacore.domain.averages.basic").

    Returns:
        Category name.
    """
    for prefix, category in MODULE_ROUTING:
        if module_name.startswith(prefix):
            return category
    return "system"


# =============================================================================
# TIMEZONE SUPPORT
# =============================================================================

def set_log_timezone(tz: Optional[str] = None) -> None:
    """
    Set the timezone for log timestamps.

    Args:
        tz: Timezone name (e.g., "UTC", "America/New_York"). None or "local"
            uses local system time.
    """
    global _log_timezone
    if tz is None or tz.lower() == "local":
        _log_timezone = None
    else:
        _log_timezone = ZoneInfo(tz)


def get_current_timestamp() -> str:
    """ISO timestamp in the configured log timezone."""
    if _log_timezone is not None:
        return datetime.now(_log_timezone).isoformat()
    return datetime.now().isoformat()


# =============================================================================
# FORMATTERS
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Formats log records as single-line JSON with:
    - Timestamp (with timezone)
    - Level
    - Category (derived from logger name)
    - Message
    - Extra data passed as ``extra={"data": {...}}``
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON string."""
        log_entry = {
            "ts": get_current_timestamp(),
            "level": record.levelname,
            "cat": self._get_category(record.name),
            "msg": record.getMessage(),
        }

        if hasattr(record, "data") and record.data:
            log_entry["data"] = record.data

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)

    def _get_category(self, logger_name: str) -> str:
        """Extract category from logger name."""
        parts = logger_name.split(".")
        if len(parts) >= 2 and parts[0] == ROOT_LOGGER and parts[1] in CATEGORIES:
            return parts[1]
        return "system"


class ConsoleFormatter(logging.Formatter):
    """
    Console formatter with color support.

    Format: [LEVEL] [category] message
    """

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for console output."""
        level = record.levelname
        category = record.name.split(".")[-1]
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"

        if self.use_colors:
            color = self.COLORS.get(level, "")
            return f"{color}[{level:7}]{self.RESET} [{category}] {message}"
        return f"[{level:7}] [{category}] {message}"


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for the given module, routed to its category.

    Args:
        module_name: Module name (typically __name__).

    Returns:
        Category logger (e.g. ``tacore.calc``).

    Example:
        from tacore.utils.logging_setup import get_logger
        logger = get_logger(__name__)
        logger.debug("Computing ema over 250 bars")
    """
    category = get_category_for_module(module_name)
    return logging.getLogger(f"{ROOT_LOGGER}.{category}")


# =============================================================================
# SETUP
# =============================================================================

def _reset_handlers() -> None:
    """Stop listeners and detach handlers from all tacore loggers."""
    for listener in _queue_listeners:
        listener.stop()
    _queue_listeners.clear()

    names = [ROOT_LOGGER] + [f"{ROOT_LOGGER}.{c}" for c in CATEGORIES]
    for name in names:
        logger = logging.getLogger(name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)
        if name != ROOT_LOGGER:
            logger.setLevel(logging.NOTSET)
            logger.propagate = True


def setup_logging(config: LoggingConfig) -> logging.Logger:
    """
    Configure the ``tacore`` root logger from a LoggingConfig.

    Category loggers propagate to the root, so one console handler (and an
    optional file handler) receives every category.

    Args:
        config: Logging configuration.

    Returns:
        The configured root logger.
    """
    _reset_handlers()
    set_log_timezone(config.timezone)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    logger.propagate = False

    if config.json:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ConsoleFormatter(use_colors=sys.stderr.isatty())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        if config.rotation == "size":
            file_handler: logging.Handler = logging.handlers.RotatingFileHandler(
                filename=config.file,
                maxBytes=config.max_bytes,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        else:
            file_handler = logging.handlers.TimedRotatingFileHandler(
                filename=config.file,
                when=config.when,
                interval=config.interval,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger


def setup_category_logging(
    log_dir: str = "./logs",
    level: str = "INFO",
    console: bool = False,
) -> Dict[str, logging.Logger]:
    """
    Set up a separate log file for each category.

    Creates ``{log_dir}/{date}/tacore_{suffix}_{date}.log`` per category.
    File writes go through a QueueHandler so calculation code never blocks
    on disk I/O.

    Args:
        log_dir: Base directory for log files.
        level: Logging level name.
        console: Also echo WARNING and above to stderr.

    Returns:
        Dict mapping category name to logger.
    """
    _reset_handlers()

    date_str = datetime.now().strftime("%Y-%m-%d")
    log_path = Path(log_dir) / date_str
    log_path.mkdir(parents=True, exist_ok=True)

    effective_level = getattr(logging, level.upper(), logging.INFO)

    for category in CATEGORIES:
        suffix = CATEGORY_SUFFIXES[category]
        logger = logging.getLogger(f"{ROOT_LOGGER}.{category}")
        logger.setLevel(effective_level)
        logger.propagate = False

        file_handler = logging.FileHandler(
            filename=str(log_path / f"tacore_{suffix}_{date_str}.log"),
            mode="a",
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONFormatter())
        file_handler.setLevel(effective_level)

        log_queue: Queue = Queue(-1)
        logger.addHandler(logging.handlers.QueueHandler(log_queue))

        listener = logging.handlers.QueueListener(
            log_queue, file_handler, respect_handler_level=True
        )
        listener.start()
        _queue_listeners.append(listener)

        if console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(ConsoleFormatter(use_colors=True))
            console_handler.setLevel(logging.WARNING)
            logger.addHandler(console_handler)

        _category_loggers[category] = logger

    return _category_loggers


def shutdown_logging() -> None:
    """Stop all queue listeners (call during application shutdown)."""
    for listener in _queue_listeners:
        listener.stop()
    _queue_listeners.clear()
