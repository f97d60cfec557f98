"""Utility modules."""

from .logging_setup import (
    get_logger,
    set_log_timezone,
    setup_category_logging,
    setup_logging,
    shutdown_logging,
)
from .perf_logger import log_timing, timed

__all__ = [
    "get_logger",
    "set_log_timezone",
    "setup_logging",
    "setup_category_logging",
    "shutdown_logging",
    "log_timing",
    "timed",
]
