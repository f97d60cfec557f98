"""
Performance logging utilities.

Timing context manager and decorator that log to the ``tacore.perf``
category.

Usage:
    with log_timing("indicator_batch") as ctx:
        ctx["indicators"] = len(names)
        results = calculator.run(data)

    @timed("load_csv")
    def load_bars(path):
        ...

Use for batch-level operations only; per-bar loops should never be timed.
"""

from __future__ import annotations

import functools
import logging
import time
from contextlib import contextmanager
from typing import Any, Callable, Generator, Optional

_perf_logger: Optional[logging.Logger] = None


def get_perf_logger() -> logging.Logger:
    """Get or create the performance logger."""
    global _perf_logger
    if _perf_logger is None:
        _perf_logger = logging.getLogger("tacore.perf")
    return _perf_logger


def set_perf_logger(logger: logging.Logger) -> None:
    """Set the performance logger (for testing or custom configuration)."""
    global _perf_logger
    _perf_logger = logger


@contextmanager
def log_timing(
    operation: str,
    warn_threshold_ms: float = 500.0,
    error_threshold_ms: float = 2000.0,
    extra: Optional[dict] = None,
) -> Generator[dict, None, None]:
    """
    Context manager to log operation timing.

    Escalates the log level when the duration crosses the thresholds.

    Args:
        operation: Name of the operation being timed.
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.
        extra: Additional data to include in the log.

    Yields:
        Dict that can be updated with additional context during execution.
    """
    logger = get_perf_logger()
    context = extra.copy() if extra else {}
    start_time = time.perf_counter()

    try:
        yield context
    finally:
        duration_ms = (time.perf_counter() - start_time) * 1000
        log_data = {
            "operation": operation,
            "duration_ms": round(duration_ms, 2),
            **context,
        }

        if duration_ms >= error_threshold_ms:
            logger.error(f"SLOW {operation}: {duration_ms:.1f}ms", extra={"data": log_data})
        elif duration_ms >= warn_threshold_ms:
            logger.warning(f"{operation}: {duration_ms:.1f}ms (slow)", extra={"data": log_data})
        else:
            logger.debug(f"{operation}: {duration_ms:.1f}ms", extra={"data": log_data})


def timed(
    operation: Optional[str] = None,
    warn_threshold_ms: float = 500.0,
    error_threshold_ms: float = 2000.0,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Decorator form of log_timing.

    Args:
        operation: Operation name (defaults to the function's qualified name).
        warn_threshold_ms: Duration above which to log as WARNING.
        error_threshold_ms: Duration above which to log as ERROR.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        name = operation or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with log_timing(name, warn_threshold_ms, error_threshold_ms):
                return func(*args, **kwargs)

        return wrapper

    return decorator
