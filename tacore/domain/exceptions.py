"""
Domain exceptions for tacore.

Distinguishes malformed input data (recoverable by the caller, e.g. by
fixing the series it passes in) from configuration errors (programming
bugs such as an unknown averaging method) that must fail fast.

Per-bar numeric edge cases (short history, zero denominators) are never
raised; they resolve to 0 inside the calculation.
"""


class TacoreError(Exception):
    """Base class for all tacore domain exceptions."""
    pass


class RecoverableError(TacoreError):
    """
    Errors caused by the data handed to a calculation.

    Examples:
    - OHLCV series of different lengths
    - Requesting a single output from a multi-output indicator
    """
    pass


class FatalError(TacoreError):
    """
    Errors in how a calculation was configured.

    Examples:
    - Unknown averaging method
    - Non-integer lookback length
    - Volume-weighted method without a volume series
    """
    pass


class CalculationError(RecoverableError):
    """Input series cannot be processed as given."""
    pass


class ConfigurationError(FatalError):
    """Invalid calculation configuration."""
    pass
