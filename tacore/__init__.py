"""tacore - technical analysis core: rolling windows, moving averages, signals."""

__version__ = "0.1.0"
