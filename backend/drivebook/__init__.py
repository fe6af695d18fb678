"""Driver slot-availability engine for the driving school booking backend."""

__version__ = "0.1.0"
