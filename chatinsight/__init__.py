"""Chat insight engine: mental-health risk signals for chat messages."""

__version__ = "0.1.0"
