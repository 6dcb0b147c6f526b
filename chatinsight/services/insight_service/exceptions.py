"""Error types raised by the insight service.

- InvalidMessageError     : caller passed something that is not message text
- ClassificationError     : the valence scorer failed; no result is fabricated
- CacheConfigurationError : result cache built with an unusable capacity
"""


class InsightError(Exception):
    """Base class for insight service failures."""


class InvalidMessageError(InsightError, TypeError):
    """Message text (or a conversation history entry) failed validation."""


class ClassificationError(InsightError, RuntimeError):
    """Valence scoring failed, so the message could not be classified."""


class CacheConfigurationError(InsightError, ValueError):
    """Result cache capacity is not a positive integer."""
