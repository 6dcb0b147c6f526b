"""Message fingerprinting for logs.

Raw chat text never goes into application logs. Log lines carry a short,
non-reversible fingerprint instead so repeated messages can still be
correlated across log entries.
"""
import hashlib

FINGERPRINT_LENGTH = 16


def fingerprint_text(text: str, length: int = FINGERPRINT_LENGTH) -> str:
    """Return a truncated SHA-256 hex digest of ``text``.

    Args:
        text: Raw message text
        length: Number of hex characters to keep (1-64)

    Returns:
        Hex fingerprint safe for logging

    Example:
        >>> len(fingerprint_text("hello"))
        16
    """
    if not 1 <= length <= 64:
        raise ValueError(f"Fingerprint length must be 1-64, got {length}")
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:length]
