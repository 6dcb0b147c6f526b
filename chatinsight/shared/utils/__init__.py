"""Shared utilities for the chat insight engine."""
from .fingerprint import fingerprint_text

__all__ = ["fingerprint_text"]
