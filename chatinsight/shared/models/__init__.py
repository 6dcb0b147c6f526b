"""Shared domain models for the chat insight engine."""
from .risk import (
    RiskLevel,
    EmotionalState,
    MessageAnalysis,
    ConversationAnalysis,
)

__all__ = [
    "RiskLevel",
    "EmotionalState",
    "MessageAnalysis",
    "ConversationAnalysis",
]
