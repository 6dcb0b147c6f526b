"""Risk level and analysis result domain models.

This file defines the core enums and result records produced by the
insight service. Results are immutable once produced and carry no
storage or transport concerns of their own.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple, Union


class RiskLevel(Enum):
    """Three-tier severity classification for chat messages.

    Ordered: LOW < MEDIUM < HIGH, so ``max()`` picks the most severe level.
    """
    LOW = "LOW"             # No concerning signal, general wellbeing tips
    MEDIUM = "MEDIUM"       # Depression/anxiety signal, professional support suggested
    HIGH = "HIGH"           # Crisis or self-harm signal, emergency resources

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]

    def __lt__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: "RiskLevel") -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}


class EmotionalState(Enum):
    """Coarse emotional reading derived solely from the sentiment score."""
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


Score = Union[int, float]


@dataclass(frozen=True)
class MessageAnalysis:
    """Insight for a single chat message.

    Immutable - cached by exact message text and shared between callers.

    ``sentiment_score`` is reported on the configured scale (0-100 integer
    in percentage mode, raw valence in raw mode). ``normalized_score`` is
    always the 0-100 percentage and is what every decision is based on.
    """
    sentiment_score: Score
    normalized_score: int
    emotional_state: EmotionalState
    risk_level: RiskLevel
    keywords: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    concerning_phrase_detected: bool = False

    def __post_init__(self):
        if not 0 <= self.normalized_score <= 100:
            raise ValueError(
                f"Normalized score must be 0-100, got {self.normalized_score}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "sentiment_score": self.sentiment_score,
            "normalized_score": self.normalized_score,
            "emotional_state": self.emotional_state.value,
            "risk_level": self.risk_level.value,
            "keywords": list(self.keywords),
            "recommendations": list(self.recommendations),
            "concerning_phrase_detected": self.concerning_phrase_detected,
        }

    def to_record(self) -> Dict[str, Any]:
        """Flatten into the row shape used by the insight table.

        Keywords are comma-joined and recommendations newline-joined.
        """
        return {
            "sentimentScore": self.sentiment_score,
            "emotionalState": self.emotional_state.value,
            "riskLevel": self.risk_level.value,
            "keywords": ",".join(self.keywords),
            "recommendations": "\n".join(self.recommendations),
        }


@dataclass(frozen=True)
class ConversationAnalysis:
    """Aggregated insight over a conversation's message history."""
    sentiment_score: Score
    normalized_score: int
    emotional_state: EmotionalState
    risk_level: RiskLevel
    keywords: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    message_count: int = 0
    trajectory: str = "stable"      # "stable", "improving", "escalating"

    def __post_init__(self):
        if not 0 <= self.normalized_score <= 100:
            raise ValueError(
                f"Normalized score must be 0-100, got {self.normalized_score}"
            )

    @property
    def is_escalating(self) -> bool:
        """Check if recent messages read worse than earlier ones."""
        return self.trajectory == "escalating"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "sentiment_score": self.sentiment_score,
            "normalized_score": self.normalized_score,
            "emotional_state": self.emotional_state.value,
            "risk_level": self.risk_level.value,
            "keywords": list(self.keywords),
            "recommendations": list(self.recommendations),
            "message_count": self.message_count,
            "trajectory": self.trajectory,
        }
