"""Insight Service configuration: lexicons, phrases and scoring thresholds.

Categories and phrases are static configuration, not runtime state.
Matching is lowercase substring search, so inflections are caught for
free ("stressed" matches "stress") at the cost of false positives inside
unrelated words. That imprecision is known and kept.
"""
import math
from dataclasses import dataclass
from typing import Tuple


EFFECT_PENALTY = "penalty"      # Lowers the score per matched term
EFFECT_BONUS = "bonus"          # Raises the score per matched term, capped at 100
EFFECT_ESCALATE = "escalate"    # Forces HIGH risk and caps the score


@dataclass(frozen=True)
class LexiconCategory:
    """A named keyword list sharing a theme and a scoring effect."""
    name: str
    terms: Tuple[str, ...]
    effect: str

    def __post_init__(self):
        if self.effect not in (EFFECT_PENALTY, EFFECT_BONUS, EFFECT_ESCALATE):
            raise ValueError(f"Unknown lexicon effect: {self.effect}")
        if not self.terms:
            raise ValueError(f"Lexicon category {self.name} has no terms")


DEPRESSION = "depression"
ANXIETY = "anxiety"
STRESS = "stress"
CRISIS = "crisis"
SELF_HARM = "self_harm"
POSITIVE = "positive"

# Declaration order is the order matched terms are reported in.
LEXICON: Tuple[LexiconCategory, ...] = (
    LexiconCategory(
        name=DEPRESSION,
        terms=(
            "sad",
            "depressed",
            "hopeless",
            "worthless",
            "empty inside",
            "lonely",
            "give up",
            "miserable",
        ),
        effect=EFFECT_PENALTY,
    ),
    LexiconCategory(
        name=ANXIETY,
        terms=(
            "anxious",
            "worried",
            "panic",
            "fear",
            "scared",
            "nervous",
            "overwhelmed",
        ),
        effect=EFFECT_PENALTY,
    ),
    LexiconCategory(
        name=STRESS,
        terms=(
            "stress",
            "overwhelmed",
            "pressure",
            "can't handle",
            "too much",
            "burned out",
        ),
        effect=EFFECT_PENALTY,
    ),
    LexiconCategory(
        name=CRISIS,
        terms=(
            "help me",
            "need help",
            "emergency",
            "crisis",
            "urgent",
            "desperate",
        ),
        effect=EFFECT_ESCALATE,
    ),
    LexiconCategory(
        name=SELF_HARM,
        terms=(
            "suicide",
            "suicidal",
            "kill myself",
            "end it all",
            "end my life",
            "want to die",
            "hurt myself",
            "harm myself",
            "cut myself",
            "self harm",
            "self-harm",
        ),
        effect=EFFECT_ESCALATE,
    ),
    LexiconCategory(
        name=POSITIVE,
        terms=(
            "happy",
            "grateful",
            "thankful",
            "excited",
            "hopeful",
            "relaxed",
            "calm",
            "proud",
        ),
        effect=EFFECT_BONUS,
    ),
)

# Explicit self-harm/suicide phrasings that override normal scoring.
CONCERNING_PHRASES: Tuple[str, ...] = (
    "kill myself",
    "end my life",
    "want to die",
    "suicide",
    "end it all",
    "take my own life",
    "better off dead",
    "no reason to live",
)


@dataclass(frozen=True)
class ScoringConfig:
    """Score scale and decision thresholds.

    All thresholds are on the 0-100 percentage scale. In raw mode the
    reported score is the final percentage mapped back onto the raw range,
    so both modes share the same decisions and emotional-state cutoffs
    (35/65 here, i.e. -1.5/+1.5 on the default raw range).
    """
    percentage_mode: bool = True
    raw_min: float = -5.0
    raw_max: float = 5.0

    depression_penalty: int = 5
    anxiety_penalty: int = 3
    stress_penalty: int = 2
    positive_bonus: int = 3
    escalation_score_cap: int = 20

    deescalate_above: int = 60      # MEDIUM above this reads as LOW
    escalate_below: int = 20        # LOW below this reads as MEDIUM
    negative_below: int = 35
    positive_above: int = 65
    alert_below: int = 20           # MEDIUM below this triggers an alert

    def __post_init__(self):
        if self.raw_min >= self.raw_max:
            raise ValueError(
                f"raw_min must be below raw_max, got {self.raw_min} >= {self.raw_max}"
            )
        if not 0 <= self.negative_below <= self.positive_above <= 100:
            raise ValueError(
                "Emotional cutoffs must satisfy 0 <= negative_below <= positive_above <= 100"
            )
        for name in ("deescalate_above", "escalate_below", "alert_below", "escalation_score_cap"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ValueError(f"{name} must be 0-100, got {value}")

    def to_raw(self, percentage: int) -> float:
        """Map a 0-100 percentage back onto the raw valence range."""
        span = self.raw_max - self.raw_min
        return round(self.raw_min + percentage / 100 * span, 2)

    def to_percentage(self, raw: float) -> int:
        """Map a raw valence onto 0-100, clamped and rounded half up."""
        span = self.raw_max - self.raw_min
        percentage = (raw - self.raw_min) / span * 100
        return int(math.floor(min(100.0, max(0.0, percentage)) + 0.5))

    def report(self, percentage: int):
        """Express a percentage on the configured reporting scale."""
        if self.percentage_mode:
            return percentage
        return self.to_raw(percentage)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for the analyzer and the conversation aggregator."""
    cache_capacity: int = 100
    recent_window: int = 5
    min_conversation_messages: int = 3
    trajectory_delta: int = 15

    # Version tracking for stored insights
    lexicon_version: str = "2026.10.18"

    def __post_init__(self):
        if self.recent_window < 1:
            raise ValueError(f"recent_window must be >= 1, got {self.recent_window}")
        if self.min_conversation_messages < 1:
            raise ValueError(
                f"min_conversation_messages must be >= 1, got {self.min_conversation_messages}"
            )
