"""Score normalization and risk classification.

Order matters in both procedures:
- Normalizer: override -> percentage -> category penalties/bonus ->
  crisis cap -> clamp. Crisis and self-harm dominate, penalties stack.
- Classifier: override -> category rules -> score corrections.
Each call is independent and stateless.
"""
from typing import Optional, Tuple

from chatinsight.shared.models import EmotionalState, RiskLevel
from .config import (
    ANXIETY,
    CRISIS,
    DEPRESSION,
    POSITIVE,
    SELF_HARM,
    STRESS,
    ScoringConfig,
)
from .lexicon import CategoryMatches

ESCALATING_CATEGORIES: Tuple[str, ...] = (CRISIS, SELF_HARM)
ELEVATING_CATEGORIES: Tuple[str, ...] = (DEPRESSION, ANXIETY)


class ScoreNormalizer:
    """Turns raw valence plus category matches into a 0-100 score."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def _penalties(self) -> Tuple[Tuple[str, int], ...]:
        # Fixed application order: depression, anxiety, stress
        return (
            (DEPRESSION, self.config.depression_penalty),
            (ANXIETY, self.config.anxiety_penalty),
            (STRESS, self.config.stress_penalty),
        )

    def normalize(
        self,
        raw_valence: float,
        category_matches: CategoryMatches,
        concerning_override: bool = False,
    ) -> int:
        """Normalize a raw valence score onto 0-100.

        Args:
            raw_valence: Score from the valence scorer (native range ~[-5, 5])
            category_matches: Output of KeywordClassifier.classify
            concerning_override: True if a concerning phrase was detected

        Returns:
            Integer percentage, always within [0, 100]
        """
        if concerning_override:
            raw_valence = self.config.raw_min

        score = self.config.to_percentage(raw_valence)

        for category, penalty in self._penalties():
            count = len(category_matches.get(category, ()))
            score -= penalty * count

        positive_count = len(category_matches.get(POSITIVE, ()))
        if positive_count:
            score = min(100, score + self.config.positive_bonus * positive_count)

        escalated = any(c in category_matches for c in ESCALATING_CATEGORIES)
        if escalated or concerning_override:
            score = min(score, self.config.escalation_score_cap)

        return max(0, min(100, score))


class RiskClassifier:
    """Deterministic LOW/MEDIUM/HIGH decision table."""

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def classify(
        self,
        category_matches: CategoryMatches,
        score: int,
        concerning_override: bool = False,
    ) -> RiskLevel:
        """Classify risk from category matches and the normalized score.

        Args:
            category_matches: Output of KeywordClassifier.classify
            score: Normalized 0-100 score
            concerning_override: True if a concerning phrase was detected

        Returns:
            RiskLevel for the message
        """
        if concerning_override:
            return RiskLevel.HIGH

        if any(c in category_matches for c in ESCALATING_CATEGORIES):
            level = RiskLevel.HIGH
        elif any(c in category_matches for c in ELEVATING_CATEGORIES):
            level = RiskLevel.MEDIUM
        else:
            level = RiskLevel.LOW

        return self.apply_corrections(level, score)

    def apply_corrections(self, level: RiskLevel, score: int) -> RiskLevel:
        """Apply the score-based de-escalation and escalation corrections.

        Strong positive sentiment downgrades MEDIUM to LOW; very negative
        sentiment alone upgrades LOW to MEDIUM. HIGH is never touched.
        """
        if level == RiskLevel.MEDIUM and score > self.config.deescalate_above:
            return RiskLevel.LOW
        if level == RiskLevel.LOW and score < self.config.escalate_below:
            return RiskLevel.MEDIUM
        return level


def emotional_state_for(score: int, config: Optional[ScoringConfig] = None) -> EmotionalState:
    """Derive the emotional state from a 0-100 score.

    Cutoffs are symmetric around the midpoint (35/65 by default).
    """
    config = config or ScoringConfig()
    if score < config.negative_below:
        return EmotionalState.NEGATIVE
    if score > config.positive_above:
        return EmotionalState.POSITIVE
    return EmotionalState.NEUTRAL
