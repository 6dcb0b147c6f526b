"""Recommendations and alerting policy.

Recommendation lists are curated copy, not computed: one fixed, ordered
list per risk level. The alert policy decides whether an analysis should
go down the host application's notification path.
"""
from typing import Dict, Optional, Tuple, Union

from chatinsight.shared.models import ConversationAnalysis, MessageAnalysis, RiskLevel
from .config import ScoringConfig

RECOMMENDATIONS: Dict[RiskLevel, Tuple[str, ...]] = {
    RiskLevel.LOW: (
        "Consider talking to a trusted friend or family member about your feelings.",
        "Try some relaxation techniques like deep breathing or meditation.",
        "Take a walk or engage in physical activity to improve your mood.",
    ),
    RiskLevel.MEDIUM: (
        "Consider scheduling an appointment with a mental health professional.",
        "Call or text a mental health helpline for support.",
        "Practice self-care activities and maintain a regular sleep schedule.",
        "Let someone you trust know how you have been feeling.",
    ),
    RiskLevel.HIGH: (
        "If you're having thoughts of self-harm, please call emergency services (911) immediately.",
        "Contact the 988 Suicide & Crisis Lifeline by calling or texting 988.",
        "Reach out to a mental health professional as soon as possible.",
        "Stay with someone you trust until you feel safe.",
    ),
}

# Shown when a conversation is too short to say anything meaningful.
INSUFFICIENT_HISTORY_RECOMMENDATION = (
    "Keep the conversation going - more messages are needed for an overall insight."
)

ALERT_TITLES: Dict[RiskLevel, str] = {
    RiskLevel.HIGH: "Urgent Support Available",
    RiskLevel.MEDIUM: "Support Available",
    RiskLevel.LOW: "Sentiment Analysis",
}

Analysis = Union[MessageAnalysis, ConversationAnalysis]


class RecommendationProvider:
    """Maps a risk level to its curated guidance list."""

    def __init__(self, catalog: Optional[Dict[RiskLevel, Tuple[str, ...]]] = None):
        self.catalog = dict(catalog or RECOMMENDATIONS)
        missing = [level for level in RiskLevel if level not in self.catalog]
        if missing:
            raise ValueError(
                f"Recommendation catalog missing levels: {[m.value for m in missing]}"
            )

    def recommendations(self, risk_level: RiskLevel) -> Tuple[str, ...]:
        return self.catalog[risk_level]


class AlertPolicy:
    """Decides whether an analysis warrants an external notification.

    HIGH always alerts. MEDIUM alerts only when the normalized score is
    below ``ScoringConfig.alert_below``, which turns borderline MEDIUM
    cases into actionable alerts.
    """

    def __init__(self, config: Optional[ScoringConfig] = None):
        self.config = config or ScoringConfig()

    def should_alert(self, analysis: Analysis) -> bool:
        if analysis.risk_level == RiskLevel.HIGH:
            return True
        return (
            analysis.risk_level == RiskLevel.MEDIUM
            and analysis.normalized_score < self.config.alert_below
        )


def alert_title(risk_level: RiskLevel) -> str:
    """Heading the host UI shows above the recommendations."""
    return ALERT_TITLES[risk_level]
