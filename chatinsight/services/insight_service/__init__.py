"""Insight Service: mental-health risk signals for chat messages.

Enriches each chat message (and each conversation) with a sentiment
score, emotional state, risk level, matched keywords and recommendations.

Components:
- lexicon.py: ConcerningPhraseDetector and KeywordClassifier
- scoring.py: ScoreNormalizer and RiskClassifier
- cache.py: ResultCache (bounded FIFO, thread-safe)
- analyzer.py: MentalHealthAnalyzer (single-message pipeline)
- conversation.py: ConversationAggregator (history with recency window)
- recommendations.py: RecommendationProvider and AlertPolicy
- handler.py: Flask HTTP endpoints (/health, /ready, /analyze, /analyze/conversation)

Usage:
    from chatinsight.services.insight_service import (
        MentalHealthAnalyzer, ConversationAggregator,
    )
    analyzer = MentalHealthAnalyzer()
    result = analyzer.analyze("I feel hopeless")
    summary = ConversationAggregator(analyzer).aggregate(bodies)
"""

from .analyzer import MentalHealthAnalyzer
from .cache import ResultCache
from .config import (
    CONCERNING_PHRASES,
    LEXICON,
    AnalyzerConfig,
    LexiconCategory,
    ScoringConfig,
)
from .conversation import ConversationAggregator
from .exceptions import (
    CacheConfigurationError,
    ClassificationError,
    InsightError,
    InvalidMessageError,
)
from .lexicon import ConcerningPhraseDetector, KeywordClassifier
from .recommendations import AlertPolicy, RecommendationProvider, alert_title
from .scoring import RiskClassifier, ScoreNormalizer, emotional_state_for
from .valence import CallableValenceScorer, ValenceScorer, VaderValenceScorer

__all__ = [
    "MentalHealthAnalyzer",
    "ConversationAggregator",
    "ResultCache",
    "AnalyzerConfig",
    "ScoringConfig",
    "LexiconCategory",
    "LEXICON",
    "CONCERNING_PHRASES",
    "ConcerningPhraseDetector",
    "KeywordClassifier",
    "ScoreNormalizer",
    "RiskClassifier",
    "emotional_state_for",
    "RecommendationProvider",
    "AlertPolicy",
    "alert_title",
    "ValenceScorer",
    "VaderValenceScorer",
    "CallableValenceScorer",
    "InsightError",
    "InvalidMessageError",
    "ClassificationError",
    "CacheConfigurationError",
]
