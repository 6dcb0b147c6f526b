"""Message analyzer - single-message insight pipeline.

text -> concerning phrase check + keyword classification -> valence
normalization -> risk classification -> recommendations -> cached
MessageAnalysis.

Scorer failures propagate as ClassificationError. A failed analysis is
never reported as a neutral one.
"""
import logging
import math
import time
from numbers import Real
from typing import Callable, Optional, Union

from chatinsight.shared.models import MessageAnalysis, RiskLevel
from chatinsight.shared.utils import fingerprint_text
from .cache import ResultCache
from .config import AnalyzerConfig, ScoringConfig
from .exceptions import ClassificationError, InvalidMessageError
from .lexicon import ConcerningPhraseDetector, KeywordClassifier
from .recommendations import AlertPolicy, RecommendationProvider
from .scoring import RiskClassifier, ScoreNormalizer, emotional_state_for
from .valence import CallableValenceScorer, ValenceScorer, VaderValenceScorer

logger = logging.getLogger(__name__)

ScorerLike = Union[ValenceScorer, Callable[[str], float]]


class MentalHealthAnalyzer:
    """Analyzes one chat message at a time.

    Holds the result cache for its whole lifetime; build one analyzer at
    service startup and share it between requests.
    """

    def __init__(
        self,
        valence_scorer: Optional[ScorerLike] = None,
        config: Optional[AnalyzerConfig] = None,
        scoring: Optional[ScoringConfig] = None,
        cache: Optional[ResultCache] = None,
        phrase_detector: Optional[ConcerningPhraseDetector] = None,
        keyword_classifier: Optional[KeywordClassifier] = None,
        recommendation_provider: Optional[RecommendationProvider] = None,
    ):
        """Initialize analyzer with dependencies.

        Args:
            valence_scorer: Raw valence source (default: NLTK VADER)
            config: Analyzer configuration
            scoring: Score scale and thresholds
            cache: Result cache (injected for testing)
            phrase_detector: Concerning phrase detector (injected for testing)
            keyword_classifier: Lexicon classifier (injected for testing)
            recommendation_provider: Guidance catalog (injected for testing)
        """
        self.config = config or AnalyzerConfig()
        self.scoring = scoring or ScoringConfig()

        if valence_scorer is None:
            valence_scorer = VaderValenceScorer()
        elif not isinstance(valence_scorer, ValenceScorer):
            valence_scorer = CallableValenceScorer(valence_scorer)
        self.valence_scorer: ValenceScorer = valence_scorer

        self.cache = cache if cache is not None else ResultCache(self.config.cache_capacity)
        self.phrase_detector = phrase_detector or ConcerningPhraseDetector()
        self.keyword_classifier = keyword_classifier or KeywordClassifier()
        self.recommendation_provider = recommendation_provider or RecommendationProvider()
        self.normalizer = ScoreNormalizer(self.scoring)
        self.risk_classifier = RiskClassifier(self.scoring)
        self.alert_policy = AlertPolicy(self.scoring)

        logger.info(
            "MESSAGE_ANALYZER_INITIALIZED",
            extra={
                "valence_scorer": type(self.valence_scorer).__name__,
                "cache_capacity": self.cache.capacity,
                "percentage_mode": self.scoring.percentage_mode,
                "lexicon_version": self.config.lexicon_version,
            }
        )

    def analyze(self, text: str) -> MessageAnalysis:
        """Analyze a single message.

        Args:
            text: Message text; empty or whitespace-only text is valid

        Returns:
            MessageAnalysis (possibly served from the cache)

        Raises:
            InvalidMessageError: If text is not a string
            ClassificationError: If the valence scorer fails
        """
        if not isinstance(text, str):
            logger.warning(
                "ANALYSIS_REQUEST_INVALID",
                extra={"reason": "text_not_string", "type": type(text).__name__}
            )
            raise InvalidMessageError(
                f"Message text must be a string, got {type(text).__name__}"
            )
        return self.cache.get_or_compute(text, self._analyze_uncached)

    def should_alert(self, analysis) -> bool:
        """Delegate to the alert policy for either analysis shape."""
        return self.alert_policy.should_alert(analysis)

    def _analyze_uncached(self, text: str) -> MessageAnalysis:
        start_time = time.perf_counter()
        text_fingerprint = fingerprint_text(text)

        if not text.strip():
            return self._build(score=self.normalizer.normalize(0.0, {}), matches={})

        concerning = self.phrase_detector.matches(text)
        override = bool(concerning)
        matches = self.keyword_classifier.classify(text)
        raw_valence = self._score_valence(text, text_fingerprint)

        score = self.normalizer.normalize(raw_valence, matches, override)
        risk_level = self.risk_classifier.classify(matches, score, override)
        analysis = self._build(
            score=score,
            matches=matches,
            risk_level=risk_level,
            concerning=concerning,
        )

        latency_ms = (time.perf_counter() - start_time) * 1000

        if override:
            logger.critical(
                "CONCERNING_PHRASE_DETECTED",
                extra={
                    "text_fingerprint": text_fingerprint,
                    "phrase_count": len(concerning),
                    "risk_level": analysis.risk_level.value,
                    "normalized_score": score,
                }
            )

        logger.info(
            "MESSAGE_ANALYSIS_COMPLETED",
            extra={
                "text_fingerprint": text_fingerprint,
                "text_length": len(text),
                "raw_valence": raw_valence,
                "normalized_score": score,
                "risk_level": analysis.risk_level.value,
                "categories": sorted(matches),
                "keyword_count": len(analysis.keywords),
                "latency_ms": latency_ms,
            }
        )
        return analysis

    def _score_valence(self, text: str, text_fingerprint: str) -> float:
        try:
            raw = self.valence_scorer.raw_score(text)
        except Exception as e:
            logger.error(
                "VALENCE_SCORER_FAILED",
                extra={
                    "text_fingerprint": text_fingerprint,
                    "error": str(e),
                    "error_type": type(e).__name__,
                }
            )
            raise ClassificationError(f"Valence scoring failed: {e}") from e

        if isinstance(raw, bool) or not isinstance(raw, Real) or not math.isfinite(raw):
            logger.error(
                "VALENCE_SCORER_INVALID_RESULT",
                extra={"text_fingerprint": text_fingerprint, "result": repr(raw)}
            )
            raise ClassificationError(f"Valence scorer returned {raw!r}, expected a finite number")
        return float(raw)

    def _build(
        self,
        score: int,
        matches,
        risk_level: Optional[RiskLevel] = None,
        concerning=(),
    ) -> MessageAnalysis:
        if risk_level is None:
            risk_level = self.risk_classifier.classify(matches, score)
        keywords = self.keyword_classifier.keywords(matches)
        extra_phrases = tuple(p for p in concerning if p not in keywords)
        return MessageAnalysis(
            sentiment_score=self.scoring.report(score),
            normalized_score=score,
            emotional_state=emotional_state_for(score, self.scoring),
            risk_level=risk_level,
            keywords=keywords + extra_phrases,
            recommendations=self.recommendation_provider.recommendations(risk_level),
            concerning_phrase_detected=bool(concerning),
        )

    def get_status(self) -> dict:
        """Get analyzer status for readiness checks."""
        return {
            "valence_scorer": type(self.valence_scorer).__name__,
            "lexicon_version": self.config.lexicon_version,
            "percentage_mode": self.scoring.percentage_mode,
            "cache": self.cache.get_status(),
        }
