"""Conversation aggregator - insight over a whole message history.

Runs the cached single-message pipeline over every message and combines
the results:
- score: floor of the mean normalized score
- keywords: union, first-seen order
- risk: most severe level across the full history and the recent window,
  then the same score corrections a single message gets

A HIGH anywhere in the history is never suppressed by a calmer recent
window. Risk only comes down through the score-based corrections.
"""
import collections.abc
import logging
import statistics
from typing import List, Optional, Sequence

from chatinsight.shared.models import (
    ConversationAnalysis,
    EmotionalState,
    MessageAnalysis,
    RiskLevel,
)
from .analyzer import MentalHealthAnalyzer
from .config import AnalyzerConfig
from .exceptions import InvalidMessageError
from .recommendations import INSUFFICIENT_HISTORY_RECOMMENDATION
from .scoring import emotional_state_for

logger = logging.getLogger(__name__)

NEUTRAL_SCORE = 50


class ConversationAggregator:
    """Aggregates per-message insights into a conversation insight."""

    def __init__(
        self,
        analyzer: MentalHealthAnalyzer,
        config: Optional[AnalyzerConfig] = None,
    ):
        """Initialize aggregator.

        Args:
            analyzer: Shared single-message analyzer (and its cache)
            config: Window and minimum-size settings (default: analyzer's)
        """
        self.analyzer = analyzer
        self.config = config or analyzer.config
        self.scoring = analyzer.scoring

        logger.info(
            "CONVERSATION_AGGREGATOR_INITIALIZED",
            extra={
                "recent_window": self.config.recent_window,
                "min_conversation_messages": self.config.min_conversation_messages,
            }
        )

    def aggregate(self, messages: Sequence[Optional[str]]) -> ConversationAnalysis:
        """Aggregate a conversation's message bodies, oldest first.

        Args:
            messages: Message bodies, newest last. ``None`` bodies
                (attachment-only messages) are skipped.

        Returns:
            ConversationAnalysis, or the neutral default when fewer than
            ``min_conversation_messages`` messages are supplied

        Raises:
            InvalidMessageError: If messages is not a sequence or holds a
                non-string, non-None entry
            ClassificationError: If the valence scorer fails on any message
        """
        messages = self._validate_history(messages)

        if len(messages) < self.config.min_conversation_messages:
            logger.info(
                "CONVERSATION_TOO_SHORT",
                extra={
                    "message_count": len(messages),
                    "minimum": self.config.min_conversation_messages,
                }
            )
            return self.neutral_default()

        analyses: List[MessageAnalysis] = []
        skipped = 0
        for index, body in enumerate(messages):
            if body is None:
                skipped += 1
                continue
            if not isinstance(body, str):
                logger.warning(
                    "CONVERSATION_REQUEST_INVALID",
                    extra={"reason": "body_not_string", "index": index}
                )
                raise InvalidMessageError(
                    f"Message body at index {index} must be a string or None, "
                    f"got {type(body).__name__}"
                )
            analyses.append(self.analyzer.analyze(body))

        return self._combine(analyses, skipped=skipped)

    def aggregate_analyses(
        self,
        analyses: Sequence[MessageAnalysis],
    ) -> ConversationAnalysis:
        """Aggregate already-computed message analyses, oldest first."""
        analyses = list(analyses)
        if len(analyses) < self.config.min_conversation_messages:
            return self.neutral_default()
        return self._combine(analyses, skipped=0)

    def neutral_default(self) -> ConversationAnalysis:
        """Fixed result for histories too short to aggregate."""
        return ConversationAnalysis(
            sentiment_score=self.scoring.report(NEUTRAL_SCORE),
            normalized_score=NEUTRAL_SCORE,
            emotional_state=EmotionalState.NEUTRAL,
            risk_level=RiskLevel.LOW,
            keywords=(),
            recommendations=(INSUFFICIENT_HISTORY_RECOMMENDATION,),
            message_count=0,
            trajectory="stable",
        )

    def _validate_history(self, messages) -> List[Optional[str]]:
        if isinstance(messages, (str, bytes)) \
                or not isinstance(messages, collections.abc.Sequence):
            logger.warning(
                "CONVERSATION_REQUEST_INVALID",
                extra={"reason": "history_not_sequence", "type": type(messages).__name__}
            )
            raise InvalidMessageError(
                f"Conversation history must be a sequence of message bodies, "
                f"got {type(messages).__name__}"
            )
        return list(messages)

    def _combine(
        self,
        analyses: List[MessageAnalysis],
        skipped: int,
    ) -> ConversationAnalysis:
        scores = [a.normalized_score for a in analyses]
        average = sum(scores) // len(scores) if scores else NEUTRAL_SCORE

        keywords = {}
        for analysis in analyses:
            for keyword in analysis.keywords:
                keywords.setdefault(keyword, None)

        levels = [a.risk_level for a in analyses]
        window = levels[-self.config.recent_window:]
        full_max = max(levels, default=RiskLevel.LOW)
        window_max = max(window, default=RiskLevel.LOW)
        risk_level = max(full_max, window_max)
        risk_level = self.analyzer.risk_classifier.apply_corrections(risk_level, average)

        trajectory = self._calculate_trajectory(scores)

        result = ConversationAnalysis(
            sentiment_score=self.scoring.report(average),
            normalized_score=average,
            emotional_state=emotional_state_for(average, self.scoring),
            risk_level=risk_level,
            keywords=tuple(keywords),
            recommendations=self.analyzer.recommendation_provider.recommendations(risk_level),
            message_count=len(analyses),
            trajectory=trajectory,
        )

        logger.info(
            "CONVERSATION_ANALYSIS_COMPLETED",
            extra={
                "message_count": len(analyses),
                "skipped_count": skipped,
                "average_score": average,
                "history_max_risk": full_max.value,
                "window_max_risk": window_max.value,
                "risk_level": risk_level.value,
                "trajectory": trajectory,
                "keyword_count": len(keywords),
            }
        )
        return result

    def _calculate_trajectory(self, scores: List[int]) -> str:
        """Compare the recent window's mean score to the earlier messages.

        Args:
            scores: Normalized scores, oldest first

        Returns:
            "stable", "improving", or "escalating"
        """
        window = self.config.recent_window
        earlier, recent = scores[:-window], scores[-window:]
        if not earlier or not recent:
            return "stable"

        delta = statistics.mean(recent) - statistics.mean(earlier)
        if delta < -self.config.trajectory_delta:
            return "escalating"
        elif delta > self.config.trajectory_delta:
            return "improving"
        return "stable"
