"""Shared fixtures for Insight Service tests.

Tests never touch the VADER lexicon. They inject a tiny word-polarity
scorer instead so expected scores can be worked out by hand.
"""
import re

import pytest

from chatinsight.services.insight_service.analyzer import MentalHealthAnalyzer
from chatinsight.services.insight_service.conversation import ConversationAggregator
from chatinsight.services.insight_service.valence import CallableValenceScorer

WORD_VALENCE = {
    "happy": 3,
    "grateful": 2,
    "love": 3,
    "hopeless": -3,
    "sad": -2,
    "terrible": -3,
    "kill": -3,
    "die": -3,
}


def word_valence(text: str) -> float:
    """Sum of per-word polarities, AFINN style."""
    return float(sum(WORD_VALENCE.get(w, 0) for w in re.findall(r"[a-z']+", text.lower())))


@pytest.fixture
def fake_scorer():
    """Deterministic valence scorer."""
    return CallableValenceScorer(word_valence, name="word_valence")


@pytest.fixture
def analyzer(fake_scorer):
    """Analyzer with the deterministic scorer and a fresh cache."""
    return MentalHealthAnalyzer(valence_scorer=fake_scorer)


@pytest.fixture
def aggregator(analyzer):
    """Conversation aggregator sharing the analyzer's cache."""
    return ConversationAggregator(analyzer)
