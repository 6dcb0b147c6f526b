"""Tests for valence scorer adapters.

VADER is mocked so the tests never need the lexicon download.
"""
from unittest.mock import MagicMock, patch

import pytest

from chatinsight.services.insight_service.valence import (
    CallableValenceScorer,
    ValenceScorer,
    VaderValenceScorer,
)


class TestCallableValenceScorer:

    def test_wraps_function(self):
        scorer = CallableValenceScorer(lambda text: len(text) / 10)
        assert scorer.raw_score("hello") == 0.5
        assert scorer("hello") == 0.5

    def test_name_defaults_to_function_name(self):
        def afinn_like(text):
            return 0.0

        assert CallableValenceScorer(afinn_like).name == "afinn_like"
        assert CallableValenceScorer(afinn_like, name="custom").name == "custom"

    def test_is_valence_scorer(self):
        assert isinstance(CallableValenceScorer(lambda text: 0.0), ValenceScorer)


class TestVaderValenceScorer:

    def test_compound_scaled_to_native_range(self):
        mock_analyzer = MagicMock()
        mock_analyzer.polarity_scores.return_value = {"compound": -0.5}
        scorer = VaderValenceScorer(analyzer=mock_analyzer)

        assert scorer.raw_score("I feel awful") == -2.5
        mock_analyzer.polarity_scores.assert_called_once_with("I feel awful")

    def test_custom_scale(self):
        mock_analyzer = MagicMock()
        mock_analyzer.polarity_scores.return_value = {"compound": 0.8}
        scorer = VaderValenceScorer(scale=10.0, analyzer=mock_analyzer)

        assert scorer.raw_score("great") == pytest.approx(8.0)

    def test_lexicon_downloaded_when_missing(self):
        pytest.importorskip("nltk")
        mock_instance = MagicMock()
        mock_instance.polarity_scores.return_value = {"compound": 0.2}

        with patch("nltk.data.find", side_effect=LookupError("missing")), \
                patch("nltk.download") as mock_download, \
                patch("nltk.sentiment.SentimentIntensityAnalyzer", return_value=mock_instance):
            scorer = VaderValenceScorer()
            assert scorer.raw_score("fine") == pytest.approx(1.0)
            scorer.raw_score("again")

        mock_download.assert_called_once_with("vader_lexicon", quiet=True)

    def test_analyzer_errors_propagate(self):
        mock_analyzer = MagicMock()
        mock_analyzer.polarity_scores.side_effect = RuntimeError("broken")
        scorer = VaderValenceScorer(analyzer=mock_analyzer)

        with pytest.raises(RuntimeError):
            scorer.raw_score("text")
