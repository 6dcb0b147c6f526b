"""Valence scorer boundary.

The engine treats word-polarity scoring as an injected pure function
``raw_score(text) -> float`` with a native range of roughly [-5, +5].
Two implementations are provided:

- VaderValenceScorer: NLTK's VADER analyzer, compound score scaled x5
- CallableValenceScorer: wraps any plain function (tests, other lexicons)
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ValenceScorer(ABC):
    """Abstract raw valence scorer."""

    @abstractmethod
    def raw_score(self, text: str) -> float:
        """Return the raw valence of ``text`` (negative = unpleasant)."""

    def __call__(self, text: str) -> float:
        return self.raw_score(text)


class CallableValenceScorer(ValenceScorer):
    """Adapts a plain ``text -> float`` function to the scorer interface."""

    def __init__(self, func: Callable[[str], float], name: Optional[str] = None):
        self._func = func
        self.name = name or getattr(func, "__name__", "callable")

    def raw_score(self, text: str) -> float:
        return self._func(text)


class VaderValenceScorer(ValenceScorer):
    """Lexicon valence from NLTK VADER.

    VADER's compound score lives in [-1, 1]; it is multiplied by ``scale``
    (default 5) to land on the engine's native [-5, 5] range. The VADER
    lexicon is downloaded on first use if it is not already installed.
    """

    LEXICON_RESOURCE = "sentiment/vader_lexicon.zip"

    def __init__(self, scale: float = 5.0, analyzer=None):
        """Initialize scorer.

        Args:
            scale: Multiplier applied to the compound score
            analyzer: Pre-built SentimentIntensityAnalyzer (injected for testing)
        """
        self.scale = scale
        self._analyzer = analyzer
        self._init_lock = threading.Lock()

    def _get_analyzer(self):
        if self._analyzer is not None:
            return self._analyzer

        # Concurrent first calls must not download the lexicon twice
        with self._init_lock:
            if self._analyzer is None:
                import nltk
                from nltk.sentiment import SentimentIntensityAnalyzer

                try:
                    nltk.data.find(self.LEXICON_RESOURCE)
                except LookupError:
                    logger.info(
                        "VADER_LEXICON_DOWNLOADING",
                        extra={"resource": self.LEXICON_RESOURCE},
                    )
                    nltk.download("vader_lexicon", quiet=True)
                self._analyzer = SentimentIntensityAnalyzer()
                logger.info("VADER_ANALYZER_LOADED", extra={"scale": self.scale})
        return self._analyzer

    def raw_score(self, text: str) -> float:
        scores = self._get_analyzer().polarity_scores(text)
        return scores["compound"] * self.scale
