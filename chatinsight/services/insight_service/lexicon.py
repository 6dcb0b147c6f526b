"""Lexicon matching - concerning phrases and keyword categories.

Both matchers lowercase the message and look for each term as a plain
substring. There are no word boundaries: "stress" matches "stressed"
and also matches inside unrelated words. Callers should treat matches
as signals, not proof.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .config import CONCERNING_PHRASES, LEXICON, LexiconCategory

logger = logging.getLogger(__name__)

CategoryMatches = Dict[str, List[str]]


class ConcerningPhraseDetector:
    """Detects explicit self-harm/suicide phrasing.

    A hit short-circuits normal scoring: the message is HIGH risk no
    matter what else it says.
    """

    def __init__(self, phrases: Optional[Iterable[str]] = None):
        source = CONCERNING_PHRASES if phrases is None else phrases
        self.phrases: Tuple[str, ...] = tuple(p.lower() for p in source)

    def detect(self, text: str) -> bool:
        """Return True on the first concerning phrase found in ``text``."""
        lowered = text.lower()
        return any(phrase in lowered for phrase in self.phrases)

    def matches(self, text: str) -> List[str]:
        """Return every concerning phrase found in ``text``."""
        lowered = text.lower()
        return [phrase for phrase in self.phrases if phrase in lowered]


class KeywordClassifier:
    """Matches message text against the weighted category lexicons."""

    def __init__(self, categories: Optional[Sequence[LexiconCategory]] = None):
        self.categories: Tuple[LexiconCategory, ...] = tuple(
            LEXICON if categories is None else categories
        )
        logger.debug(
            "KEYWORD_CLASSIFIER_INITIALIZED",
            extra={
                "category_count": len(self.categories),
                "term_count": sum(len(c.terms) for c in self.categories),
            }
        )

    def classify(self, text: str) -> CategoryMatches:
        """Match ``text`` against every category.

        Args:
            text: Raw message text

        Returns:
            Mapping of category name to matched terms in lexicon order.
            Categories without a match are omitted.
        """
        lowered = text.lower()
        matches: CategoryMatches = {}
        for category in self.categories:
            found = [term for term in category.terms if term.lower() in lowered]
            if found:
                matches[category.name] = found
        return matches

    @staticmethod
    def keywords(matches: CategoryMatches) -> Tuple[str, ...]:
        """Flatten category matches into unique terms, first occurrence wins."""
        seen: Dict[str, None] = {}
        for terms in matches.values():
            for term in terms:
                seen.setdefault(term, None)
        return tuple(seen)
