"""Keyword extraction used to compare tickets with one another."""
from __future__ import annotations

import logging
import re
from collections import Counter
from typing import FrozenSet, Iterable, List, Optional

LOGGER = logging.getLogger(__name__)

# Anything that is not an ASCII word character or whitespace becomes a space.
_NON_WORD_PATTERN = re.compile(r"[^A-Za-z0-9_\s]")

DEFAULT_MIN_KEYWORD_LENGTH = 3

DEFAULT_STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "in", "on", "at", "to",
        "for", "of", "with", "by", "is", "are", "was", "were", "be", "been",
        "have", "has", "had", "do", "does", "did", "will", "would", "could", "should",
        "may", "might", "can", "cannot", "cant", "i", "you", "he", "she", "it",
        "we", "they", "my", "your", "his", "her", "its", "our", "their",
    }
)


class KeywordExtractor:
    """Turn free text into a frequency ranked list of significant keywords."""

    def __init__(
        self,
        *,
        stop_words: Optional[Iterable[str]] = None,
        min_length: int = DEFAULT_MIN_KEYWORD_LENGTH,
    ) -> None:
        if stop_words is None:
            self.stop_words = DEFAULT_STOP_WORDS
        else:
            self.stop_words = frozenset(word.lower() for word in stop_words)
        self.min_length = max(1, min_length)

    @staticmethod
    def _raw_tokens(text: Optional[str]) -> List[str]:
        cleaned = _NON_WORD_PATTERN.sub(" ", (text or "").lower())
        return cleaned.split()

    def tokenize(self, text: Optional[str]) -> List[str]:
        """Return every significant token in order of appearance, duplicates included."""
        return [
            token
            for token in self._raw_tokens(text)
            if len(token) >= self.min_length and token not in self.stop_words
        ]

    def keyword_counts(self, text: Optional[str]) -> Counter[str]:
        # Counter keeps first-seen order, which the ranking relies on for ties.
        return Counter(self.tokenize(text))

    def extract_keywords(self, text: Optional[str]) -> List[str]:
        """Distinct keywords, most frequent first; ties keep first-seen order."""
        counts = self.keyword_counts(text)
        ranked = sorted(counts, key=lambda token: -counts[token])
        LOGGER.debug("Extracted %s keywords from %s characters", len(ranked), len(text or ""))
        return ranked


DEFAULT_EXTRACTOR = KeywordExtractor()


def extract_keywords(text: Optional[str]) -> List[str]:
    return DEFAULT_EXTRACTOR.extract_keywords(text)
