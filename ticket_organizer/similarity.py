"""Keyword based similarity between tickets.

Tickets are compared by the Jaccard index of their keyword sets. The matcher
scores a target ticket against a corpus, drops weak matches and splits the
survivors into solved tickets (possible solutions) and everything else
(candidates for batching).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .keywords import DEFAULT_EXTRACTOR, KeywordExtractor
from .models import STATUS_SOLVED, Ticket

LOGGER = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.05
DEFAULT_RESULT_LIMIT = 5


@dataclass(frozen=True)
class MatchResult:
    ticket: Ticket
    similarity: float
    common_keywords: List[str]

    @property
    def similarity_percent(self) -> int:
        return int(round(self.similarity * 100))


@dataclass(frozen=True)
class SimilarTickets:
    solved: List[MatchResult] = field(default_factory=list)
    similar: List[MatchResult] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.solved or self.similar)


class TicketMatcher:
    """Score tickets against one another using a shared keyword extractor."""

    def __init__(
        self,
        *,
        extractor: Optional[KeywordExtractor] = None,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        result_limit: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        self.extractor = extractor or DEFAULT_EXTRACTOR
        self.similarity_threshold = similarity_threshold
        self.result_limit = result_limit

    def _keyword_set(self, ticket: Ticket) -> set[str]:
        return set(self.extractor.extract_keywords(ticket.text))

    @staticmethod
    def _jaccard(first: set[str], second: set[str]) -> float:
        union = first | second
        if not union:
            return 0.0
        return len(first & second) / len(union)

    def calculate_similarity(self, first: Ticket, second: Ticket) -> float:
        return self._jaccard(self._keyword_set(first), self._keyword_set(second))

    def common_keywords(self, first: Ticket, second: Ticket) -> List[str]:
        """Keywords of ``first`` in rank order that ``second`` also contains."""
        keywords_second = self._keyword_set(second)
        return [keyword for keyword in self.extractor.extract_keywords(first.text) if keyword in keywords_second]

    def find_similar_tickets(
        self,
        target: Ticket,
        corpus: Iterable[Ticket],
        limit: Optional[int] = None,
    ) -> SimilarTickets:
        limit = self.result_limit if limit is None else max(0, limit)
        # Work on a private copy so appends to the caller's collection cannot interfere.
        candidates = [ticket for ticket in tuple(corpus) if ticket.id != target.id]
        if not candidates:
            return SimilarTickets()

        target_ranked = self.extractor.extract_keywords(target.text)
        target_set = set(target_ranked)
        results: List[MatchResult] = []
        for candidate in candidates:
            candidate_set = self._keyword_set(candidate)
            results.append(
                MatchResult(
                    ticket=candidate,
                    similarity=self._jaccard(target_set, candidate_set),
                    common_keywords=[keyword for keyword in target_ranked if keyword in candidate_set],
                )
            )
        results = [result for result in results if result.similarity > self.similarity_threshold]
        results.sort(key=lambda result: result.similarity, reverse=True)

        solved = [result for result in results if result.ticket.status == STATUS_SOLVED]
        similar = [result for result in results if result.ticket.status != STATUS_SOLVED]
        LOGGER.debug(
            "Ticket %s matched %s of %s candidates (%s solved, %s open)",
            target.id,
            len(results),
            len(candidates),
            len(solved),
            len(similar),
        )
        return SimilarTickets(solved=solved[:limit], similar=similar[:limit])


DEFAULT_MATCHER = TicketMatcher()


def calculate_similarity(first: Ticket, second: Ticket) -> float:
    return DEFAULT_MATCHER.calculate_similarity(first, second)


def common_keywords(first: Ticket, second: Ticket) -> List[str]:
    return DEFAULT_MATCHER.common_keywords(first, second)


def find_similar_tickets(target: Ticket, corpus: Iterable[Ticket], limit: int = DEFAULT_RESULT_LIMIT) -> SimilarTickets:
    return DEFAULT_MATCHER.find_similar_tickets(target, corpus, limit)
