"""Ticket intake helpers with keyword based similar-ticket matching."""

from .config import ConfigError, HighlightSettings, IntakeSettings, MatchingSettings, load_config, resolve_path
from .highlight import highlight_keywords, keyword_spans
from .intake import TicketIntake, ValidationError
from .keywords import DEFAULT_STOP_WORDS, KeywordExtractor, extract_keywords
from .logging_setup import configure_logging
from .models import Ticket
from .similarity import (
    MatchResult,
    SimilarTickets,
    TicketMatcher,
    calculate_similarity,
    common_keywords,
    find_similar_tickets,
)
from .store import InMemoryTicketStore

__all__ = [
    "ConfigError",
    "HighlightSettings",
    "IntakeSettings",
    "MatchingSettings",
    "load_config",
    "resolve_path",
    "highlight_keywords",
    "keyword_spans",
    "TicketIntake",
    "ValidationError",
    "DEFAULT_STOP_WORDS",
    "KeywordExtractor",
    "extract_keywords",
    "configure_logging",
    "Ticket",
    "MatchResult",
    "SimilarTickets",
    "TicketMatcher",
    "calculate_similarity",
    "common_keywords",
    "find_similar_tickets",
    "InMemoryTicketStore",
]
