"""Mark keyword occurrences inside ticket text for display."""
from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

DEFAULT_OPEN_TAG = "<mark>"
DEFAULT_CLOSE_TAG = "</mark>"


def _keyword_pattern(keywords: Iterable[str]) -> Optional[Pattern[str]]:
    unique: List[str] = []
    seen: set[str] = set()
    for keyword in keywords:
        if keyword and keyword.lower() not in seen:
            seen.add(keyword.lower())
            unique.append(keyword)
    if not unique:
        return None
    # Longest first so a keyword never loses to one of its own prefixes.
    ordered = sorted(unique, key=len, reverse=True)
    return re.compile("|".join(re.escape(keyword) for keyword in ordered), re.IGNORECASE)


def keyword_spans(text: Optional[str], keywords: Iterable[str]) -> List[Tuple[int, int]]:
    """Return sorted, non-overlapping ``(start, end)`` spans of keyword matches."""
    pattern = _keyword_pattern(keywords)
    if pattern is None or not text:
        return []
    return [match.span() for match in pattern.finditer(text)]


def highlight_keywords(
    text: Optional[str],
    keywords: Iterable[str],
    *,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
    escape: Optional[Callable[[str], str]] = None,
) -> str:
    """Wrap case-insensitive keyword occurrences in ``open_tag``/``close_tag``.

    All keywords are matched in one pass, so overlapping keywords (``mail``
    and ``email``) never produce nested markers. The matched text keeps its
    original casing. ``escape`` is applied to every text segment but not to
    the tags, which lets callers HTML-escape user input safely.
    """
    text = text or ""
    escape = escape or (lambda value: value)
    pieces: List[str] = []
    cursor = 0
    for start, end in keyword_spans(text, keywords):
        pieces.append(escape(text[cursor:start]))
        pieces.append(f"{open_tag}{escape(text[start:end])}{close_tag}")
        cursor = end
    pieces.append(escape(text[cursor:]))
    return "".join(pieces)
