"""Best-effort heading and keyword tagging for chunks."""

from __future__ import annotations

import re
from collections import Counter

from docvault.config.constants import (
    HEADING_MAX_LENGTH,
    HEADING_SCAN_LINES,
    KEYWORD_LIMIT,
    KEYWORD_MIN_LENGTH,
)

_WORD_SPLIT = re.compile(r"\W+")


def _looks_like_heading(line: str) -> bool:
    if not line or len(line) >= HEADING_MAX_LENGTH:
        return False
    if line.endswith(":"):
        return True
    return any(c.isalpha() for c in line) and line.upper() == line


def extract_headings(text: str) -> list[str]:
    lines = [line.strip() for line in text.split("\n")[:HEADING_SCAN_LINES]]
    return [line for line in lines if _looks_like_heading(line)]


def extract_keywords(text: str, limit: int = KEYWORD_LIMIT) -> list[str]:
    """Words longer than three characters that repeat, most frequent first."""
    words = [w for w in _WORD_SPLIT.split(text.lower()) if len(w) >= KEYWORD_MIN_LENGTH]
    counts = Counter(words)
    # most_common keeps first-seen order among ties
    return [word for word, n in counts.most_common() if n > 1][:limit]


def extract_metadata(text: str) -> str:
    parts = [f"heading: {h}" for h in extract_headings(text)]
    keywords = extract_keywords(text)
    if keywords:
        parts.append(f"keywords: {', '.join(keywords)}")
    return "; ".join(parts)
