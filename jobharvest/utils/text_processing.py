"""
Text processing utilities for jobharvest.

Small helpers for turning scraped HTML text into single-line cell values.
"""

import re
from typing import Iterable

_WHITESPACE = re.compile(r"\s+")


def squish_whitespace(text: str) -> str:
    """
    Collapse every run of whitespace into one space and trim both ends.

    Example:
        >>> squish_whitespace("  Senior\\n\\t Engineer  ")
        "Senior Engineer"
    """
    return _WHITESPACE.sub(" ", text).strip()


def normalize_nbsp(text: str) -> str:
    """
    Turn non-breaking spaces into plain spaces.

    Entities are already decoded by BeautifulSoup when the markup is parsed,
    so extracted text is never unescaped a second time.
    """
    return text.replace("\xa0", " ")


def clean_text_fragments(fragments: Iterable[str], separator: str = " ") -> str:
    """Join text fragments, normalise non-breaking spaces and squish whitespace."""
    return squish_whitespace(normalize_nbsp(separator.join(fragments)))
