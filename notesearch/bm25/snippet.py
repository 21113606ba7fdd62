"""
Snippet extraction for body matches.

Finds the earliest occurrence of any query term in the raw body (plain
case-insensitive substring search, not token-aware) and cuts a window around
it. Falls back to the beginning of the body when no term occurs literally.
"""

import re
from typing import List, Optional, Tuple

CONTEXT_BEFORE = 20
CONTEXT_AFTER = 40
FALLBACK_LENGTH = 60
ELLIPSIS = "..."


def find_first_match(content: str, query_terms: List[str]) -> Optional[Tuple[int, str]]:
    """Return (index, term) of the earliest query term occurrence, or None"""
    best: Optional[Tuple[int, str]] = None

    # Indexes must refer to the raw text: lower() can change its length
    for term in query_terms:
        match = re.search(re.escape(term), content, re.IGNORECASE)
        if match and (best is None or match.start() < best[0]):
            best = (match.start(), term)

    return best


def generate_snippet(content: str, query_terms: List[str]) -> str:
    """
    Generate a short preview of the body around the first query match.

    Args:
        content: Raw (untokenized) body text
        query_terms: Tokenized query

    Returns:
        Up to 20 characters before the match, the matched term and up to 40
        characters after it, with "..." marking each truncated side.

    Examples:
        >>> generate_snippet("Goblins hide in the old mine", ["mine"])
        '...ins hide in the old mine'

        >>> generate_snippet("x" * 100, ["dragon"]) == "x" * 60 + "..."
        True
    """
    match = find_first_match(content, query_terms)

    if match is None:
        return content[:FALLBACK_LENGTH] + (ELLIPSIS if len(content) > FALLBACK_LENGTH else "")

    idx, term = match
    start = max(0, idx - CONTEXT_BEFORE)
    end = min(len(content), idx + len(term) + CONTEXT_AFTER)

    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(content) else ""
    return prefix + content[start:end] + suffix
