"""Utility functions for the notes search service"""

import hashlib
import json
from typing import Iterable

from .models import SourceDocument


def calculate_corpus_hash(documents: Iterable[SourceDocument]) -> str:
    """
    Calculate SHA256 fingerprint of a note corpus

    Duplicate ids collapse to the last occurrence (same rule as the index),
    and notes are ordered by id, so the hash only changes when the indexed
    content would.

    Args:
        documents: Notes in any order

    Returns:
        Hexadecimal hash string (64 characters)

    Examples:
        >>> a = SourceDocument("1", "Dragon", "lair")
        >>> b = SourceDocument("2", "Tavern", "ale")
        >>> calculate_corpus_hash([a, b]) == calculate_corpus_hash([b, a])
        True
    """
    latest = {doc.id: doc for doc in documents}
    payload = [
        [doc.id, doc.name, doc.content]
        for _, doc in sorted(latest.items())
    ]
    content = json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(content).hexdigest()
