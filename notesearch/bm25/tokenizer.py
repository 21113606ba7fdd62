"""
Tokenizer for BM25+ text processing.

Tokenization pipeline:
1. Lowercase conversion
2. Replace everything except Latin letters (plus common accented letters) and
   whitespace with a space
3. Split on whitespace
4. Drop single-character tokens
5. Filter stopwords (common English words)
6. Return list of meaningful tokens in input order

No stemming: "notes" and "note" are different terms.
"""

import re
from typing import List

# Common English stopwords
# These are function words that don't help with ranking
STOPWORDS = frozenset([
    'a', 'about', 'all', 'also', 'an', 'and', 'any', 'are', 'as', 'at',
    'be', 'been', 'but', 'by', 'can', 'could', 'do', 'does', 'for', 'from',
    'get', 'go', 'had', 'has', 'have', 'he', 'how', 'if', 'in', 'into',
    'is', 'it', 'its', 'just', 'make', 'me', 'more', 'my', 'no', 'not',
    'of', 'on', 'one', 'or', 'other', 'our', 'out', 'so', 'some', 'than',
    'that', 'the', 'them', 'then', 'these', 'they', 'this', 'to', 'up', 'was',
    'way', 'were', 'what', 'when', 'which', 'who', 'will', 'with', 'would', 'you',
    'your',
])

# Anything that is not a letter we index or whitespace becomes a separator
_NON_WORD_PATTERN = re.compile(r'[^a-záàâãéèêíïóôõöúçñ\s]')

MIN_TOKEN_LENGTH = 2


def tokenize(text: str) -> List[str]:
    """
    Tokenize text for BM25+ scoring with stopword removal.

    Args:
        text: Input text to tokenize

    Returns:
        List of lowercase tokens without stopwords, in input order

    Examples:
        >>> tokenize("The Dragon's lair, level 3!")
        ['dragon', 'lair', 'level']

        >>> tokenize("Café com açúcar")
        ['café', 'com', 'açúcar']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    text = _NON_WORD_PATTERN.sub(' ', text.lower())

    return [
        t for t in text.split()
        if len(t) >= MIN_TOKEN_LENGTH and t not in STOPWORDS
    ]
