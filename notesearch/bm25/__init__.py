"""
BM25+ (Best Match 25 with lower-bounded term contributions) full-text search for notes.

This module ranks notes by relevance of their title and body to a free-text query.

Components:
- tokenizer: Text tokenization for term extraction
- index_builder: Per-note term frequencies, inverted index, corpus statistics
- scorer: BM25+ scoring with corpus-wide IDF
- snippet: Body previews around the first query match
- engine: Ranking across the corpus with title boosting

Key properties:
- Index is rebuilt wholesale from the full corpus on every change
- Every matched term adds at least delta, so scores stay positive
- Title matches weigh 2.5x body matches
"""

from .tokenizer import STOPWORDS, tokenize
from .index_builder import (
    BM25Index,
    CorpusStatistics,
    DocumentRecord,
    build_bm25_index,
    calculate_term_frequencies,
)
from .scorer import BM25PlusScorer
from .snippet import generate_snippet
from .engine import BM25SearchEngine, DEFAULT_MAX_RESULTS, NAME_BOOST

__all__ = [
    "STOPWORDS",
    "tokenize",
    "BM25Index",
    "CorpusStatistics",
    "DocumentRecord",
    "build_bm25_index",
    "calculate_term_frequencies",
    "BM25PlusScorer",
    "generate_snippet",
    "BM25SearchEngine",
    "DEFAULT_MAX_RESULTS",
    "NAME_BOOST",
]
