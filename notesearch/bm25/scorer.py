"""
BM25+ scorer with corpus-wide IDF.

BM25+ extends BM25 with a constant delta added for every matched query term,
so a match always raises the score even when IDF is small.

Formula (per field):
    score(D, Q) = Σ [ IDF(q) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × dl/avgdl)) + delta ]
    (sum over query terms q with tf > 0)

    IDF(q) = ln((N - n(q) + 0.5) / (n(q) + 0.5) + 1)

Where:
    tf = term frequency in the field
    dl = field length (number of tokens)
    avgdl = average field length across the corpus
    N = number of documents
    n(q) = number of documents containing q in title or body
    k1 = term frequency saturation parameter (default: 1.2)
    b = length normalization parameter (default: 0.75)
    delta = per-match lower bound (default: 1.0)

Titles and bodies are scored separately, each against its own average length.
"""

import math
from typing import Dict, List, Literal, Tuple

from .index_builder import BM25Index, DocumentRecord

Field = Literal["name", "content"]

DEFAULT_K1 = 1.2
DEFAULT_B = 0.75
DEFAULT_DELTA = 1.0


class BM25PlusScorer:
    """
    BM25+ scoring bound to one index snapshot.
    """

    def __init__(
        self,
        index: BM25Index,
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
        delta: float = DEFAULT_DELTA,
    ):
        """
        Initialize BM25+ scorer.

        Args:
            index: Snapshot providing document frequencies and average lengths

            k1: Term frequency saturation parameter
                Higher = more weight to repeated terms

            b: Length normalization parameter
                0.0 = no length penalty, 1.0 = full normalization

            delta: Bonus added per matched term
                Keeps every match's contribution positive
        """
        self.index = index
        self.k1 = k1
        self.b = b
        self.delta = delta

    def idf(self, term: str) -> float:
        """
        Inverse document frequency of a term.

        Returns 0.0 for terms that appear in no document, so they never
        contribute to a score.
        """
        docs_with_term = self.index.document_frequency(term)
        if docs_with_term == 0:
            return 0.0

        n = self.index.statistics.document_count
        return math.log((n - docs_with_term + 0.5) / (docs_with_term + 0.5) + 1)

    def _field_data(self, record: DocumentRecord, field: Field) -> Tuple[Dict[str, int], int, float]:
        stats = self.index.statistics
        if field == "name":
            return record.name_term_frequency, record.name_length, stats.avg_name_length
        if field == "content":
            return record.content_term_frequency, record.content_length, stats.avg_content_length
        raise ValueError(f"Unknown field: {field!r} (expected 'name' or 'content')")

    def score_field(self, record: DocumentRecord, query_terms: List[str], field: Field) -> float:
        """
        Compute BM25+ score of one field of a document.

        Args:
            record: Indexed document
            query_terms: Tokenized query (repeated terms count once per occurrence)
            field: "name" (title) or "content" (body)

        Returns:
            BM25+ score (0.0 when no query term occurs in the field)
        """
        term_frequencies, doc_length, avg_length = self._field_data(record, field)

        # Empty field across the whole corpus
        if avg_length == 0:
            return 0.0

        length_norm = 1 - self.b + self.b * (doc_length / avg_length)

        score = 0.0
        for term in query_terms:
            tf = term_frequencies.get(term, 0)
            if tf == 0:
                continue

            tf_component = (tf * (self.k1 + 1)) / (tf + self.k1 * length_norm)
            score += self.idf(term) * tf_component + self.delta

        return score
