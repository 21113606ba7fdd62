"""
BM25+ search engine - ranks notes by title and body relevance.

Search flow:
1. Tokenize query (empty or stopword-only query -> no results)
2. Collect candidate notes from the inverted index (any query term in any field)
3. Score title and body separately with BM25+
4. Combine: total = 2.5 × title score + body score
5. Sort by total score (ties broken by note id), truncate, attach snippets

The engine is an explicit handle: a host can keep one per workspace.
build_index() constructs a complete new snapshot and installs it with a single
assignment, so a concurrent search() sees either the old index or the new one.
"""

import logging
from typing import Iterable, List, Optional

from ..models import MatchType, SearchResult, SourceDocument
from .index_builder import BM25Index, CorpusStatistics, DocumentRecord, build_bm25_index
from .scorer import BM25PlusScorer, Field
from .snippet import generate_snippet
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

# Title matches weigh 2.5x body matches
NAME_BOOST = 2.5
DEFAULT_MAX_RESULTS = 20


class BM25SearchEngine:
    """Full-text search over notes with BM25+ ranking"""

    def __init__(self):
        self._scorer = BM25PlusScorer(BM25Index())

    @property
    def _index(self) -> BM25Index:
        return self._scorer.index

    def build_index(self, documents: Iterable[SourceDocument]) -> None:
        """
        Replace the index with one built from the complete list of notes.

        Args:
            documents: The full current corpus (not a delta)
        """
        index = build_bm25_index(documents)

        # Single assignment swaps index and scorer together
        self._scorer = BM25PlusScorer(index)

        logger.info(
            f"Search index rebuilt: {index.statistics.document_count} documents, "
            f"{len(index.inverted_index)} terms"
        )

    @property
    def statistics(self) -> CorpusStatistics:
        return self._index.statistics

    @property
    def document_count(self) -> int:
        return self._index.statistics.document_count

    @property
    def term_count(self) -> int:
        return len(self._index.inverted_index)

    def get_record(self, doc_id: str) -> Optional[DocumentRecord]:
        return self._index.records.get(doc_id)

    def document_frequency(self, term: str) -> int:
        return self._index.document_frequency(term)

    def idf(self, term: str) -> float:
        return self._scorer.idf(term)

    def score_field(self, record: DocumentRecord, query_terms: List[str], field: Field) -> float:
        return self._scorer.score_field(record, query_terms, field)

    def search(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[SearchResult]:
        """
        Search notes matching the query.

        Args:
            query: Free-text query
            max_results: Maximum number of results (<= 0 returns nothing)

        Returns:
            Results sorted by score (descending), then note id (ascending).
            Body matches carry a snippet; title matches don't.

        Example:
            >>> engine = BM25SearchEngine()
            >>> engine.build_index([SourceDocument("1", "Dragon lair", "")])
            >>> [r.id for r in engine.search("dragon")]
            ['1']
        """
        query_terms = tokenize(query)
        if not query_terms or max_results <= 0:
            return []

        # One snapshot for the whole query
        scorer = self._scorer
        index = scorer.index

        candidate_ids = set()
        for term in query_terms:
            candidate_ids.update(index.inverted_index.get(term, ()))

        results: List[SearchResult] = []
        for doc_id in candidate_ids:
            record = index.records[doc_id]

            name_score = scorer.score_field(record, query_terms, "name")
            content_score = scorer.score_field(record, query_terms, "content")

            boosted_name_score = name_score * NAME_BOOST
            total_score = boosted_name_score + content_score

            if total_score <= 0:
                continue

            match_type: MatchType = "name" if boosted_name_score > content_score else "content"
            snippet = None
            if match_type == "content" and record.raw_content:
                snippet = generate_snippet(record.raw_content, query_terms)

            results.append(SearchResult(
                id=record.id,
                name=record.name,
                score=total_score,
                match_type=match_type,
                snippet=snippet,
            ))

        results.sort(key=lambda r: (-r.score, r.id))

        logger.debug(
            f"Query {query!r}: terms={query_terms}, {len(candidate_ids)} candidates, "
            f"{len(results)} matches, returning {min(len(results), max_results)}"
        )

        return results[:max_results]
