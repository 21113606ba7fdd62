"""
BM25+ index builder - per-document term frequencies and corpus statistics.

Builds a complete in-memory snapshot from the full list of notes:
- One DocumentRecord per distinct note id (title and body tokenized separately)
- Inverted index: term -> ids of notes containing the term in either field
- Corpus statistics: document count and average title/body lengths

The snapshot is never patched. Every corpus change produces a new one.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..models import SourceDocument
from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass
class DocumentRecord:
    """Tokenized view of one note, owned by the index"""
    id: str
    name: str
    name_tokens: List[str]
    content_tokens: List[str]
    name_term_frequency: Dict[str, int]
    content_term_frequency: Dict[str, int]
    raw_content: str

    @property
    def name_length(self) -> int:
        return len(self.name_tokens)

    @property
    def content_length(self) -> int:
        return len(self.content_tokens)


@dataclass(frozen=True)
class CorpusStatistics:
    document_count: int = 0
    avg_name_length: float = 0.0
    avg_content_length: float = 0.0


@dataclass(frozen=True)
class BM25Index:
    """
    Immutable snapshot of everything the scorer needs.

    inverted_index is used for document-frequency lookups (IDF) and for
    candidate retrieval at query time.
    """
    records: Dict[str, DocumentRecord] = field(default_factory=dict)
    inverted_index: Dict[str, Set[str]] = field(default_factory=dict)
    statistics: CorpusStatistics = field(default_factory=CorpusStatistics)

    def document_frequency(self, term: str) -> int:
        return len(self.inverted_index.get(term, ()))


def calculate_term_frequencies(tokens: Iterable[str]) -> Dict[str, int]:
    """
    Count term occurrences.

    Example:
        >>> calculate_term_frequencies(["dragon", "lair", "dragon"])
        {'dragon': 2, 'lair': 1}
    """
    term_frequencies = defaultdict(int)
    for term in tokens:
        term_frequencies[term] += 1
    return dict(term_frequencies)


def build_document_record(document: SourceDocument) -> DocumentRecord:
    name_tokens = tokenize(document.name)
    content_tokens = tokenize(document.content)
    return DocumentRecord(
        id=document.id,
        name=document.name,
        name_tokens=name_tokens,
        content_tokens=content_tokens,
        name_term_frequency=calculate_term_frequencies(name_tokens),
        content_term_frequency=calculate_term_frequencies(content_tokens),
        raw_content=document.content,
    )


def build_bm25_index(documents: Iterable[SourceDocument]) -> BM25Index:
    """
    Build a BM25+ index snapshot from the complete list of notes.

    Args:
        documents: Every note in the corpus. Duplicate ids are allowed;
            the later note replaces the earlier one.

    Returns:
        BM25Index with records, inverted index and corpus statistics.
        An empty input yields an empty index with zero averages.

    Example:
        >>> index = build_bm25_index([
        ...     SourceDocument("1", "Dragon lair", "The dragon sleeps"),
        ...     SourceDocument("2", "Tavern", "Ale and dragon rumours"),
        ... ])
        >>> index.statistics.document_count
        2
        >>> sorted(index.inverted_index["dragon"])
        ['1', '2']
    """
    records: Dict[str, DocumentRecord] = {}
    replaced = 0

    for document in documents:
        if document.id in records:
            replaced += 1
        records[document.id] = build_document_record(document)

    if not records:
        logger.debug("Built empty BM25+ index")
        return BM25Index()

    # Lengths are accumulated after dedup so averages match the stored records
    total_name_length = 0
    total_content_length = 0
    inverted_index: Dict[str, Set[str]] = defaultdict(set)

    for doc_id, record in records.items():
        total_name_length += record.name_length
        total_content_length += record.content_length

        for term in set(record.name_tokens) | set(record.content_tokens):
            inverted_index[term].add(doc_id)

    document_count = len(records)
    statistics = CorpusStatistics(
        document_count=document_count,
        avg_name_length=total_name_length / document_count,
        avg_content_length=total_content_length / document_count,
    )

    logger.debug(
        f"Built BM25+ index: {document_count} documents, {len(inverted_index)} unique terms"
        + (f", {replaced} duplicate ids replaced" if replaced else "")
    )

    return BM25Index(
        records=records,
        inverted_index=dict(inverted_index),
        statistics=statistics,
    )
