"""
In-memory note store that keeps a search engine in sync with its corpus.

Every change hands the complete corpus to the engine (never a delta). A rebuild
is skipped when the corpus fingerprint hasn't changed, e.g. when the same note
is saved twice.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .bm25 import BM25SearchEngine, DEFAULT_MAX_RESULTS
from .models import SearchResult, SourceDocument
from .utils import calculate_corpus_hash

logger = logging.getLogger(__name__)

DEFAULT_NOTE_PATTERNS = ("*.md", "*.txt")


class NoteStore:
    """
    Source of truth for notes, owner of one search engine.

    Writers are serialised; searches read the engine's current snapshot
    without locking.
    """

    def __init__(self, engine: Optional[BM25SearchEngine] = None):
        self.engine = engine or BM25SearchEngine()
        self._documents: Dict[str, SourceDocument] = {}
        self._corpus_hash: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def corpus_hash(self) -> Optional[str]:
        """Fingerprint of the corpus the engine was last built from"""
        return self._corpus_hash

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, doc_id: str) -> Optional[SourceDocument]:
        return self._documents.get(doc_id)

    def list(self) -> List[SourceDocument]:
        return sorted(self._documents.values(), key=lambda d: d.id)

    def replace_all(self, documents: Iterable[SourceDocument]) -> bool:
        """
        Replace the whole corpus.

        Returns:
            True if the index was rebuilt, False if the corpus was unchanged
        """
        with self._lock:
            self._documents = {doc.id: doc for doc in documents}
            return self._rebuild()

    def upsert(self, document: SourceDocument) -> bool:
        """Create or update one note. Returns True if the index was rebuilt."""
        with self._lock:
            self._documents[document.id] = document
            return self._rebuild()

    def delete(self, doc_id: str) -> Optional[SourceDocument]:
        """Remove one note. Returns the removed note, or None if unknown."""
        with self._lock:
            removed = self._documents.pop(doc_id, None)
            if removed is not None:
                self._rebuild()
            return removed

    def search(self, query: str, max_results: int = DEFAULT_MAX_RESULTS) -> List[SearchResult]:
        return self.engine.search(query, max_results)

    def _rebuild(self) -> bool:
        documents = list(self._documents.values())
        corpus_hash = calculate_corpus_hash(documents)

        if corpus_hash == self._corpus_hash:
            logger.debug(f"Corpus unchanged ({corpus_hash[:12]}), skipping index rebuild")
            return False

        self.engine.build_index(documents)
        self._corpus_hash = corpus_hash
        return True


def load_notes_from_directory(
    directory: Union[str, Path],
    patterns: Sequence[str] = DEFAULT_NOTE_PATTERNS,
) -> List[SourceDocument]:
    """
    Read note files from a directory tree.

    Args:
        directory: Root folder of the notes
        patterns: Glob patterns of note files (searched recursively)

    Returns:
        One SourceDocument per file, sorted by id:
        id = path relative to the root (POSIX style), name = file stem,
        content = file text

    Raises:
        FileNotFoundError: If directory doesn't exist
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Notes directory not found: {root}")

    paths = {path for pattern in patterns for path in root.rglob(pattern) if path.is_file()}

    documents = [
        SourceDocument(
            id=path.relative_to(root).as_posix(),
            name=path.stem,
            content=path.read_text(encoding="utf-8", errors="replace"),
        )
        for path in paths
    ]
    documents.sort(key=lambda d: d.id)

    logger.info(f"Loaded {len(documents)} notes from {root}")
    return documents
