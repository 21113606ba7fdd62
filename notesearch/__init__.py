"""notesearch - BM25+ full-text search over personal notes"""

from .models import SearchResult, SourceDocument
from .bm25 import BM25SearchEngine

__version__ = "0.1.0"

__all__ = ["BM25SearchEngine", "SearchResult", "SourceDocument", "__version__"]
