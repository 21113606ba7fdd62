"""
Notes Search - FastAPI service for BM25+ full-text search over notes

The service is a reference host for the search engine:
- Holds the note corpus in memory (source of truth for the index)
- Rebuilds the index from the full corpus on every change
- Serves ranked, snippeted results for free-text queries

Run:
    uvicorn notesearch.main:app --port 8080
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Load environment variables from .env.local (local dev) or .env (production)
from dotenv import load_dotenv

env_local = Path(__file__).parent.parent / ".env.local"
env_file = Path(__file__).parent.parent / ".env"

if env_local.exists():
    load_dotenv(env_local, override=True)
elif env_file.exists():
    load_dotenv(env_file, override=True)

# Configure logging: console (brief) + file (detailed)
from .logging_config import setup_logging

log_level = os.getenv("LOG_LEVEL", "INFO").upper()
console_level = getattr(logging, log_level, logging.INFO)
setup_logging(
    log_file=os.getenv("LOG_FILE", "logs/notesearch.log"),
    console_level=console_level,
    file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
)

logger = logging.getLogger(__name__)


from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .models import SourceDocument
from .note_store import NoteStore, load_notes_from_directory

# Configuration from environment variables
PORT = int(os.getenv("PORT", "8080"))
NOTES_DIR = os.getenv("NOTES_DIR")
MAX_RESULTS_LIMIT = int(os.getenv("MAX_RESULTS_LIMIT", "100"))
DEFAULT_MAX_RESULTS = min(int(os.getenv("DEFAULT_MAX_RESULTS", "20")), MAX_RESULTS_LIMIT)

APP_START_TIME = datetime.utcnow().isoformat() + "Z"

# Global note store (owns the search engine)
note_store = NoteStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the initial corpus"""
    if NOTES_DIR:
        logger.info(f"Indexing notes from {NOTES_DIR}...")
        note_store.replace_all(load_notes_from_directory(NOTES_DIR))
    else:
        logger.info("NOTES_DIR not set - starting with an empty corpus")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title="Notes Search API",
    description="BM25+ full-text search over personal notes",
    version=__version__,
    lifespan=lifespan,
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    started_at: str
    uptime_seconds: float
    document_count: int
    term_count: int


class NoteIn(BaseModel):
    id: str = Field(..., description="Stable note identifier", min_length=1)
    name: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")


class NoteUpdate(BaseModel):
    name: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")


class CorpusReplaceRequest(BaseModel):
    documents: List[NoteIn] = Field(..., description="Complete corpus (not a delta)")


class IndexResponse(BaseModel):
    document_count: int
    term_count: int
    rebuilt: bool = Field(..., description="False when the corpus was unchanged")
    corpus_hash: Optional[str] = None


class NoteInfo(BaseModel):
    id: str
    name: str
    content_length: int


class NoteListResponse(BaseModel):
    documents: List[NoteInfo]
    total: int


class SearchRequest(BaseModel):
    query: str = Field(..., description="Free-text query")
    max_results: int = Field(
        default=DEFAULT_MAX_RESULTS,
        ge=0,
        le=MAX_RESULTS_LIMIT,
        description="Maximum number of results",
    )


class SearchResultItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    score: float
    match_type: str = Field(..., alias="matchType")
    snippet: Optional[str] = None


class SearchResponse(BaseModel):
    query: str
    total: int
    results: List[SearchResultItem]


def _index_response(rebuilt: bool) -> IndexResponse:
    return IndexResponse(
        document_count=note_store.engine.document_count,
        term_count=note_store.engine.term_count,
        rebuilt=rebuilt,
        corpus_hash=note_store.corpus_hash,
    )


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "Notes Search API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    start_time = datetime.fromisoformat(APP_START_TIME.rstrip('Z'))
    uptime = (datetime.utcnow() - start_time).total_seconds()

    return HealthResponse(
        status="healthy",
        version=__version__,
        started_at=APP_START_TIME,
        uptime_seconds=round(uptime, 2),
        document_count=note_store.engine.document_count,
        term_count=note_store.engine.term_count,
    )


@app.get("/v1/documents", response_model=NoteListResponse)
def list_documents():
    """List notes in the corpus"""
    notes = [
        NoteInfo(id=doc.id, name=doc.name, content_length=len(doc.content))
        for doc in note_store.list()
    ]
    return NoteListResponse(documents=notes, total=len(notes))


@app.put("/v1/documents", response_model=IndexResponse)
def replace_documents(request: CorpusReplaceRequest):
    """
    Replace the whole corpus and rebuild the index.

    The request must carry every note; notes missing from it are removed.
    Duplicate ids: the later note wins.
    """
    documents = [SourceDocument(id=n.id, name=n.name, content=n.content) for n in request.documents]
    rebuilt = note_store.replace_all(documents)
    return _index_response(rebuilt)


@app.put("/v1/documents/{doc_id:path}", response_model=IndexResponse)
def upsert_document(doc_id: str, note: NoteUpdate):
    """Create or update one note and rebuild the index"""
    rebuilt = note_store.upsert(SourceDocument(id=doc_id, name=note.name, content=note.content))
    return _index_response(rebuilt)


@app.delete("/v1/documents/{doc_id:path}", response_model=IndexResponse)
def delete_document(doc_id: str):
    """Delete one note and rebuild the index"""
    if note_store.delete(doc_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Document not found: {doc_id}",
        )
    return _index_response(rebuilt=True)


@app.post(
    "/v1/search",
    response_model=SearchResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
)
def search(request: SearchRequest):
    """
    Search notes with BM25+ ranking.

    - Title matches weigh 2.5x body matches
    - Body matches include a snippet around the first match
    - Empty or stopword-only queries return no results
    """
    results = note_store.search(request.query, request.max_results)

    items = [
        SearchResultItem(
            id=r.id,
            name=r.name,
            score=r.score,
            match_type=r.match_type,
            snippet=r.snippet,
        )
        for r in results
    ]
    return SearchResponse(query=request.query, total=len(items), results=items)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "notesearch.main:app",
        host="0.0.0.0",
        port=PORT,
    )
