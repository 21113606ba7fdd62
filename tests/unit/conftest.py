"""Unit test configuration - environment defaults and note corpora"""

import os
import tempfile
from pathlib import Path

import pytest

# CRITICAL: Set env vars BEFORE importing notesearch.main
# main.py reads configuration and configures logging at module level
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "notesearch-tests" / "notesearch.log"))
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.pop("NOTES_DIR", None)

from notesearch.bm25 import BM25SearchEngine
from notesearch.models import SourceDocument


@pytest.fixture
def campaign_notes():
    """Small tabletop-campaign notebook"""
    return [
        SourceDocument(
            id="dragon",
            name="Red Dragon Lair",
            content="The red dragon sleeps beneath the volcano. Its hoard includes a cursed crown.",
        ),
        SourceDocument(
            id="tavern",
            name="Tavern Rumours",
            content="Patrons whisper that a dragon was seen flying over the northern hills.",
        ),
        SourceDocument(
            id="npcs",
            name="Town NPCs",
            content="Mira the blacksmith. Old Tom the innkeeper. Captain Vell of the guard.",
        ),
        SourceDocument(
            id="session-1",
            name="Session 1 Recap",
            content="The party met at the tavern, fought goblins and found a map to the volcano.",
        ),
        SourceDocument(
            id="empty",
            name="Scratchpad",
            content="",
        ),
    ]


@pytest.fixture
def engine(campaign_notes):
    """Engine indexed with the campaign notebook"""
    search_engine = BM25SearchEngine()
    search_engine.build_index(campaign_notes)
    return search_engine
