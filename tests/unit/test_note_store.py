"""
Unit tests for NoteStore (corpus ownership and index synchronisation).
"""

from unittest.mock import Mock

import pytest
from notesearch.bm25 import BM25SearchEngine
from notesearch.models import SourceDocument
from notesearch.note_store import NoteStore, load_notes_from_directory


@pytest.fixture
def store(campaign_notes):
    note_store = NoteStore()
    note_store.replace_all(campaign_notes)
    return note_store


class TestNoteStore:
    """Test corpus mutations rebuild the index"""

    def test_replace_all_builds_index(self, store, campaign_notes):
        assert len(store) == len(campaign_notes)
        assert store.engine.document_count == len(campaign_notes)
        assert store.corpus_hash is not None
        assert store.search("dragon")

    def test_replace_all_unchanged_corpus_skips_rebuild(self, campaign_notes):
        engine = Mock(wraps=BM25SearchEngine())
        store = NoteStore(engine=engine)

        assert store.replace_all(campaign_notes) is True
        assert store.replace_all(list(reversed(campaign_notes))) is False
        assert engine.build_index.call_count == 1

    def test_replace_all_removes_missing_notes(self, store):
        store.replace_all([SourceDocument("only", "Shopping", "bread")])

        assert len(store) == 1
        assert store.get("dragon") is None
        assert store.search("dragon") == []

    def test_upsert_new_note(self, store):
        assert store.upsert(SourceDocument("unicorn", "Unicorn Stable", "")) is True
        assert [r.id for r in store.search("unicorn")] == ["unicorn"]

    def test_upsert_rename(self, store):
        """Test a renamed note is found under its new title only"""
        store.upsert(SourceDocument("npcs", "Villagers", "Mira the blacksmith."))

        assert store.get("npcs").name == "Villagers"
        assert [r.id for r in store.search("villagers")] == ["npcs"]
        assert store.search("npcs") == []

    def test_upsert_same_note_twice(self, store):
        note = SourceDocument("npcs", "Town NPCs", "Edited body")
        assert store.upsert(note) is True
        assert store.upsert(note) is False

    def test_delete(self, store, campaign_notes):
        removed = store.delete("dragon")

        assert removed.name == "Red Dragon Lair"
        assert len(store) == len(campaign_notes) - 1
        assert "dragon" not in {r.id for r in store.search("dragon")}

    def test_delete_unknown(self, store):
        corpus_hash = store.corpus_hash
        assert store.delete("missing") is None
        assert store.corpus_hash == corpus_hash

    def test_list_sorted_by_id(self, store):
        ids = [doc.id for doc in store.list()]
        assert ids == sorted(ids)

    def test_search_respects_limit(self, store):
        assert len(store.search("dragon volcano tavern", 1)) == 1
        assert store.search("dragon", 0) == []

    def test_empty_store(self):
        store = NoteStore()
        assert store.corpus_hash is None
        assert store.search("dragon") == []
        assert store.replace_all([]) is True
        assert store.engine.document_count == 0


class TestLoadNotesFromDirectory:
    """Test reading note files"""

    def test_loads_markdown_and_text(self, tmp_path):
        (tmp_path / "dragon.md").write_text("# Dragon\nSleeps under the volcano", encoding="utf-8")
        (tmp_path / "sessions").mkdir()
        (tmp_path / "sessions" / "recap.txt").write_text("Goblins everywhere", encoding="utf-8")
        (tmp_path / "image.png").write_bytes(b"\x89PNG")

        documents = load_notes_from_directory(tmp_path)

        assert [d.id for d in documents] == ["dragon.md", "sessions/recap.txt"]
        assert documents[0].name == "dragon"
        assert documents[0].content == "# Dragon\nSleeps under the volcano"
        assert documents[1].name == "recap"

    def test_custom_patterns(self, tmp_path):
        (tmp_path / "a.md").write_text("alpha", encoding="utf-8")
        (tmp_path / "b.org").write_text("beta", encoding="utf-8")

        documents = load_notes_from_directory(tmp_path, patterns=["*.org"])
        assert [d.id for d in documents] == ["b.org"]

    def test_invalid_utf8_replaced(self, tmp_path):
        (tmp_path / "broken.md").write_bytes(b"dragon \xff lair")
        documents = load_notes_from_directory(tmp_path)
        assert "dragon" in documents[0].content

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_notes_from_directory(tmp_path / "nope")

    def test_loaded_notes_are_searchable(self, tmp_path):
        (tmp_path / "dragon.md").write_text("Sleeps under the volcano", encoding="utf-8")
        (tmp_path / "tavern.md").write_text("Ale and rumours", encoding="utf-8")

        store = NoteStore()
        store.replace_all(load_notes_from_directory(tmp_path))

        results = store.search("dragon")
        assert [r.id for r in results] == ["dragon.md"]
        assert results[0].match_type == "name"
