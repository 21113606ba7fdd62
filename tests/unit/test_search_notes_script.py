"""Unit tests for the command-line search script"""

import importlib.util
import json
import os
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent.parent / "scripts" / "search_notes.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("search_notes", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def notes_dir(tmp_path):
    (tmp_path / "Dragon Lair.md").write_text("The red dragon sleeps beneath the volcano.", encoding="utf-8")
    (tmp_path / "tavern.md").write_text("Patrons whisper about a dragon over the hills.", encoding="utf-8")
    (tmp_path / "shopping.txt").write_text("bread cheese", encoding="utf-8")
    return tmp_path


def test_json_output(script, notes_dir, capsys):
    assert script.main([str(notes_dir), "dragon", "--json"]) == 0

    results = json.loads(capsys.readouterr().out)
    assert [r["id"] for r in results] == ["Dragon Lair.md", "tavern.md"]
    assert results[0]["match_type"] == "name"
    assert "snippet" not in results[0]
    assert "dragon" in results[1]["snippet"]


def test_text_output(script, notes_dir, capsys):
    assert script.main([str(notes_dir), "volcano", "--limit", "5"]) == 0

    out = capsys.readouterr().out
    assert "1 matches" in out
    assert "Dragon Lair" in out


def test_no_matches(script, notes_dir, capsys):
    assert script.main([str(notes_dir), "unicorn"]) == 0
    assert "No matches" in capsys.readouterr().out


def test_missing_directory(script, tmp_path, capsys):
    assert script.main([str(tmp_path / "missing"), "dragon"]) == 1
    assert "not found" in capsys.readouterr().err


class TestLoadEnvironment:
    """Test .env.local takes precedence over .env"""

    @pytest.fixture(autouse=True)
    def isolate_notes_dir(self, monkeypatch):
        # Registered so monkeypatch removes whatever load_dotenv writes
        monkeypatch.setenv("NOTES_DIR", "unset")

    def test_env_local_preferred(self, script, tmp_path):
        (tmp_path / ".env.local").write_text("NOTES_DIR=/notes/local\n", encoding="utf-8")
        (tmp_path / ".env").write_text("NOTES_DIR=/notes/default\n", encoding="utf-8")

        assert script.load_environment(tmp_path) == tmp_path / ".env.local"
        assert os.environ["NOTES_DIR"] == "/notes/local"

    def test_falls_back_to_env(self, script, tmp_path):
        (tmp_path / ".env").write_text("NOTES_DIR=/notes/default\n", encoding="utf-8")

        assert script.load_environment(tmp_path) == tmp_path / ".env"
        assert os.environ["NOTES_DIR"] == "/notes/default"

    def test_no_env_files(self, script, tmp_path):
        assert script.load_environment(tmp_path) is None
        assert os.environ["NOTES_DIR"] == "unset"
