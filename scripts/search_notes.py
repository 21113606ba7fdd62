#!/usr/bin/env python3
"""
Search a folder of notes from the command line.

Indexes every *.md / *.txt file under NOTES_DIR (recursively) and prints
BM25+ ranked results for the query.

Usage:
    python scripts/search_notes.py ~/notes "dragon lair"
    python scripts/search_notes.py ~/notes "dragon lair" --limit 5 --json
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def load_environment(root: Path) -> Optional[Path]:
    """Load .env.local (local dev) or .env from root; return the file used"""
    for env_path in (root / ".env.local", root / ".env"):
        if env_path.exists():
            load_dotenv(env_path, override=True)
            return env_path
    return None


load_environment(project_root)

from notesearch.bm25 import BM25SearchEngine, DEFAULT_MAX_RESULTS
from notesearch.note_store import load_notes_from_directory


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="BM25+ search over a folder of notes")
    parser.add_argument(
        "notes_dir",
        nargs="?",
        default=os.getenv("NOTES_DIR"),
        help="Notes folder (default: $NOTES_DIR)",
    )
    parser.add_argument("query", help="Free-text query")
    parser.add_argument("--limit", type=int, default=DEFAULT_MAX_RESULTS, help="Maximum number of results")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logs")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s: %(message)s',
    )

    if not args.notes_dir:
        print("❌ No notes folder given (pass NOTES_DIR or set $NOTES_DIR)", file=sys.stderr)
        return 1

    try:
        documents = load_notes_from_directory(args.notes_dir)
    except FileNotFoundError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    engine = BM25SearchEngine()
    engine.build_index(documents)
    results = engine.search(args.query, args.limit)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], ensure_ascii=False, indent=2))
        return 0

    if not results:
        print(f"No matches for {args.query!r} in {len(documents)} notes")
        return 0

    print(f"{len(results)} matches for {args.query!r} in {len(documents)} notes:\n")
    for rank, result in enumerate(results, start=1):
        print(f"{rank:>3}. {result.name}  [{result.match_type}, score={result.score:.3f}]  ({result.id})")
        if result.snippet:
            print(f"     {' '.join(result.snippet.split())}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
