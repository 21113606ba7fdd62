"""
Logging setup for the notes search service.

Each process start writes to its own file, `<stem>_<YYYYmmdd_HHMMSS>.log`
next to the configured base path. Retention is by session count: older
session files beyond `keep_sessions` are removed at startup. A session file
is never rotated.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable

KEEP_SESSION_LOGS = 5

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-request chatter from the server and test client
QUIET_LOGGERS = ("uvicorn.access", "httpx")

logger = logging.getLogger(__name__)


def session_log_path(log_file: Path, started: datetime) -> Path:
    return log_file.parent / f"{log_file.stem}_{started:%Y%m%d_%H%M%S}.log"


def prune_session_logs(log_file: Path, keep: int) -> list:
    """
    Remove the oldest session logs, leaving room for one new session.

    Returns:
        Paths that were removed
    """
    sessions = sorted(log_file.parent.glob(f"{log_file.stem}_*.log"))
    stale = sessions[:max(len(sessions) - (keep - 1), 0)]

    removed = []
    for path in stale:
        try:
            path.unlink()
            removed.append(path)
        except OSError as e:
            logger.debug(f"Could not delete old log {path}: {e}")
    return removed


def _quiet(names: Iterable[str]) -> None:
    for name in names:
        logging.getLogger(name).setLevel(logging.WARNING)


def setup_logging(
    log_file: str = "logs/notesearch.log",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    keep_sessions: int = KEEP_SESSION_LOGS,
) -> Path:
    """
    Send brief logs to stdout and detailed logs to a per-session file.

    Args:
        log_file: Base path; the session file is derived from it
        console_level: Console threshold (INFO = brief)
        file_level: File threshold (DEBUG = verbose)
        keep_sessions: Session files to keep, counting the new one

    Returns:
        Path of this session's log file
    """
    base = Path(log_file)
    base.parent.mkdir(parents=True, exist_ok=True)

    removed = prune_session_logs(base, keep_sessions)
    session_log = session_log_path(base, datetime.now())

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    file_handler = logging.FileHandler(session_log, encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))

    # Root passes everything; handlers filter
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    _quiet(QUIET_LOGGERS)

    logger.info(
        f"Logging to console ({logging.getLevelName(console_level)}) "
        f"and {session_log} ({logging.getLevelName(file_level)})"
    )
    if removed:
        logger.debug(f"Removed {len(removed)} old session log(s)")

    return session_log
