"""
Project SQLite database: locate, open, clear.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from fast_cli.config import DEFAULTS
from fast_cli.core.exceptions import DatabaseError, ProcessError
from fast_cli.core.process import run_capture, run_streaming

logger = logging.getLogger(__name__)

DATABASE_RELATIVE_PATH = Path(*DEFAULTS["database_path"])
DATABASE_APP = DEFAULTS["database_app"]

LIST_TABLES_QUERY = (
    "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%';"
)


def locate_database(start: Path, relative: Path = DATABASE_RELATIVE_PATH) -> Path:
    """Walk from `start` towards the root until `relative` exists as a file.

    Raises:
        DatabaseError: If the path is a directory or is never found.
    """
    directory = start
    while True:
        candidate = directory / relative
        if candidate.is_file():
            return candidate
        if candidate.is_dir():
            raise DatabaseError(f"Database path {candidate} is a directory")

        parent = directory.parent
        if parent == directory:
            break
        directory = parent

    raise DatabaseError(f"Could not find {relative} starting from {start}")


def format_display_path(path: Path, cwd: Path | None = None) -> str:
    """Path relative to cwd when it lives under it, otherwise as given."""
    cwd = cwd or Path.cwd()
    relative = os.path.relpath(path, cwd)
    if relative and not relative.startswith(".."):
        return relative
    return str(path)


def quote_identifier(name: str) -> str:
    """Quote an SQLite identifier: my"table -> "my""table"."""
    return '"' + name.replace('"', '""') + '"'


def list_tables(db_path: Path) -> list[str]:
    """User tables in the database (sqlite_* internals excluded)."""
    output = run_capture("sqlite3", [str(db_path), LIST_TABLES_QUERY])
    return [line.strip() for line in output.splitlines() if line.strip()]


def run_sqlite_script(db_path: Path, script: str) -> None:
    """Pipe a script into `sqlite3 <db>`; stderr becomes the error message."""
    if not script.endswith("\n"):
        script += "\n"
    try:
        run_capture("sqlite3", [str(db_path)], input=script)
    except ProcessError as e:
        raise DatabaseError(e.stderr.strip() or str(e)) from e


def build_clear_script(tables: list[str]) -> str:
    statements = ["BEGIN;"]
    statements.extend(f"DELETE FROM {quote_identifier(table)};" for table in tables)
    statements.append("COMMIT;")
    return "\n".join(statements)


def is_no_such_table_error(error: Exception) -> bool:
    return "no such table" in str(error).lower()


def clear_database(db_path: Path) -> list[str]:
    """Delete every row from every user table in one transaction.

    Also resets AUTOINCREMENT counters when sqlite_sequence exists.

    Returns:
        The tables that were cleared.
    """
    tables = list_tables(db_path)
    if not tables:
        return []

    run_sqlite_script(db_path, build_clear_script(tables))
    try:
        run_sqlite_script(db_path, "DELETE FROM sqlite_sequence;")
    except DatabaseError as e:
        if not is_no_such_table_error(e):
            raise
        logger.debug("No sqlite_sequence table to reset")
    return tables


def open_database(db_path: Path, app: str = DATABASE_APP) -> None:
    """Open the database in a desktop viewer (macOS `open -a`)."""
    run_streaming("open", ["-a", app, str(db_path.resolve())])
