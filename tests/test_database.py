"""
Tests for locating and clearing the project database.
"""

from pathlib import Path

import pytest

from fast_cli.core.exceptions import DatabaseError, ProcessError
from fast_cli.workflows import database as db_mod
from fast_cli.workflows.database import (
    DATABASE_RELATIVE_PATH,
    build_clear_script,
    clear_database,
    format_display_path,
    is_no_such_table_error,
    locate_database,
    quote_identifier,
)


def make_db(root: Path) -> Path:
    path = root / DATABASE_RELATIVE_PATH
    path.parent.mkdir(parents=True)
    path.write_bytes(b"")
    return path


# ============================================================================
# Location Tests
# ============================================================================

class TestLocateDatabase:
    """Tests for the upward search."""

    def test_found_in_start_directory(self, tmp_path):
        db = make_db(tmp_path)
        assert locate_database(tmp_path) == db

    def test_found_in_ancestor(self, tmp_path):
        db = make_db(tmp_path)
        nested = tmp_path / "apps" / "web" / "src"
        nested.mkdir(parents=True)
        assert locate_database(nested) == db

    def test_nearest_wins(self, tmp_path):
        make_db(tmp_path)
        inner_root = tmp_path / "packages" / "api"
        inner_root.mkdir(parents=True)
        inner = make_db(inner_root)
        assert locate_database(inner_root) == inner

    def test_directory_is_error(self, tmp_path):
        (tmp_path / DATABASE_RELATIVE_PATH).mkdir(parents=True)
        with pytest.raises(DatabaseError, match="is a directory"):
            locate_database(tmp_path)

    def test_not_found(self, tmp_path):
        with pytest.raises(DatabaseError, match="Could not find"):
            locate_database(tmp_path, Path("no-such-dir-xyz") / "db.sqlite")

    def test_display_path_relative(self, tmp_path):
        db = make_db(tmp_path)
        assert format_display_path(db, tmp_path) == str(DATABASE_RELATIVE_PATH)

    def test_display_path_outside_cwd(self, tmp_path):
        db = make_db(tmp_path)
        other = tmp_path / "elsewhere"
        other.mkdir()
        assert format_display_path(db, other) == str(db)


# ============================================================================
# Clearing Tests
# ============================================================================

class TestQuoting:
    """Tests for identifier quoting and the clear script."""

    def test_plain(self):
        assert quote_identifier("users") == '"users"'

    def test_embedded_quote(self):
        assert quote_identifier('my"table') == '"my""table"'

    def test_clear_script(self):
        script = build_clear_script(["users", 'odd"name'])
        assert script.splitlines() == [
            "BEGIN;",
            'DELETE FROM "users";',
            'DELETE FROM "odd""name";',
            "COMMIT;",
        ]

    def test_no_such_table_detection(self):
        assert is_no_such_table_error(DatabaseError("Error: no such table: sqlite_sequence"))
        assert not is_no_such_table_error(DatabaseError("database is locked"))


class FakeSqlite:
    """Stands in for run_capture when it is asked to call sqlite3."""

    def __init__(self, tables="", sequence_error=None):
        self.tables = tables
        self.sequence_error = sequence_error
        self.scripts = []

    def __call__(self, command, args, input=None, cwd=None, max_buffer=None):
        assert command == "sqlite3"
        if input is None:
            return self.tables
        self.scripts.append(input)
        if "sqlite_sequence" in input and self.sequence_error:
            raise ProcessError(command, args, 1, stderr=self.sequence_error)
        return ""


class TestClearDatabase:
    """Tests for clear_database with sqlite3 stubbed out."""

    def test_clears_all_tables(self, monkeypatch):
        fake = FakeSqlite(tables="users\nposts\n")
        monkeypatch.setattr(db_mod, "run_capture", fake)

        assert clear_database(Path("db.sqlite")) == ["users", "posts"]
        assert fake.scripts[0].startswith("BEGIN;\n")
        assert 'DELETE FROM "users";' in fake.scripts[0]
        assert fake.scripts[0].endswith("COMMIT;\n")
        assert fake.scripts[1] == "DELETE FROM sqlite_sequence;\n"

    def test_no_tables(self, monkeypatch):
        fake = FakeSqlite(tables="\n")
        monkeypatch.setattr(db_mod, "run_capture", fake)

        assert clear_database(Path("db.sqlite")) == []
        assert fake.scripts == []

    def test_missing_sequence_table_tolerated(self, monkeypatch):
        fake = FakeSqlite(tables="users\n", sequence_error="Error: no such table: sqlite_sequence\n")
        monkeypatch.setattr(db_mod, "run_capture", fake)

        assert clear_database(Path("db.sqlite")) == ["users"]

    def test_other_sequence_error_raised(self, monkeypatch):
        fake = FakeSqlite(tables="users\n", sequence_error="Error: database is locked\n")
        monkeypatch.setattr(db_mod, "run_capture", fake)

        with pytest.raises(DatabaseError, match="database is locked"):
            clear_database(Path("db.sqlite"))

    def test_open_database(self, monkeypatch, tmp_path):
        calls = []
        monkeypatch.setattr(db_mod, "run_streaming", lambda cmd, args: calls.append((cmd, args)))
        db = make_db(tmp_path)

        db_mod.open_database(db)
        assert calls == [("open", ["-a", "TablePlus", str(db.resolve())])]
