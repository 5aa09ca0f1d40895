"""dbClear command - delete all rows from the project database."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.workflows.database import clear_database, format_display_path, locate_database

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register("dbClear", "Remove all data from the project SQLite database")
def cmd_db_clear(ctx: "AppContext") -> None:
    db_path = locate_database(ctx.cwd)
    clear_database(db_path)
    print(f"✔️ Removed all data from {format_display_path(db_path, ctx.cwd)}")
