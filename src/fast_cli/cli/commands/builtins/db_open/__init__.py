"""dbOpen command - open the project database in TablePlus."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.workflows.database import (
    DATABASE_APP,
    format_display_path,
    locate_database,
    open_database,
)

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register("dbOpen", f"Open the project SQLite database in {DATABASE_APP}")
def cmd_db_open(ctx: "AppContext") -> None:
    db_path = locate_database(ctx.cwd)
    open_database(db_path)
    print(f"✔️ Opening {format_display_path(db_path, ctx.cwd)} in {DATABASE_APP}")
