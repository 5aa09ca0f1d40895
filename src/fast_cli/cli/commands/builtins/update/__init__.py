"""Update command - bun update and git pull."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.workflows.update import run_update

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register(
    "update",
    "Update dependencies (bun) and pull latest git changes",
    help_text="Update dependencies and sync the repository",
)
def cmd_update(ctx: "AppContext") -> None:
    run_update(cwd=ctx.cwd)
