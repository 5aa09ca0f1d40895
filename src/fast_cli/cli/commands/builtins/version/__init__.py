"""Version command - print the release."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register("version", "Print the current fast release")
def cmd_version(ctx: "AppContext") -> None:
    print(ctx.identity.version)
