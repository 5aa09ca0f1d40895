"""Tasks command - list tasks from 1f.toml."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.config import CONFIG_FILENAME
from fast_cli.workflows.tasks import format_task_list

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register("tasks", f"List tasks defined in {CONFIG_FILENAME}")
def cmd_tasks(ctx: "AppContext") -> None:
    for line in format_task_list(ctx.config):
        print(line)
