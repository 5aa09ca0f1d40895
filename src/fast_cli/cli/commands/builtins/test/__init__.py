"""Test command - fuzzy-pick a test file and watch it with bun."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.workflows.testwatch import run_test_watch

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register(
    "test",
    "Fuzzy select a test file under tests/ then run bun --watch",
    help_text="Fuzzy select a test from tests/ and run bun --watch",
)
def cmd_test(ctx: "AppContext") -> None:
    run_test_watch(ctx.cwd)
