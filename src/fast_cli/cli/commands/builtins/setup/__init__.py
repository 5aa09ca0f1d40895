"""Setup command - validate secrets, then run the setup task."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.config import CONFIG_FILENAME
from fast_cli.workflows.secrets import validate_secrets
from fast_cli.workflows.tasks import run_task

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register(
    "setup",
    f"Validate required secrets and run the setup task from {CONFIG_FILENAME}",
    help_text=f"Validate secrets then run the setup task from {CONFIG_FILENAME}",
)
def cmd_setup(ctx: "AppContext") -> None:
    """Secrets are read from the environment on every run."""
    config = ctx.config
    if config is None:
        print(f"No {CONFIG_FILENAME} found. Nothing to validate.")
        return

    report = validate_secrets(config, ctx.env)
    for line in report.lines:
        print(line)
    report.raise_for_missing()

    setup_task = (config.tasks or {}).get("setup")
    if setup_task is None:
        print("No setup task defined; environment looks good.")
        return

    print("Running setup task commands...")
    run_task("setup", setup_task, cwd=ctx.cwd)
