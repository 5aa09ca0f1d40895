"""
Command loader - registers [tasks.*] from 1f.toml as commands.

Tasks are registered after the built-ins. A task whose name is already
taken is skipped, so a 1f.toml like

    [tasks.commit]
    cmds = ["git commit"]

never replaces the built-in `commit`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from fast_cli.cli.commands.registry import CommandRegistry
from fast_cli.config import OneFConfig, TaskConfig
from fast_cli.workflows.tasks import describe_task, run_task

logger = logging.getLogger(__name__)


def make_task_handler(name: str, task: TaskConfig, cwd: Path | None = None) -> Callable[[], None]:
    def handler() -> None:
        run_task(name, task, cwd=cwd)
    return handler


def load_config_tasks(
    registry: CommandRegistry,
    config: OneFConfig | None,
    cwd: Path | None = None,
) -> list[str]:
    """Register every unclaimed task from config.

    Args:
        registry: Registry already holding the built-ins
        config: Parsed 1f.toml, or None
        cwd: Directory the task commands run in

    Returns:
        Names of the tasks that were registered.
    """
    if config is None or not config.tasks:
        return []

    loaded = []
    for name, task in config.tasks.items():
        if registry.register(name, describe_task(name, task), make_task_handler(name, task, cwd)):
            loaded.append(name)
        else:
            logger.debug(f"Skipping task '{name}': name already registered")
    return loaded
