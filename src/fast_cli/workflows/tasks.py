"""
Running and listing [tasks.*] from 1f.toml.
"""

from __future__ import annotations

import logging
import signal
import sys
from pathlib import Path

from fast_cli.config import CONFIG_FILENAME, OneFConfig, TaskConfig
from fast_cli.core.exceptions import TaskError
from fast_cli.core.process import run_shell

logger = logging.getLogger(__name__)


def run_task(name: str, task: TaskConfig, cwd: Path | None = None) -> None:
    """Run a task's commands in order, stopping at the first failure.

    Raises:
        TaskError: If the task has no commands, or a command exits non-zero
            or is killed by a signal.
    """
    if not task.cmds:
        raise TaskError(f"Task '{name}' has no commands to run")

    for command in task.cmds:
        if not task.silent:
            print(f"$ {command}", file=sys.stderr)
        returncode = run_shell(command, cwd=cwd)
        if returncode < 0:
            raise TaskError(
                f"Task '{name}' command was terminated by {_signal_name(-returncode)}"
            )
        if returncode != 0:
            raise TaskError(f"Task '{name}' command exited with code {returncode}")
        logger.debug(f"Task '{name}': ok: {command}")


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def describe_task(name: str, task: TaskConfig) -> str:
    return task.desc or f"Run {name} task from {CONFIG_FILENAME}"


def format_task_list(config: OneFConfig | None) -> list[str]:
    """Lines for `fast tasks`."""
    tasks = (config.tasks if config else None) or {}
    if not tasks:
        return [f"No tasks defined in {CONFIG_FILENAME}."]

    width = max(len(name) for name in tasks)
    lines = [f"Tasks defined in {CONFIG_FILENAME}:", ""]
    for name, task in tasks.items():
        count = len(task.cmds)
        suffix = f" ({count} cmd{'' if count == 1 else 's'})"
        lines.append(f"  {name:<{width}}  {task.desc or '(no description)'}{suffix}")
    return lines
