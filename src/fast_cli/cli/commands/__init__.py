"""
Command system for the fast CLI.

Commands come from two places, registered in this order:
1. Built-ins (fast_cli.cli.commands.builtins)
2. [tasks.*] entries in 1f.toml, for names not already taken
"""

from __future__ import annotations

from fast_cli.cli.commands.builtins import builtin_commands
from fast_cli.cli.commands.loader import load_config_tasks
from fast_cli.cli.commands.registry import (
    CommandCatalogEntry,
    CommandEntry,
    CommandRegistry,
)

__all__ = [
    "CommandCatalogEntry",
    "CommandEntry",
    "CommandRegistry",
    "builtin_commands",
    "load_config_tasks",
]
