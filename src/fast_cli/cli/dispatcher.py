"""
Argument dispatch and help output for the fast CLI.
"""

from __future__ import annotations

import logging
import sys
from typing import Callable, Sequence

from fast_cli.cli.commands import CommandCatalogEntry, CommandRegistry, builtin_commands, load_config_tasks
from fast_cli.cli.context import AppContext
from fast_cli.cli.palette import PaletteResult, select_command
from fast_cli.core.identity import Identity
from fast_cli.core.logging import log_exception
from fast_cli.core.telemetry import Telemetry

logger = logging.getLogger(__name__)

HELP_DESCRIPTION = "Help about any command"
HELP_FLAGS = ("--help", "-h")

Selector = Callable[[list[CommandCatalogEntry], str], PaletteResult]


def build_registry(ctx: AppContext) -> CommandRegistry:
    """Assemble the command table: help, built-ins, then 1f.toml tasks."""
    registry = CommandRegistry(ctx.telemetry)
    registry.register(
        "help",
        HELP_DESCRIPTION,
        lambda: print(render_root_help(ctx.identity, registry.catalog())),
        usage=f"{ctx.command_name} help [command]",
    )
    builtin_commands.install(registry, ctx)
    loaded = load_config_tasks(registry, ctx.config, ctx.cwd)
    logger.debug(f"Registered {len(registry)} commands ({len(loaded)} from config)")
    return registry


def render_root_help(identity: Identity, catalog: Sequence[CommandCatalogEntry]) -> str:
    name = identity.command_name
    width = max([16, *(len(entry.name) + 1 for entry in catalog)])
    lines = [
        identity.command_summary,
        "",
        "Usage:",
        f"  {name} [command]",
        "",
        f"Run `{name}` without arguments to open the interactive command palette.",
        "",
        "Available Commands:",
    ]
    lines.extend(f"  {entry.name:<{width}} {entry.description}" for entry in catalog)
    lines += [
        "",
        "Flags:",
        f"  -h, --help   help for {name}",
        "",
        f'Use "{name} [command] --help" for more information about a command.',
    ]
    return "\n".join(lines)


class Dispatcher:
    """Turns an argument vector into a command invocation and an exit code."""

    def __init__(
        self,
        registry: CommandRegistry,
        identity: Identity,
        telemetry: Telemetry | None = None,
        selector: Selector = select_command,
    ):
        self.registry = registry
        self.identity = identity
        self.telemetry = telemetry or registry.telemetry
        self.selector = selector

    def print_root_help(self) -> None:
        print(render_root_help(self.identity, self.registry.catalog()))

    def run_help(self) -> None:
        """Run the registered `help` command, or print root help directly."""
        entry = self.registry.get("help")
        if entry is None:
            self.print_root_help()
        else:
            entry.run()

    def print_command_help(self, name: str) -> bool:
        """Print help for one command. Returns False if it is unknown."""
        entry = self.registry.get(name)
        if entry is None:
            return False
        print(f"{entry.help_text or entry.description}\n")
        print("Usage:")
        print(f"  {entry.usage or f'{self.identity.command_name} {name}'}")
        return True

    def handle_top_level(self, args: list[str]) -> bool:
        """Handle help and version flags. Returns True if args were consumed."""
        primary = args[0] if args else ""
        if not primary or primary in (*HELP_FLAGS, "h"):
            self.print_root_help()
            return True

        if primary == "--version":
            print(self.identity.version)
            return True

        if primary == "help":
            topic = args[1] if len(args) > 1 else ""
            if not topic:
                self.run_help()
            elif not self.print_command_help(topic):
                print(f'Unknown help topic "{topic}"', file=sys.stderr)
            return True

        if len(args) > 1 and args[-1] in HELP_FLAGS:
            if not self.print_command_help(primary):
                self.print_root_help()
            return True

        return False

    def dispatch(self, args: Sequence[str]) -> int:
        """Run the command named by args.

        Returns:
            Process exit code.
        """
        args = list(args)

        if not args:
            selection = self.selector(self.registry.catalog(), self.identity.command_name)
            if selection.kind == "command":
                args = selection.args
            elif selection.kind == "cancel":
                return selection.code
            else:
                self.print_root_help()
                return 0

        if self.handle_top_level(args):
            return 0

        name = args[0]
        entry = self.registry.get(name)
        if entry is None:
            self.telemetry.track("warn", "command_not_found", command=name)
            print(f"Unknown command: {name}", file=sys.stderr)
            self.print_root_help()
            return 1

        if any(arg in HELP_FLAGS for arg in args[1:]):
            self.print_command_help(name)
            return 0

        try:
            entry.run()
        except Exception as e:
            print(log_exception(e, f"Command '{name}' failed"), file=sys.stderr)
            return 1
        return 0
