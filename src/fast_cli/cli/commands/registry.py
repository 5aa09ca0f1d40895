"""
Command registry for the fast CLI.

Commands are registered with a name, handler function, and metadata. The
first registration of a name wins; later ones are ignored, so built-ins
registered at startup can never be replaced by 1f.toml tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator

from fast_cli.core.telemetry import Telemetry

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@dataclass(frozen=True)
class CommandCatalogEntry:
    """Display metadata for help output and the palette."""

    name: str
    description: str


@dataclass
class CommandEntry:
    """Entry for a registered command."""

    name: str
    handler: Callable[[], None]
    description: str
    usage: str | None = None
    help_text: str | None = None

    def run(self) -> None:
        self.handler()


class CommandRegistry:
    """Name -> command table, in registration order."""

    def __init__(self, telemetry: Telemetry | None = None):
        self.telemetry = telemetry or Telemetry()
        self._commands: dict[str, CommandEntry] = {}

    def register(
        self,
        name: str,
        description: str,
        handler: Callable[[], None],
        usage: str | None = None,
        help_text: str | None = None,
    ) -> bool:
        """Register a command unless the name is already taken.

        Args:
            name: Command name as typed on the command line
            description: One-line description for help and the palette
            handler: Zero-argument callable; raises on failure
            usage: Usage string (default: "<cli> <name>")
            help_text: Longer text for `<cli> <name> --help`

        Returns:
            True if registered, False if the name was already present.
        """
        if name in self._commands:
            return False

        def instrumented() -> None:
            self.telemetry.instrument(name, handler)

        self._commands[name] = CommandEntry(
            name=name,
            handler=instrumented,
            description=description,
            usage=usage,
            help_text=help_text,
        )
        return True

    def get(self, name: str) -> CommandEntry | None:
        return self._commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[CommandEntry]:
        return iter(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def all_commands(self) -> list[CommandEntry]:
        """All commands in registration order."""
        return list(self._commands.values())

    def catalog(self) -> list[CommandCatalogEntry]:
        return [CommandCatalogEntry(e.name, e.description) for e in self._commands.values()]


@dataclass(frozen=True)
class BuiltinCommand:
    """A built-in command definition, bound to a context at startup."""

    name: str
    description: str
    func: Callable[["AppContext"], None]
    usage: str | None = None
    help_text: str | None = None


class BuiltinTable:
    """Built-in commands, collected as their modules are imported."""

    def __init__(self):
        self._commands: dict[str, BuiltinCommand] = {}

    def register(
        self,
        name: str,
        description: str,
        usage: str | None = None,
        help_text: str | None = None,
    ) -> Callable:
        """Decorator to declare a built-in command.

        Example:
            @builtin_commands.register("version", "Print the current fast release")
            def cmd_version(ctx):
                print(ctx.identity.version)
        """
        def decorator(func: Callable[["AppContext"], None]) -> Callable:
            self._commands[name] = BuiltinCommand(
                name=name,
                description=description,
                func=func,
                usage=usage,
                help_text=help_text,
            )
            return func
        return decorator

    def __iter__(self) -> Iterator[BuiltinCommand]:
        return iter(self._commands.values())

    def names(self) -> list[str]:
        return list(self._commands)

    def install(self, registry: CommandRegistry, ctx: "AppContext") -> list[str]:
        """Register every built-in, bound to ctx. Returns the names registered."""
        installed = []
        for builtin in self:
            if registry.register(
                builtin.name,
                builtin.description,
                _bind(builtin.func, ctx),
                usage=builtin.usage,
                help_text=builtin.help_text,
            ):
                installed.append(builtin.name)
        return installed


def _bind(func: Callable[["AppContext"], None], ctx: "AppContext") -> Callable[[], None]:
    def handler() -> None:
        func(ctx)
    return handler


# Global built-in table
builtin_commands = BuiltinTable()
