"""
Interactive command palette: pick a command with fzf when `fast` is run
without arguments in a terminal.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass, field
from typing import Iterable, Literal

from fast_cli.cli.commands.registry import CommandCatalogEntry
from fast_cli.core.process import command_exists

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteResult:
    """What the palette decided.

    kind:
        "command"  - run `args`
        "cancel"   - the user backed out; exit with `code`
        "fallback" - no selection possible; show root help
    """

    kind: Literal["command", "cancel", "fallback"]
    args: list[str] = field(default_factory=list)
    code: int = 0

    @classmethod
    def command(cls, name: str) -> "PaletteResult":
        return cls("command", args=[name])

    @classmethod
    def cancel(cls, code: int) -> "PaletteResult":
        return cls("cancel", code=code)

    @classmethod
    def fallback(cls) -> "PaletteResult":
        return cls("fallback")


def is_interactive() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def fzf_options(command_name: str) -> list[str]:
    return [
        "--height=40%",
        "--layout=reverse-list",
        "--border=rounded",
        "--prompt",
        f"{command_name}> ",
        "--info=inline",
        "--no-multi",
        "--header",
        f"Select an {command_name} command (Enter to run, ESC to cancel)",
    ]


def format_catalog(catalog: Iterable[CommandCatalogEntry]) -> str:
    return "".join(f"{entry.name}\t{entry.description}\n" for entry in catalog)


def parse_selection(returncode: int, stdout: str) -> PaletteResult:
    """Interpret fzf's exit code and output."""
    if returncode != 0:
        return PaletteResult.cancel(returncode)

    first_line = next((line for line in stdout.splitlines() if line.strip()), None)
    if first_line is None:
        return PaletteResult.fallback()
    selection = first_line.split("\t", 1)[0].strip()
    if not selection:
        return PaletteResult.fallback()
    return PaletteResult.command(selection)


def select_command(
    catalog: list[CommandCatalogEntry],
    command_name: str,
    interactive: bool | None = None,
) -> PaletteResult:
    """Offer the catalog in fzf and return the user's choice.

    Falls back to root help when not attached to a terminal, when fzf is
    missing, or when it cannot be started.
    """
    if interactive is None:
        interactive = is_interactive()
    if not interactive or not command_exists("fzf"):
        return PaletteResult.fallback()

    try:
        proc = subprocess.run(
            ["fzf", *fzf_options(command_name)],
            input=format_catalog(catalog),
            stdout=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        logger.debug(f"fzf failed to start: {e}")
        return PaletteResult.fallback()

    return parse_selection(proc.returncode, proc.stdout or "")
