"""
Command identity: the name, summary and version shown in help output.

Resolved once at startup. Each field is taken from the highest-precedence
source that sets it:

    FLOW_COMMAND_NAME / FLOW_COMMAND_SUMMARY  >  1f.toml [app]  >  argv[0]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Mapping

from fast_cli import __version__
from fast_cli.config import DEFAULTS

if TYPE_CHECKING:
    from fast_cli.config import AppConfig

NAME_ENV = "FLOW_COMMAND_NAME"
SUMMARY_ENV = "FLOW_COMMAND_SUMMARY"


@dataclass(frozen=True)
class Identity:
    """Process-wide command identity."""

    command_name: str
    command_summary: str
    version: str


def default_summary(name: str) -> str:
    return f"{name} {DEFAULTS['summary_suffix']}"


def lookup_non_empty(env: Mapping[str, str], key: str) -> str | None:
    """Return the trimmed value of an env var, or None if unset/blank."""
    raw = env.get(key)
    if not raw:
        return None
    trimmed = raw.strip()
    return trimmed or None


def command_base_name(candidate: str) -> str:
    """Reduce a path or name to its basename without extension.

    Examples:
        "/usr/local/bin/fast"  -> "fast"
        "scripts/fast.py"      -> "fast"
        "linsa"                -> "linsa"
    """
    trimmed = candidate.strip()
    base = PurePath(trimmed).stem
    return base or trimmed


class _Draft:
    """Mutable identity under construction, with per-field locks."""

    def __init__(self):
        self.name = DEFAULTS["command_name"]
        self.summary = default_summary(self.name)
        self.version = __version__
        self.name_locked = False
        self.summary_locked = False
        self.version_locked = False

    def apply_name(self, candidate: str | None, lock: bool = False) -> bool:
        if self.name_locked or not candidate or not candidate.strip():
            return False
        base = command_base_name(candidate)
        if base == "__main__":
            base = DEFAULTS["command_name"]
        self.name = base
        self.name_locked = lock
        return True

    def apply_summary(self, summary: str | None, lock: bool = False) -> bool:
        if self.summary_locked or not summary:
            return False
        self.summary = summary
        self.summary_locked = lock
        return True

    def apply_version(self, version: str | None, lock: bool = False) -> bool:
        if self.version_locked or not version:
            return False
        self.version = version
        self.version_locked = lock
        return True

    def freeze(self) -> Identity:
        return Identity(
            command_name=self.name,
            command_summary=self.summary,
            version=self.version,
        )


def _clean(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def resolve_identity(
    env: Mapping[str, str],
    argv0: str | None = None,
    app: "AppConfig | None" = None,
) -> Identity:
    """Resolve the command identity from every source.

    Args:
        env: Environment mapping (FLOW_COMMAND_NAME, FLOW_COMMAND_SUMMARY)
        argv0: Invocation path of the program
        app: The [app] section of 1f.toml, if any

    Returns:
        Frozen Identity
    """
    draft = _Draft()

    # Environment: locks whatever it sets
    draft.apply_summary(lookup_non_empty(env, SUMMARY_ENV), lock=True)
    draft.apply_name(lookup_non_empty(env, NAME_ENV), lock=True)

    # 1f.toml [app]: locks over the invocation name
    app_description = _clean(app.description) if app else None
    if app is not None:
        draft.apply_name(_clean(app.name), lock=True)
        draft.apply_summary(app_description, lock=True)
        draft.apply_version(_clean(app.version), lock=True)

    # Invocation name
    draft.apply_name(argv0)

    # An unlocked summary follows the winning name
    if not draft.summary_locked:
        draft.summary = default_summary(draft.name)

    return draft.freeze()
