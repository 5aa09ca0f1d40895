#!/usr/bin/env python3
"""
CLI entry point for the fast command.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from fast_cli.cli.context import AppContext
from fast_cli.cli.dispatcher import Dispatcher, build_registry
from fast_cli.cli.palette import is_interactive
from fast_cli.config import load_config
from fast_cli.core.exceptions import ConfigError
from fast_cli.core.identity import resolve_identity
from fast_cli.core.logging import configure_logging
from fast_cli.core.telemetry import Telemetry


def create_context(
    argv0: str | None = None,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    telemetry: Telemetry | None = None,
) -> AppContext:
    """Load 1f.toml, resolve identity and set up telemetry.

    Raises:
        ConfigError: If 1f.toml exists but cannot be parsed.
    """
    env = os.environ if env is None else env
    cwd = cwd or Path.cwd()
    config = load_config(cwd)
    identity = resolve_identity(env, argv0, config.app if config else None)
    if telemetry is None:
        telemetry = Telemetry.from_env(
            metadata={"commandName": identity.command_name, "version": identity.version},
            env=env,
        )
    return AppContext(identity=identity, config=config, cwd=cwd, env=env, telemetry=telemetry)


def run(argv: Sequence[str], argv0: str | None = None, ctx: AppContext | None = None) -> int:
    """Build the command table and dispatch argv. Returns the exit code."""
    if ctx is None:
        try:
            ctx = create_context(argv0)
        except ConfigError as e:
            print(str(e), file=sys.stderr)
            return 1

    ctx.telemetry.track("info", "cli_invocation", args=list(argv), tty=is_interactive())
    registry = build_registry(ctx)
    return Dispatcher(registry, ctx.identity, ctx.telemetry).dispatch(argv)


def main():
    """Main entry point for the fast CLI."""
    configure_logging()
    try:
        code = run(sys.argv[1:], argv0=sys.argv[0])
    except KeyboardInterrupt:
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    main()
