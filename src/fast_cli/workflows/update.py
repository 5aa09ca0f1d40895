"""`fast update`: refresh dependencies and pull."""

from __future__ import annotations

from pathlib import Path

from fast_cli.core.process import run_streaming

UPDATE_STEPS = [
    ("bun", ["update", "--latest"]),
    ("git", ["pull"]),
]


def run_update(cwd: Path | None = None) -> None:
    for command, args in UPDATE_STEPS:
        print(f"⬆️ {command} {' '.join(args)}")
        run_streaming(command, args, cwd=cwd)
    print("✔️ Dependencies and repository are up to date")
