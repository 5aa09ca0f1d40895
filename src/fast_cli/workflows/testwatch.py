"""
`fast test`: pick a TypeScript test with fzf and run it under `bun --watch`.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from fast_cli.core.exceptions import CommandError, ProcessError
from fast_cli.core.process import command_exists

FZF_INSTALL_HINT = (
    "Command 'fzf' is required for fuzzy selection. "
    "Install it from https://github.com/junegunn/fzf."
)

# fzf: 1 = no match, 130 = interrupted
_FZF_CANCEL_CODES = {1, 130}


def find_tests_dir(root: Path) -> Path:
    tests_dir = root / "tests"
    if not tests_dir.exists():
        raise CommandError("tests/ directory not found at repository root.")
    if not tests_dir.is_dir():
        raise CommandError("tests/ exists but is not a directory.")
    return tests_dir


def collect_test_files(tests_dir: Path, root: Path) -> list[str]:
    """All *.ts files under tests_dir, relative to root, sorted."""
    return sorted(
        str(path.relative_to(root))
        for path in tests_dir.rglob("*.ts")
        if path.is_file()
    )


def select_test_file(files: list[str]) -> str:
    """Let the user pick a file with fzf.

    Returns:
        The chosen path, or "" when the selection was cancelled.
    """
    proc = subprocess.run(
        ["fzf", "--prompt=test> ", "--height=40%", "--reverse"],
        input="\n".join(files),
        stdout=subprocess.PIPE,
        text=True,
    )
    if proc.returncode == 0:
        return proc.stdout.strip()
    if proc.returncode in _FZF_CANCEL_CODES:
        return ""
    raise ProcessError("fzf", returncode=proc.returncode)


def watch_test(selected: str, cwd: Path | None = None) -> None:
    """Run `bun --watch <file>`; a signal exit (Ctrl-C) counts as success."""
    proc = subprocess.run(["bun", "--watch", selected], cwd=cwd)
    if proc.returncode == 0 or proc.returncode < 0:
        return
    raise ProcessError(
        "bun",
        ["--watch", selected],
        proc.returncode,
        message=f"bun --watch exited with code {proc.returncode} for {selected}",
    )


def run_test_watch(root: Path) -> None:
    tests_dir = find_tests_dir(root)
    files = collect_test_files(tests_dir, root)
    if not files:
        print("No TypeScript test files found under tests/.")
        return

    if not command_exists("fzf"):
        raise CommandError(FZF_INSTALL_HINT)

    selected = select_test_file(files)
    if not selected:
        print("Selection cancelled.")
        return

    print(f"Watching {selected}")
    watch_test(selected, cwd=root)
