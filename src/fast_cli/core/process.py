"""
External process helpers.

Streaming runs inherit the terminal; captured runs buffer stdout in memory
up to a fixed cap and fail once it is exceeded.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Sequence

from fast_cli.config import DEFAULTS
from fast_cli.core.exceptions import ProcessError

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUFFER = DEFAULTS["max_capture_bytes"]


def command_exists(name: str) -> bool:
    """Check whether an executable is on PATH."""
    return shutil.which(name) is not None


def run_streaming(command: str, args: Sequence[str] = (), cwd: Path | None = None) -> None:
    """Run a command with inherited stdio, raising on a non-zero exit."""
    logger.debug(f"Running: {command} {' '.join(args)}")
    try:
        result = subprocess.run([command, *args], cwd=cwd)
    except OSError as e:
        raise ProcessError(command, list(args), message=f"Failed to start {command}: {e}") from e
    if result.returncode != 0:
        raise ProcessError(command, list(args), result.returncode)


def run_capture(
    command: str,
    args: Sequence[str] = (),
    input: str | None = None,
    cwd: Path | None = None,
    max_buffer: int = DEFAULT_MAX_BUFFER,
) -> str:
    """Run a command and return its stdout.

    Args:
        command: Executable to run
        args: Arguments
        input: Text written to the child's stdin
        cwd: Working directory
        max_buffer: Maximum stdout size in bytes

    Returns:
        Decoded stdout

    Raises:
        ProcessError: On a non-zero exit, a start failure, or too much output.
    """
    logger.debug(f"Capturing: {command} {' '.join(args)}")
    with tempfile.TemporaryFile() as stderr_file:
        try:
            proc = subprocess.Popen(
                [command, *args],
                stdin=subprocess.PIPE if input is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=stderr_file,
                cwd=cwd,
            )
        except OSError as e:
            raise ProcessError(command, list(args), message=f"Failed to start {command}: {e}") from e

        if input is not None:
            assert proc.stdin is not None
            try:
                proc.stdin.write(input.encode("utf-8"))
            except BrokenPipeError:
                pass
            finally:
                proc.stdin.close()

        assert proc.stdout is not None
        output = proc.stdout.read(max_buffer + 1)
        if len(output) > max_buffer:
            proc.kill()
            proc.wait()
            raise ProcessError(
                command,
                list(args),
                message=f"{command} output exceeded {max_buffer} bytes",
            )
        proc.stdout.close()
        returncode = proc.wait()

        stderr_file.seek(0)
        stderr = stderr_file.read().decode("utf-8", errors="replace")

    if returncode != 0:
        raise ProcessError(command, list(args), returncode, stderr=stderr)
    return output.decode("utf-8", errors="replace")


def run_shell(command: str, cwd: Path | None = None) -> int:
    """Run a shell command line via `bash -lc` with inherited stdio.

    Returns:
        The exit code; negative when the process was killed by a signal.
    """
    logger.debug(f"Shell: {command}")
    result = subprocess.run(["bash", "-lc", command], cwd=cwd)
    return result.returncode
