"""
Exception classes for fast.
"""
from __future__ import annotations


class FastError(Exception):
    """Base exception for fast errors."""


class ConfigError(FastError):
    """1f.toml could not be read or parsed."""


class CommandError(FastError):
    """A command failed for a user-facing reason."""


class TaskError(CommandError):
    """A configured task failed or is invalid."""


class CommitError(CommandError):
    """The commit workflow could not produce or create a commit."""


class DatabaseError(CommandError):
    """The project database could not be located or cleared."""


class SecretValidationError(CommandError):
    """One or more required secrets are missing."""


class ProcessError(FastError):
    """An external process exited unsuccessfully."""

    def __init__(
        self,
        command: str,
        args: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
        message: str | None = None,
    ):
        self.command = command
        self.args_list = list(args or [])
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            joined = " ".join([command, *self.args_list])
            message = f"{joined} exited with code {returncode}"
        super().__init__(message)


class ModelError(FastError):
    """The completion API failed or returned nothing usable."""

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        self.status = status
        self.body = body
        super().__init__(message)
