"""
Core module for the fast_cli package.

Provides exceptions, identity resolution, telemetry, process helpers and
logging setup. Submodules are imported directly; only exceptions are
re-exported here.
"""

from fast_cli.core.exceptions import (
    CommandError,
    CommitError,
    ConfigError,
    DatabaseError,
    FastError,
    ModelError,
    ProcessError,
    SecretValidationError,
    TaskError,
)

__all__ = [
    "FastError",
    "ConfigError",
    "CommandError",
    "TaskError",
    "CommitError",
    "DatabaseError",
    "SecretValidationError",
    "ProcessError",
    "ModelError",
]
