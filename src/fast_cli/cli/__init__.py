"""
CLI module for the fast_cli package.

Provides the `fast` entry point, the command dispatcher and the palette.
"""

from fast_cli.cli.main import main, run

__all__ = [
    "main",
    "run",
]
