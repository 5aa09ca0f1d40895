"""
Built-in commands package.

Each command lives in its own subpackage and declares itself with
@builtin_commands.register(). The imports below fix the order in which
built-ins appear in help output and the palette.
"""

from fast_cli.cli.commands.builtins import commit  # noqa: F401
from fast_cli.cli.commands.builtins import db_open  # noqa: F401
from fast_cli.cli.commands.builtins import db_clear  # noqa: F401
from fast_cli.cli.commands.builtins import update  # noqa: F401
from fast_cli.cli.commands.builtins import setup  # noqa: F401
from fast_cli.cli.commands.builtins import tasks  # noqa: F401
from fast_cli.cli.commands.builtins import test  # noqa: F401
from fast_cli.cli.commands.builtins import chat  # noqa: F401
from fast_cli.cli.commands.builtins import version  # noqa: F401
from fast_cli.cli.commands.registry import builtin_commands

__all__ = ["builtin_commands"]
