"""
Workflows behind the built-in commands.

Each module does the real work for one command (or a family of them) and
knows nothing about argument parsing or help output.
"""
