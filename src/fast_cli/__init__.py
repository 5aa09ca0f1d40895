"""
fast_cli - a CLI to move faster in software projects.

Wraps everyday project actions behind a single ``fast`` command:

    fast commit      # LLM-written commit message, commit and push
    fast dbClear     # wipe the project SQLite database
    fast setup       # validate secrets from 1f.toml, run the setup task
    fast <task>      # any [tasks.<name>] defined in 1f.toml

Run ``fast`` with no arguments in a terminal to pick a command with fzf.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
