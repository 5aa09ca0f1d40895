"""
Commit workflow: stage everything, ask the model for a message, commit, push.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from fast_cli.config import DEFAULTS
from fast_cli.core.exceptions import CommitError, ProcessError
from fast_cli.core.process import run_capture, run_streaming

logger = logging.getLogger(__name__)

MAX_COMMIT_DIFF_CHARS = DEFAULTS["max_commit_diff_chars"]

COMMIT_SYSTEM_PROMPT = (
    "You are an expert software engineer who writes clear, concise git commit "
    "messages. Use imperative mood, keep the subject line under 72 characters, "
    "and include an optional body with bullet points if helpful. Never wrap the "
    "message in quotes. Never include secrets, credentials, or file contents "
    "from .env files, environment variables, keys, or other sensitive data, "
    "even if they appear in the diff."
)

# (system_prompt, user_prompt) -> message
MessageGenerator = Callable[[str, str], str]


@dataclass
class CommitPayload:
    """A formatted commit message ready for `git commit`."""

    message: str
    paragraphs: list[str]


def truncate_diff(diff: str, limit: int = MAX_COMMIT_DIFF_CHARS) -> tuple[str, bool]:
    """Cap a diff at `limit` characters.

    Returns:
        Tuple of (diff text, whether it was truncated)
    """
    if len(diff) <= limit:
        return diff, False
    marker = f"\n\n[Diff truncated to the first {limit} characters]"
    return diff[:limit] + marker, True


def build_commit_prompt(diff: str, status: str = "", truncated: bool = False) -> str:
    """Build the user prompt sent alongside COMMIT_SYSTEM_PROMPT."""
    prompt = "Write a git commit message for the staged changes.\n\nGit diff:\n"
    prompt += diff
    if truncated:
        prompt += "\n\n[Diff truncated to fit within prompt]"
    status = status.strip()
    if status:
        prompt += f"\n\nGit status --short:\n{status}"
    return prompt


def trim_matching_quotes(text: str) -> str:
    """Remove one layer of wrapping '...' or "..." quotes."""
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def split_paragraphs(message: str) -> list[str]:
    """Split a message into paragraphs on blank lines.

    Trailing spaces and tabs are stripped from every line; consecutive
    non-blank lines stay together in one paragraph.
    """
    paragraphs: list[str] = []
    current: list[str] = []

    for line in re.split(r"\r?\n", message):
        if not line.strip():
            if current:
                paragraphs.append("\n".join(current).rstrip())
                current = []
            continue
        current.append(line.rstrip(" \t"))

    if current:
        paragraphs.append("\n".join(current).rstrip())
    return paragraphs


def format_commit_message(raw: str) -> CommitPayload:
    """Turn a raw model reply into a CommitPayload.

    Raises:
        CommitError: If nothing is left after trimming.
    """
    message = trim_matching_quotes(raw.strip())
    if not message.strip():
        raise CommitError("Commit message is empty")

    paragraphs = split_paragraphs(message)
    if not paragraphs:
        raise CommitError("Commit message is empty after formatting")
    return CommitPayload(message=message, paragraphs=paragraphs)


# -----------------------------
# git plumbing
# -----------------------------

def ensure_git_repository(cwd: Path | None = None) -> None:
    try:
        inside = run_capture("git", ["rev-parse", "--is-inside-work-tree"], cwd=cwd)
    except ProcessError as e:
        raise CommitError("Not inside a git repository") from e
    if inside.strip() != "true":
        raise CommitError("Not inside a git repository")


def staged_diff(cwd: Path | None = None) -> str:
    """Stage all changes and return `git diff --cached`."""
    run_streaming("git", ["add", "."], cwd=cwd)
    return run_capture("git", ["diff", "--cached"], cwd=cwd)


def short_status(cwd: Path | None = None) -> str:
    """`git status --short`, or "" if it fails."""
    try:
        return run_capture("git", ["status", "--short"], cwd=cwd)
    except ProcessError as e:
        logger.debug(f"git status failed: {e}")
        return ""


def prepare_commit(generate: MessageGenerator, cwd: Path | None = None) -> CommitPayload:
    """Stage changes and produce a formatted commit message.

    Args:
        generate: Callable taking (system_prompt, user_prompt) and returning text
        cwd: Repository directory

    Raises:
        CommitError: Nothing staged, or the message is empty.
    """
    diff = staged_diff(cwd)
    if not diff.strip():
        raise CommitError("No staged changes to commit; stage files with git add")

    truncated_diff, truncated = truncate_diff(diff)
    if truncated:
        logger.debug(f"Diff truncated from {len(diff)} characters")
    prompt = build_commit_prompt(truncated_diff, short_status(cwd), truncated)

    return format_commit_message(generate(COMMIT_SYSTEM_PROMPT, prompt))


def commit_args(payload: CommitPayload) -> list[str]:
    """`git commit` arguments with one -m per paragraph."""
    args = ["commit"]
    for paragraph in payload.paragraphs:
        args.extend(["-m", paragraph])
    return args


def commit_with_payload(payload: CommitPayload, cwd: Path | None = None) -> None:
    run_streaming("git", commit_args(payload), cwd=cwd)


def push(cwd: Path | None = None) -> None:
    run_streaming("git", ["push"], cwd=cwd)
