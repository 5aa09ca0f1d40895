"""Commit commands - LLM-written message, commit, push."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.config import DEFAULTS
from fast_cli.engine.client import CompletionClient
from fast_cli.workflows.commit import (
    CommitPayload,
    commit_with_payload,
    ensure_git_repository,
    prepare_commit,
    push,
)

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext

DESCRIPTION = "Generate a commit message with GPT-5 nano, create the commit, and push it"


def print_proposed_message(message: str) -> None:
    print(f"Proposed commit message:\n{message}\n")


def print_commit_success(payload: CommitPayload) -> None:
    if payload.paragraphs:
        print(f"✔️ Committed with message: {payload.paragraphs[0]}")


def run_commit_push(ctx: "AppContext") -> None:
    ensure_git_repository(ctx.cwd)
    command = f"{ctx.command_name} commit"
    with CompletionClient.from_env(ctx.env, command=command) as client:
        payload = prepare_commit(
            lambda system, user: client.generate(system, user, DEFAULTS["commit_model"]),
            cwd=ctx.cwd,
        )
    print_proposed_message(payload.message)
    commit_with_payload(payload, cwd=ctx.cwd)
    print_commit_success(payload)
    push(cwd=ctx.cwd)
    print("✔️ Pushed")


@builtin_commands.register("commit", DESCRIPTION)
def cmd_commit(ctx: "AppContext") -> None:
    run_commit_push(ctx)


@builtin_commands.register("commitPush", DESCRIPTION)
def cmd_commit_push(ctx: "AppContext") -> None:
    run_commit_push(ctx)
