"""Chat command - interactive prompt against the completion API."""
from __future__ import annotations

from typing import TYPE_CHECKING

from fast_cli.cli.commands.registry import builtin_commands
from fast_cli.config import DEFAULTS
from fast_cli.engine import ChatSession, CompletionClient

if TYPE_CHECKING:
    from fast_cli.cli.context import AppContext


@builtin_commands.register(
    "chat",
    "Open a ChatGPT-like TUI for quick requests",
    help_text="Open a chat-style TUI powered by GPT",
)
def cmd_chat(ctx: "AppContext") -> None:
    # prompt_toolkit is only needed here
    from fast_cli.cli.chat_repl import repl

    with CompletionClient.from_env(ctx.env, command=f"{ctx.command_name} chat") as client:
        session = ChatSession(
            client=client,
            model=DEFAULTS["chat_model"],
        )
        repl(session)
