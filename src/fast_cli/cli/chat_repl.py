"""
Chat REPL for `fast chat`, built on prompt_toolkit.

Enter sends, ESC / Ctrl+C / Ctrl+D exit.
"""

from __future__ import annotations

import sys
import threading
import time
from typing import TYPE_CHECKING

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style

if TYPE_CHECKING:
    from fast_cli.engine import ChatSession


# ANSI escape codes for colored text
GREY = "\033[90m"
RED = "\033[91m"
WHITE = "\033[97m"
RESET = "\033[0m"

GREETING = "Ask me anything about your work. Press Enter to send, ESC to exit."


class ReplyIndicator:
    """Single-line "waiting for <model>" indicator with elapsed seconds.

    Used as a context manager around a blocking request; the line is
    cleared on exit so the reply starts on a clean line.
    """

    FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
    INTERVAL = 0.1

    def __init__(self, model: str, stream=None):
        self.model = model
        self.stream = stream if stream is not None else sys.stdout
        self._done = threading.Event()
        self._thread: threading.Thread | None = None
        self._width = 0

    def __enter__(self) -> "ReplyIndicator":
        self._done.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self._done.set()
        if self._thread:
            self._thread.join(timeout=self.INTERVAL * 2)
        if self._width:
            self.stream.write("\r" + " " * self._width + "\r")
            self.stream.flush()

    def _run(self) -> None:
        started = time.monotonic()
        tick = 0
        while not self._done.is_set():
            frame = self.FRAMES[tick % len(self.FRAMES)]
            line = f"{GREY}{frame} waiting for {self.model} {time.monotonic() - started:.0f}s{RESET}"
            self.stream.write("\r" + line)
            self.stream.flush()
            self._width = max(self._width, len(line))
            tick += 1
            self._done.wait(self.INTERVAL)


def get_style() -> Style:
    return Style.from_dict({
        "prompt": "#85e89d bold",
        "bottom-toolbar": "#868e96 bg:#111111",
    })


def create_key_bindings() -> KeyBindings:
    bindings = KeyBindings()

    @bindings.add("escape", eager=True)
    @bindings.add("c-c")
    def _(event):
        """Leave the chat."""
        event.app.exit(exception=EOFError)

    return bindings


def repl(chat: "ChatSession") -> None:
    """Run the chat loop until the user exits.

    Failed requests are shown in red and the loop continues.
    """
    status = {"line": "Ready"}

    def get_bottom_toolbar():
        return HTML(
            f" <b>{chat.model}</b> | {status['line']} "
            "| Enter to send · ESC to exit"
        )

    session: PromptSession = PromptSession(
        history=InMemoryHistory(),
        style=get_style(),
        key_bindings=create_key_bindings(),
        bottom_toolbar=get_bottom_toolbar,
    )

    print(f"{GREY}assistant{RESET}")
    print(f"{WHITE}{GREETING}{RESET}\n")

    while True:
        try:
            user_input = session.prompt([("class:prompt", "you: ")]).strip()
        except EOFError:
            break

        if not user_input:
            status["line"] = "Type a message to send"
            continue

        status["line"] = "Sending..."
        print(f"{GREY}assistant{RESET}")
        try:
            with ReplyIndicator(chat.model):
                reply = chat.send(user_input)
        except Exception as e:
            print(f"{RED}{str(e) or 'Failed to fetch response from the model'}{RESET}\n", file=sys.stderr)
            status["line"] = "Request failed"
            continue
        print(f"{WHITE}{reply}{RESET}\n")
        status["line"] = "Response received"
