"""
Conversation state for the chat command.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from fast_cli.config import DEFAULTS
from fast_cli.engine.client import CompletionClient


@dataclass
class ChatMessage:
    role: str  # "user" or "assistant"
    content: str
    error: bool = False


@dataclass
class ChatSession:
    """Keeps history and sends prompts to the completion API."""

    client: CompletionClient
    model: str
    system_prompt: str = DEFAULTS["chat_system_prompt"]
    history: list[ChatMessage] = field(default_factory=list)

    def build_messages(self, prompt: str) -> list[dict[str, str]]:
        """System prompt, prior non-error turns, then the new prompt."""
        messages = [{"role": "system", "content": self.system_prompt}]
        for message in self.history:
            if message.error or not message.content.strip():
                continue
            messages.append({"role": message.role, "content": message.content})
        messages.append({"role": "user", "content": prompt})
        return messages

    def send(self, prompt: str) -> str:
        """Send a prompt and record both turns.

        A failed request is recorded as an error turn and re-raised; error
        turns are never sent back to the model.
        """
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Type a message to send")

        messages = self.build_messages(prompt)
        self.history.append(ChatMessage("user", prompt))
        try:
            reply = self.client.complete(messages, self.model)
        except Exception as e:
            self.history.append(ChatMessage("assistant", str(e), error=True))
            raise
        self.history.append(ChatMessage("assistant", reply))
        return reply

    def clear(self) -> None:
        self.history.clear()
