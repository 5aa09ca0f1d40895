"""Completion API client and chat state."""

from fast_cli.engine.chat import ChatMessage, ChatSession
from fast_cli.engine.client import CompletionClient, resolve_api_key, resolve_model_id

__all__ = [
    "ChatMessage",
    "ChatSession",
    "CompletionClient",
    "resolve_api_key",
    "resolve_model_id",
]
