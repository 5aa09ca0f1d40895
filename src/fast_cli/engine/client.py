"""
Completion client for OpenAI-compatible chat completion APIs.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Mapping

import httpx

from fast_cli.config import DEFAULTS
from fast_cli.core.exceptions import ModelError
from fast_cli.core.identity import lookup_non_empty

logger = logging.getLogger(__name__)

BASE_URL_ENV = "OPENAI_BASE_URL"


def resolve_model_id(model: str) -> str:
    """Strip a provider prefix: "openai/gpt-5.1-instant" -> "gpt-5.1-instant"."""
    return model[len("openai/"):] if model.startswith("openai/") else model


def resolve_api_key(env: Mapping[str, str] | None = None, command: str = "fast commit") -> str:
    """Read the API key from the environment or fail with a hint."""
    env = os.environ if env is None else env
    key_env = DEFAULTS["api_key_env"]
    value = lookup_non_empty(env, key_env)
    if not value:
        raise ModelError(f"{key_env} is not set; export it before running {command}")
    return value


class CompletionClient:
    """Minimal client for POST /chat/completions."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: httpx.Timeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = (base_url or DEFAULTS["api_base_url"]).rstrip("/")
        self._client = httpx.Client(
            timeout=timeout or httpx.Timeout(30.0, read=300.0),
            transport=transport,
            follow_redirects=True,
        )

    @classmethod
    def from_env(
        cls,
        env: Mapping[str, str] | None = None,
        command: str = "fast commit",
        transport: httpx.BaseTransport | None = None,
    ) -> "CompletionClient":
        env = os.environ if env is None else env
        return cls(
            resolve_api_key(env, command),
            base_url=lookup_non_empty(env, BASE_URL_ENV),
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "CompletionClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def complete(self, messages: list[dict[str, str]], model: str) -> str:
        """Send messages and return the trimmed assistant reply.

        Raises:
            ModelError: On transport errors, non-2xx responses, or an empty reply.
        """
        payload: dict[str, Any] = {
            "model": resolve_model_id(model),
            "messages": messages,
        }
        logger.debug(f"POST {self.base_url}/chat/completions model={payload['model']}")
        try:
            response = self._client.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        except httpx.HTTPError as e:
            raise ModelError(f"Model request failed: {e}") from e

        if response.is_error:
            raise ModelError(
                f"Model error: {response.status_code} {response.text}",
                status=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ModelError("Model returned invalid JSON", status=response.status_code) from e

        content = _extract_content(data)
        if not isinstance(content, str) or not content.strip():
            raise ModelError("Model returned an empty response", status=response.status_code)
        return content.strip()

    def generate(self, system_prompt: str, user_prompt: str, model: str) -> str:
        """Single-turn completion with a system and a user prompt."""
        return self.complete(
            [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            model,
        )


def _extract_content(data: Any) -> Any:
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not isinstance(message, dict):
        return None
    return message.get("content")
