"""
Configuration management for fast.

Project settings live in a 1f.toml file at the root of the working directory:

    [app]
    name = "linsa"
    description = "linsa is CLI for the linsa repo"

    [secrets.OPENAI_API_KEY]
    label = "OpenAI"
    required = true

    [tasks.dev]
    desc = "Start the dev server"
    cmds = ["bun install", "bun dev"]
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from fast_cli.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "1f.toml"

# Runtime defaults - single source of truth
DEFAULTS = {
    "command_name": "fast",
    "summary_suffix": "is CLI to move faster in software projects",
    "commit_model": "openai/gpt-5.1-instant",
    "chat_model": "gpt-4.1-mini",
    "chat_system_prompt": (
        "You are the fast CLI assistant. Help users move faster in their "
        "projects with concise, actionable answers."
    ),
    "api_base_url": "https://api.openai.com/v1",
    "api_key_env": "OPENAI_API_KEY",
    "max_commit_diff_chars": 12_000,
    "max_capture_bytes": 1024 * 1024 * 50,
    "database_path": (".blade", "state", "databases", "main", "db.sqlite"),
    "database_app": "TablePlus",
}


class AppConfig(BaseModel):
    """The [app] section: identity overrides for the CLI."""

    model_config = {"extra": "ignore"}

    name: Optional[str] = Field(default=None, description="Command name shown in help")
    description: Optional[str] = Field(default=None, description="One-line summary")
    version: Optional[str] = Field(default=None, description="Reported version")

    @field_validator("name", "description", "version", mode="before")
    @classmethod
    def _ignore_non_strings(cls, value: Any) -> Optional[str]:
        # `version = 2` is skipped rather than failing the whole file
        return value if isinstance(value, str) else None


class SecretConfig(BaseModel):
    """A [secrets.<ENV_NAME>] entry."""

    model_config = {"extra": "ignore"}

    label: Optional[str] = Field(default=None, description="Human-readable name")
    required: bool = Field(default=False, description="Fail setup when unset")
    description: Optional[str] = Field(default=None, description="Where to get it")
    default: Optional[str] = Field(default=None, description="Value used when unset")


class TaskConfig(BaseModel):
    """A [tasks.<name>] entry."""

    model_config = {"extra": "ignore"}

    desc: Optional[str] = Field(default=None, description="Description for help")
    silent: bool = Field(default=False, description="Do not echo commands")
    cmds: list[str] = Field(default_factory=list, description="Shell commands, run in order")


class OneFConfig(BaseModel):
    """Parsed contents of 1f.toml."""

    model_config = {"extra": "ignore"}

    app: Optional[AppConfig] = None
    secrets: Optional[dict[str, SecretConfig]] = None
    tasks: Optional[dict[str, TaskConfig]] = None


def normalize_config(data: Any) -> OneFConfig:
    """Validate raw TOML data, dropping sections that are not tables."""
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: expected a table")

    cleaned = {
        key: data[key]
        for key in ("app", "secrets", "tasks")
        if isinstance(data.get(key), dict)
    }
    try:
        return OneFConfig.model_validate(cleaned)
    except ValidationError as e:
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}") from e


def parse_config(raw_toml: str) -> OneFConfig:
    """Parse 1f.toml text into a OneFConfig."""
    try:
        data = tomllib.loads(raw_toml)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid {CONFIG_FILENAME}: {e}") from e
    return normalize_config(data)


class ConfigManager:
    """Loads 1f.toml and caches the result per working directory."""

    def __init__(self):
        self._cache: dict[Path, Optional[OneFConfig]] = {}

    def load(self, cwd: Path | None = None, use_cache: bool = True) -> Optional[OneFConfig]:
        """Load configuration for a directory.

        Args:
            cwd: Directory containing 1f.toml (default: current directory)
            use_cache: Reuse a previous result for the same directory

        Returns:
            OneFConfig, or None if the directory has no 1f.toml.
        """
        cwd = (cwd or Path.cwd()).resolve()
        if use_cache and cwd in self._cache:
            return self._cache[cwd]

        config_path = cwd / CONFIG_FILENAME
        try:
            raw = config_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No {CONFIG_FILENAME} in {cwd}")
            config = None
        else:
            config = parse_config(raw)
            logger.debug(f"Loaded {config_path}")

        if use_cache:
            self._cache[cwd] = config
        return config

    def clear(self) -> None:
        """Forget all cached configurations."""
        self._cache.clear()


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def load_config(cwd: Path | None = None, use_cache: bool = True) -> Optional[OneFConfig]:
    """Load 1f.toml for a directory through the shared manager."""
    return get_config_manager().load(cwd, use_cache=use_cache)


def clear_config_cache() -> None:
    """Clear the shared manager's cache."""
    get_config_manager().clear()
