"""Configuration management for fast."""

from fast_cli.config.config import (
    CONFIG_FILENAME,
    DEFAULTS,
    AppConfig,
    ConfigManager,
    OneFConfig,
    SecretConfig,
    TaskConfig,
    clear_config_cache,
    get_config_manager,
    load_config,
    normalize_config,
    parse_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULTS",
    "AppConfig",
    "ConfigManager",
    "OneFConfig",
    "SecretConfig",
    "TaskConfig",
    "clear_config_cache",
    "get_config_manager",
    "load_config",
    "normalize_config",
    "parse_config",
]
