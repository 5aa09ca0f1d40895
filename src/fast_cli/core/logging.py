"""Logging configuration for fast.

Debug output goes to stderr when FLOW_DEBUG is set; otherwise only
warnings from the package are shown.
"""
from __future__ import annotations

import logging
import os
import sys
import traceback
from typing import Mapping, Optional

PACKAGE_LOGGER = "fast_cli"
DEBUG_ENV = "FLOW_DEBUG"

_TRUTHY = {"1", "true", "yes", "on"}

# Module-level state
_stderr_handler: Optional[logging.Handler] = None


def debug_enabled(env: Mapping[str, str] | None = None) -> bool:
    """Check whether FLOW_DEBUG asks for debug logging."""
    env = os.environ if env is None else env
    return env.get(DEBUG_ENV, "").strip().lower() in _TRUTHY


def configure_logging(env: Mapping[str, str] | None = None) -> logging.Logger:
    """Configure the package logger.

    Safe to call more than once; the stderr handler is replaced, not stacked.

    Args:
        env: Environment to read FLOW_DEBUG from (default os.environ)

    Returns:
        The package logger
    """
    global _stderr_handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _stderr_handler is not None:
        logger.removeHandler(_stderr_handler)

    level = logging.DEBUG if debug_enabled(env) else logging.WARNING
    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setLevel(level)
    _stderr_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logger.addHandler(_stderr_handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


def log_exception(error: BaseException, context: str = "") -> str:
    """Log an exception with its traceback at debug level.

    Args:
        error: The exception to log
        context: What was happening when it was raised

    Returns:
        Short message suitable for printing to the user
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    error_msg = str(error) or type(error).__name__

    tb_str = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    logger.debug(f"{context or 'error'}\n{tb_str}")

    return error_msg
