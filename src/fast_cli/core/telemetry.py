"""Best-effort telemetry events.

Events go to a sink; the default sink appends JSON lines to
~/.fast/logs/telemetry.jsonl. Set FLOW_TELEMETRY=0 to turn it off.

A sink failure never reaches the caller: the first error replaces the sink
with NullTelemetrySink for the rest of the process.
"""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol, TypeVar

logger = logging.getLogger(__name__)

LEVELS = {"debug", "info", "warn", "error"}

TELEMETRY_ENV = "FLOW_TELEMETRY"
TELEMETRY_DEBUG_ENV = "FLOW_TELEMETRY_DEBUG"

_DISABLE_VALUES = {"0", "false", "no", "off"}

T = TypeVar("T")


def default_log_dir() -> Path:
    return Path.home() / ".fast" / "logs"


def telemetry_enabled(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get(TELEMETRY_ENV, "1").strip().lower() not in _DISABLE_VALUES


def telemetry_debug_enabled(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get(TELEMETRY_DEBUG_ENV, "").strip().lower() in {"1", "true"}


class TelemetrySink(Protocol):
    """Anything that can store a telemetry record."""

    def emit(self, record: dict[str, Any]) -> None: ...


class NullTelemetrySink:
    """Sink that drops every record."""

    def emit(self, record: dict[str, Any]) -> None:
        return None


class JsonlTelemetrySink:
    """Append records to a JSON-lines file."""

    def __init__(self, log_dir: Path | None = None):
        self.log_path = (log_dir or default_log_dir()) / "telemetry.jsonl"

    def emit(self, record: dict[str, Any]) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")


def serialize_value(value: Any) -> Any:
    """Make an arbitrary value JSON-safe for a telemetry payload."""
    if value is None:
        return {"value": None}
    if isinstance(value, (str, int, float, bool)):
        return {"value": value}
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError):
        return {"value": str(value)}


def serialize_error(error: BaseException | Any) -> Any:
    """Serialize an exception (name, message, cause) for telemetry."""
    if not isinstance(error, BaseException):
        return serialize_value(error)

    serialized: dict[str, Any] = {
        "name": type(error).__name__,
        "message": str(error),
    }
    cause = error.__cause__ or error.__context__
    if cause is not None and cause is not error:
        serialized["cause"] = serialize_error(cause)
    return serialized


class Telemetry:
    """Emits events with common metadata and never raises."""

    def __init__(
        self,
        sink: TelemetrySink | None = None,
        metadata: dict[str, Any] | None = None,
        debug: bool = False,
    ):
        self.sink: TelemetrySink = sink or NullTelemetrySink()
        self.metadata = dict(metadata or {})
        self.debug = debug
        self._notice_shown = False

    @classmethod
    def from_env(
        cls,
        metadata: dict[str, Any] | None = None,
        env: Mapping[str, str] | None = None,
        log_dir: Path | None = None,
    ) -> "Telemetry":
        """Build telemetry honouring FLOW_TELEMETRY and FLOW_TELEMETRY_DEBUG."""
        sink: TelemetrySink
        if telemetry_enabled(env):
            sink = JsonlTelemetrySink(log_dir)
        else:
            sink = NullTelemetrySink()
        return cls(sink, metadata=metadata, debug=telemetry_debug_enabled(env))

    @property
    def active(self) -> bool:
        return not isinstance(self.sink, NullTelemetrySink)

    def track(self, level: str, event: str, **fields: Any) -> None:
        """Record one event. Errors disable telemetry instead of propagating."""
        if not self.active:
            return
        if level not in LEVELS:
            level = "info"
        record: dict[str, Any] = {
            "ts": time.time(),
            "level": level,
            "event": event,
            **self.metadata,
            **fields,
        }
        try:
            self.sink.emit(record)
        except Exception as e:
            self._disable(e)

    def _disable(self, error: Exception) -> None:
        logger.debug(f"Telemetry disabled: {error}")
        if self.debug and not self._notice_shown:
            print(f"[telemetry] disabled: {error}", file=sys.stderr)
            self._notice_shown = True
        self.sink = NullTelemetrySink()

    def instrument(self, name: str, fn: Callable[[], T]) -> T:
        """Run fn, emitting start/success/failure events around it."""
        started = time.monotonic()
        self.track("info", "command_start", command=name)
        try:
            result = fn()
        except BaseException as e:
            self.track(
                "error",
                "command_failure",
                command=name,
                durationMs=_elapsed_ms(started),
                error=serialize_error(e),
            )
            raise
        self.track(
            "info",
            "command_success",
            command=name,
            durationMs=_elapsed_ms(started),
        )
        return result


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
