"""
Immutable per-run context handed to every command handler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from fast_cli.config import OneFConfig
from fast_cli.core.identity import Identity
from fast_cli.core.telemetry import Telemetry


@dataclass(frozen=True)
class AppContext:
    """Everything a command needs to know about this invocation."""

    identity: Identity
    config: Optional[OneFConfig]
    cwd: Path
    env: Mapping[str, str] = field(default_factory=dict)
    telemetry: Telemetry = field(default_factory=Telemetry)

    @property
    def command_name(self) -> str:
        return self.identity.command_name
