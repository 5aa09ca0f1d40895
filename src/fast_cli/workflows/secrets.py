"""
Secret validation for `fast setup`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from fast_cli.config import CONFIG_FILENAME, OneFConfig
from fast_cli.core.exceptions import SecretValidationError
from fast_cli.core.identity import lookup_non_empty


class SecretStatus(str, Enum):
    SET = "set"
    DEFAULT = "default"
    MISSING = "missing"
    OPTIONAL = "optional"


@dataclass
class SecretReport:
    """Outcome of checking every declared secret."""

    lines: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    statuses: dict[str, SecretStatus] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.missing

    def raise_for_missing(self) -> None:
        if self.missing:
            raise SecretValidationError(
                f"Missing required secrets: {', '.join(self.missing)}"
            )


def validate_secrets(config: OneFConfig, env: Mapping[str, str]) -> SecretReport:
    """Check each [secrets.*] entry against the environment.

    Every secret is reported; all missing required ones are collected
    rather than stopping at the first.
    """
    report = SecretReport()
    secrets = config.secrets or {}
    if not secrets:
        report.lines.append(f"No secrets defined in {CONFIG_FILENAME}.")
        return report

    for env_name, secret in secrets.items():
        label = secret.label or env_name
        if lookup_non_empty(env, env_name):
            report.lines.append(f"✔️ {label} ({env_name}) is set")
            report.statuses[env_name] = SecretStatus.SET
            continue

        if not secret.required:
            report.lines.append(f"• {label} ({env_name}) not set (optional)")
            report.statuses[env_name] = SecretStatus.OPTIONAL
        elif secret.default is not None:
            report.lines.append(
                f"⚠️ {label} ({env_name}) missing; default '{secret.default}' will be used"
            )
            report.statuses[env_name] = SecretStatus.DEFAULT
        else:
            description = secret.description or "no description provided"
            report.lines.append(f"❌ {label} ({env_name}) is required: {description}")
            report.statuses[env_name] = SecretStatus.MISSING
            report.missing.append(env_name)

    return report
