"""Rollout error taxonomy.

Every fatal condition derives from DeploymentError so the CLI layer can
report it uniformly. Per-service update failures are never raised on their
own; they are collected and surfaced together through
DeploymentFailedError once every sibling update has finished.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .executor import DeployOutcome


class DeploymentError(Exception):
    """Raised when a rollout operation fails."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigError(DeploymentError):
    """A configuration document is missing or malformed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to load {self.path}", reason)


class UnknownEnvironmentError(DeploymentError):
    """The requested environment is not defined."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = sorted(available)
        details = (
            f"Available environments: {', '.join(self.available)}"
            if self.available
            else "No environments are configured"
        )
        super().__init__(f"Invalid environment: {name}", details)


class ContextSwitchError(DeploymentError):
    """kubectl could not switch to, or reach, the target cluster."""

    def __init__(self, context: str, reason: str):
        self.context = context
        super().__init__(f"Failed to switch to cluster context '{context}'", reason)


class NoServicesSelectedError(DeploymentError):
    """The resolver produced an empty target set."""

    def __init__(self, skipped: Sequence[str] = ()):
        self.skipped = list(skipped)
        details = (
            f"Not found or disabled: {', '.join(self.skipped)}"
            if self.skipped
            else None
        )
        super().__init__("No enabled services selected", details)


class DeploymentFailedError(DeploymentError):
    """One or more services failed to update.

    Successful siblings stay applied; nothing is rolled back.
    """

    def __init__(self, failures: Sequence[DeployOutcome]):
        self.failures = list(failures)
        details = "\n".join(f"{o.service}: {o.detail}" for o in self.failures)
        super().__init__(
            f"{len(self.failures)} service(s) failed to deploy", details or None
        )
