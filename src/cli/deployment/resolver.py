"""Service selection and version resolution.

Turns a scope filter (comma separated service or group names, empty for
"everything enabled") and an optional version override into the mapping
of service name to target version for one invocation.

Precedence when a service is reachable through several entries does not
depend on the order of the scope tokens: single services are applied
first, then groups in document order, and a later entry overrides an
earlier one.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from loguru import logger

from .errors import NoServicesSelectedError
from .service_config import ServicesConfig


@dataclass(frozen=True, eq=False)
class ResolvedTarget(Mapping[str, str]):
    """Desired version per service for one invocation.

    Attributes:
        versions: Service name to target version
        skipped: Scope tokens that matched no enabled service or group
    """

    versions: dict[str, str]
    skipped: tuple[str, ...] = field(default_factory=tuple)

    def __getitem__(self, service: str) -> str:
        return self.versions[service]

    def __iter__(self) -> Iterator[str]:
        return iter(self.versions)

    def __len__(self) -> int:
        return len(self.versions)


def parse_scope(scope: str | None) -> list[str]:
    """Split a comma separated scope filter, dropping blanks and duplicates."""
    tokens: list[str] = []
    for raw in (scope or "").split(","):
        token = raw.strip()
        if token and token not in tokens:
            tokens.append(token)
    return tokens


def select_version(override: str | None, default: str) -> str:
    """An explicit override wins over the entry's default version."""
    return override if override else default


class ServiceResolver:
    """Computes the ResolvedTarget from the services configuration."""

    def __init__(self, services: ServicesConfig) -> None:
        self.services = services

    def resolve(
        self,
        scope: str | None = "",
        version_override: str | None = "",
    ) -> ResolvedTarget:
        """Resolve the services to deploy and their versions.

        Args:
            scope: Comma separated service/group names; empty selects all
                enabled services and groups
            version_override: Version applied to every selected service
                instead of its configured default

        Returns:
            ResolvedTarget containing only enabled entries

        Raises:
            NoServicesSelectedError: If nothing enabled was selected
        """
        singles = {entry.name: entry for entry in self.services.enabled_singles()}
        groups = {group.name: group for group in self.services.enabled_groups()}

        tokens = parse_scope(scope)
        skipped: list[str] = []
        if tokens:
            wanted = set()
            for token in tokens:
                if token not in singles and token not in groups:
                    logger.warning(f"Skipping '{token}': not enabled or unknown")
                    skipped.append(token)
                wanted.add(token)
            singles = {name: e for name, e in singles.items() if name in wanted}
            groups = {name: g for name, g in groups.items() if name in wanted}

        versions: dict[str, str] = {}
        origin: dict[str, str] = {}

        def assign(service: str, version: str, source: str) -> None:
            if service in versions:
                logger.warning(
                    f"Service '{service}' from {source} overrides the entry "
                    f"from {origin[service]}"
                )
            versions[service] = select_version(version_override, version)
            origin[service] = source

        for entry in singles.values():
            assign(entry.name, entry.version, f"service '{entry.name}'")
        for group in groups.values():
            for member in group.services:
                assign(member, group.version, f"group '{group.name}'")

        if not versions:
            raise NoServicesSelectedError(skipped)

        return ResolvedTarget(versions=versions, skipped=tuple(skipped))
