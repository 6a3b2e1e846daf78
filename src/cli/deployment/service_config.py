"""Configuration store for environments and services.

Two documents drive a rollout:

- the environments document (``config.json`` by default)::

    {"environments": {"pre": {"context": "...", "namespace": "...", "registry": "..."}}}

- the services document (``services.json`` by default)::

    {"single_services": {"docs-fe": {"enabled": true, "version": "v3.48.1"}},
     "service_groups": {"nft": {"enabled": true, "version": "v1.15.5",
                                "services": ["nft-core-be", "nft-ethereum-be"]}}}

Both are read with ``yaml.safe_load`` so JSON and YAML files are accepted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError, UnknownEnvironmentError


class EnvironmentProfile(BaseModel):
    """One deployable target cluster/namespace/registry."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    context: str
    namespace: str
    registry: str


class SingleServiceEntry(BaseModel):
    """An independently versioned service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    enabled: bool = False
    version: str


class ServiceGroupEntry(BaseModel):
    """A bundle of services sharing one version and one enabled flag."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = ""
    enabled: bool = False
    version: str
    services: list[str] = Field(default_factory=list)


class EnvironmentsConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    environments: dict[str, EnvironmentProfile] = Field(default_factory=dict)


class ServicesConfig(BaseModel):
    """Single services and service groups, in document order."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    single_services: dict[str, SingleServiceEntry] = Field(default_factory=dict)
    service_groups: dict[str, ServiceGroupEntry] = Field(default_factory=dict)

    def enabled_singles(self) -> list[SingleServiceEntry]:
        return [entry for entry in self.single_services.values() if entry.enabled]

    def enabled_groups(self) -> list[ServiceGroupEntry]:
        return [group for group in self.service_groups.values() if group.enabled]

    def enabled_services(self) -> set[str]:
        """Every service name reachable through an enabled entry.

        A group's own flag alone decides whether its members count.
        """
        names = {entry.name for entry in self.enabled_singles()}
        for group in self.enabled_groups():
            names.update(group.services)
        return names


class RolloutConfig(BaseModel):
    """Both configuration documents, loaded together."""

    model_config = ConfigDict(frozen=True)

    environments: dict[str, EnvironmentProfile]
    services: ServicesConfig

    def get_environment(self, name: str) -> EnvironmentProfile:
        """Look up an environment by name.

        Raises:
            UnknownEnvironmentError: If no environment has that name
        """
        try:
            return self.environments[name]
        except KeyError:
            raise UnknownEnvironmentError(name, self.environments) from None


def _name_entries(section: Any) -> Any:
    """Copy each mapping key into its entry's ``name`` field."""
    if not isinstance(section, dict):
        return section
    return {
        key: {**value, "name": key} if isinstance(value, dict) else value
        for key, value in section.items()
    }


def _read_document(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(path, e.strerror or str(e)) from e

    try:
        loaded = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(path, f"Error parsing document: {e}") from e

    if loaded is None:
        raise ConfigError(path, "Document is empty")
    if not isinstance(loaded, dict):
        raise ConfigError(path, "Top level of the document must be a mapping")
    return loaded


def load_environments(path: Path) -> dict[str, EnvironmentProfile]:
    """Load the environments document.

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    data = _read_document(path)
    data["environments"] = _name_entries(data.get("environments") or {})
    try:
        config = EnvironmentsConfig(**data)
    except ValidationError as e:
        raise ConfigError(path, f"Invalid configuration: {e}") from e

    logger.debug(f"Loaded {len(config.environments)} environment(s) from {path}")
    return config.environments


def load_services(path: Path) -> ServicesConfig:
    """Load the services document.

    Raises:
        ConfigError: If the file is missing, unparsable or invalid
    """
    data = _read_document(path)
    data["single_services"] = _name_entries(data.get("single_services") or {})
    data["service_groups"] = _name_entries(data.get("service_groups") or {})
    try:
        services = ServicesConfig(**data)
    except ValidationError as e:
        raise ConfigError(path, f"Invalid configuration: {e}") from e

    logger.debug(
        f"Loaded {len(services.single_services)} service(s) and "
        f"{len(services.service_groups)} group(s) from {path}"
    )
    return services


def load_rollout_config(environments_path: Path, services_path: Path) -> RolloutConfig:
    """Load both documents; nothing is returned unless both succeed."""
    return RolloutConfig(
        environments=load_environments(environments_path),
        services=load_services(services_path),
    )
