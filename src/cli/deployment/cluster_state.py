"""Read the currently deployed image versions from the cluster."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from loguru import logger

from .shell_commands import KubectlCommands


@dataclass(frozen=True)
class StateReadWarning:
    """A snapshot query that failed; the snapshot is best effort."""

    namespace: str
    message: str

    def __str__(self) -> str:
        return f"Failed to read deployments in '{self.namespace}': {self.message}"


@dataclass
class ClusterSnapshot:
    """Observed version per enabled service at one point in time."""

    versions: dict[str, str] = field(default_factory=dict)
    warning: StateReadWarning | None = None

    @property
    def complete(self) -> bool:
        return self.warning is None


def image_tag(image: str) -> str | None:
    """Return the tag of an image reference, or None if it has none.

    The tag is whatever follows the last ``:``, unless that colon belongs
    to a registry port (``host:5000/app``).
    """
    _, sep, tag = image.rpartition(":")
    if not sep or not tag or "/" in tag:
        return None
    return tag


def parse_deployment_images(output: str) -> dict[str, str]:
    """Parse ``name<TAB>image`` rows into deployment name -> image."""
    images: dict[str, str] = {}
    for line in output.splitlines():
        parts = line.strip().split("\t")
        if len(parts) != 2 or not parts[0]:
            continue
        images[parts[0]] = parts[1].strip()
    return images


class ClusterStateReader:
    """Queries deployment images and extracts the running versions."""

    def __init__(self, kubectl: KubectlCommands) -> None:
        self.kubectl = kubectl

    def read(self, namespace: str, enabled: Iterable[str]) -> ClusterSnapshot:
        """Snapshot the versions of enabled services in a namespace.

        Deployments that are not enabled are ignored and enabled services
        missing from the cluster are simply absent. A failed query never
        raises; it yields an empty snapshot carrying a StateReadWarning.
        """
        result = self.kubectl.get_deployment_images(namespace)
        if not result.success:
            warning = StateReadWarning(namespace, result.diagnostic or "unknown error")
            logger.warning(str(warning))
            return ClusterSnapshot(warning=warning)

        wanted = set(enabled)
        versions: dict[str, str] = {}
        for name, image in parse_deployment_images(result.stdout).items():
            if name not in wanted:
                continue
            tag = image_tag(image)
            if tag is None:
                logger.debug(f"Deployment {name} image {image!r} has no tag")
                continue
            versions[name] = tag
        return ClusterSnapshot(versions=versions)
