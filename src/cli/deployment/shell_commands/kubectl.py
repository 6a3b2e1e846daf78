"""Kubectl command abstractions.

Thin wrappers around the kubectl invocations the rollout needs. Parsing of
the output is left to the callers; every method returns the raw
CommandResult.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .types import CommandResult

if TYPE_CHECKING:
    from .runner import CommandRunner

# One "name<TAB>image" line per deployment, first container only
DEPLOYMENT_IMAGES_JSONPATH = (
    "jsonpath={range .items[*]}{.metadata.name}{\"\\t\"}"
    "{.spec.template.spec.containers[0].image}{\"\\n\"}{end}"
)


class KubectlCommands:
    """Kubectl-related shell commands.

    Provides operations for:
    - Cluster context detection and switching
    - Cluster reachability probing
    - Deployment image listing and updating
    """

    def __init__(self, runner: CommandRunner) -> None:
        """Initialize kubectl commands.

        Args:
            runner: Command runner used to execute kubectl
        """
        self._runner = runner

    def _kubectl(self, *args: str, timeout: float | None = None) -> CommandResult:
        return self._runner.run(["kubectl", *args], timeout=timeout)

    # =========================================================================
    # Cluster Context
    # =========================================================================

    def get_current_context(self) -> CommandResult:
        """Get the current kubectl context name."""
        return self._kubectl("config", "current-context")

    def use_context(self, context: str) -> CommandResult:
        """Make ``context`` the active kubectl context."""
        return self._kubectl("config", "use-context", context)

    def get_nodes(self) -> CommandResult:
        """List cluster nodes; used as a lightweight reachability probe."""
        return self._kubectl("get", "nodes")

    # =========================================================================
    # Deployment Operations
    # =========================================================================

    def get_deployment_images(self, namespace: str) -> CommandResult:
        """List every deployment in a namespace with its first container image."""
        return self._kubectl(
            "get", "deployment", "-n", namespace, "-o", DEPLOYMENT_IMAGES_JSONPATH
        )

    def set_image(
        self,
        deployment: str,
        container: str,
        image: str,
        namespace: str,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Point a deployment container at a new image.

        Args:
            deployment: Deployment name
            container: Container name within the deployment
            image: Full image reference (registry/name:tag)
            namespace: Kubernetes namespace
            timeout: Seconds to wait for kubectl before giving up
        """
        return self._kubectl(
            "set",
            "image",
            "deployment",
            deployment,
            f"{container}={image}",
            "-n",
            namespace,
            timeout=timeout,
        )
