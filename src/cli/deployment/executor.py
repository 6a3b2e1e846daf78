"""Concurrent image updates, one worker per service.

Each service update runs on its own worker thread and yields exactly one
DeployOutcome. Outcomes travel back through the futures, so no shared
mutable collection is written by the workers. A failing update never
cancels or blocks its siblings, and nothing is rolled back.
"""

from __future__ import annotations

from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass

from loguru import logger

from .deploy_log import DeployLog
from .shell_commands import KubectlCommands


@dataclass(frozen=True)
class DeployOutcome:
    """Result of updating a single service."""

    service: str
    success: bool
    detail: str
    image: str = ""


def image_reference(registry: str, service: str, version: str) -> str:
    """Build ``registry/service:version``."""
    return f"{registry.rstrip('/')}/{service}:{version}"


class DeploymentExecutor:
    """Applies a resolved target to a namespace.

    Args:
        kubectl: kubectl command wrapper
        log: Deploy log receiving the per-service start events
        timeout: Seconds allowed per update (None waits for kubectl)
    """

    def __init__(
        self,
        kubectl: KubectlCommands,
        log: DeployLog | None = None,
        *,
        timeout: float | None = None,
    ) -> None:
        self.kubectl = kubectl
        self.log = log or DeployLog()
        self.timeout = timeout

    def deploy_service(
        self, service: str, version: str, registry: str, namespace: str
    ) -> DeployOutcome:
        image = image_reference(registry, service, version)
        self.log.info(f"Deploying {service} -> {image}")
        result = self.kubectl.set_image(
            service, service, image, namespace, timeout=self.timeout
        )
        if result.success:
            return DeployOutcome(
                service, True, result.stdout.strip() or "image updated", image
            )
        detail = result.diagnostic or "unknown error"
        return DeployOutcome(service, False, detail, image)

    def apply(
        self,
        targets: Mapping[str, str],
        registry: str,
        namespace: str,
    ) -> list[DeployOutcome]:
        """Update every service concurrently and wait for all of them.

        Returns:
            One outcome per service, sorted by service name
        """
        if not targets:
            return []

        outcomes: list[DeployOutcome] = []
        with ThreadPoolExecutor(
            max_workers=len(targets), thread_name_prefix="rollout"
        ) as pool:
            futures = {
                pool.submit(
                    self.deploy_service, service, version, registry, namespace
                ): (service, version)
                for service, version in targets.items()
            }
            for future in as_completed(futures):
                service, version = futures[future]
                try:
                    outcomes.append(future.result())
                except Exception as e:  # noqa: BLE001
                    logger.exception(f"Update of {service} raised")
                    outcomes.append(
                        DeployOutcome(
                            service,
                            False,
                            str(e) or type(e).__name__,
                            image_reference(registry, service, version),
                        )
                    )

        return sorted(outcomes, key=lambda o: o.service)
