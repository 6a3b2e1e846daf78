"""Rollout workflows: preview (check) and deploy."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass

from src.utils.console_like import ConsoleLike

from .cluster_state import ClusterSnapshot, ClusterStateReader
from .context_switcher import ContextSwitcher
from .deploy_log import DeployLog
from .errors import DeploymentError, DeploymentFailedError
from .executor import DeploymentExecutor, DeployOutcome
from .report import ReportPresenter
from .resolver import ResolvedTarget, ServiceResolver
from .service_config import EnvironmentProfile, RolloutConfig
from .shell_commands import KubectlCommands


@dataclass
class RolloutPlan:
    """Everything known before any mutation."""

    environment: EnvironmentProfile
    before: ClusterSnapshot
    target: ResolvedTarget


class RolloutDeployer:
    """Drives the sequential rollout phases.

    config load -> context switch -> snapshot -> resolve -> [confirm]
    -> concurrent apply -> snapshot -> report

    Args:
        console: Output console
        config: Loaded environments and services
        kubectl: kubectl command wrapper
        log: Deploy log receiving lifecycle events
        confirm: Asks the user to approve a plan; without it deploy always cancels
        timeout: Seconds allowed per service update
    """

    def __init__(
        self,
        console: ConsoleLike,
        config: RolloutConfig,
        kubectl: KubectlCommands,
        log: DeployLog,
        *,
        confirm: Callable[[RolloutPlan], bool] | None = None,
        timeout: float | None = None,
    ) -> None:
        self.console = console
        self.config = config
        self.log = log
        self.confirm = confirm
        self.switcher = ContextSwitcher(kubectl)
        self.reader = ClusterStateReader(kubectl)
        self.resolver = ServiceResolver(config.services)
        self.executor = DeploymentExecutor(kubectl, log, timeout=timeout)
        self.presenter = ReportPresenter(console)

    def _snapshot(self, namespace: str, label: str) -> ClusterSnapshot:
        snapshot = self.reader.read(namespace, self.config.services.enabled_services())
        if snapshot.warning is not None:
            self.console.warn(f"{label}: {snapshot.warning}")
            self.log.warning(f"{label}: {snapshot.warning}")
        return snapshot

    def plan(self, env: str, services: str, version: str) -> RolloutPlan:
        """Run every read-only phase and return what would be deployed.

        Raises:
            UnknownEnvironmentError, ContextSwitchError, NoServicesSelectedError
        """
        environment = self.config.get_environment(env)

        if self.switcher.ensure_context(environment.context):
            self.console.info(f"Switched Kubernetes context to {environment.context}")
        else:
            self.console.info(f"Current Kubernetes context: {environment.context}")
        self.log.info(f"Using context {environment.context}")

        before = self._snapshot(environment.namespace, "Current versions")

        target = self.resolver.resolve(services, version)
        for token in target.skipped:
            self.console.warn(f"Skipping '{token}': not an enabled service or group")
            self.log.warning(f"Skipped unknown or disabled entry: {token}")
        selection = json.dumps(target.versions, sort_keys=True)
        self.log.info(f"Selected services: {selection}")

        return RolloutPlan(environment=environment, before=before, target=target)

    def check(self, env: str, services: str = "", version: str = "") -> RolloutPlan:
        """Preview version changes without touching the cluster."""
        plan = self.plan(env, services, version)
        self.presenter.preview(plan.before.versions, plan.target)
        return plan

    def deploy(
        self, env: str, services: str = "", version: str = ""
    ) -> list[DeployOutcome] | None:
        """Preview, confirm and apply the rollout.

        Returns:
            Outcomes sorted by service, or None if the user cancelled

        Raises:
            DeploymentFailedError: After all updates finished, if any failed
        """
        self.log.info(
            f"Starting deployment - env: {env}, services: {services or 'all'}, "
            f"version: {version or 'default'}"
        )
        try:
            plan = self.plan(env, services, version)
        except DeploymentError as e:
            detail = f" ({e.details})" if e.details else ""
            self.log.error(f"{e.message}{detail}")
            raise

        self.presenter.preview(plan.before.versions, plan.target)

        if self.confirm is None or not self.confirm(plan):
            self.log.info("Deployment cancelled by user")
            self.console.warn("Deployment cancelled")
            return None

        self.log.info("Deployment confirmed, applying updates")
        env_profile = plan.environment
        outcomes = self.executor.apply(
            plan.target, env_profile.registry, env_profile.namespace
        )
        for outcome in outcomes:
            status = "succeeded" if outcome.success else "failed"
            self.log.info(f"Deploy {outcome.service} {status}: {outcome.detail}")
        self.presenter.outcomes(outcomes)

        after = self._snapshot(env_profile.namespace, "Updated versions")
        self.presenter.comparison(plan.before.versions, after.versions)

        failures = [o for o in outcomes if not o.success]
        if failures:
            self.log.error(f"Deployment finished with {len(failures)} failure(s)")
            raise DeploymentFailedError(failures)

        self.log.info("Deployment finished")
        return outcomes
