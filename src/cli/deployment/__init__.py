"""Rollout of container image versions to Kubernetes Deployments.

Components, leaf to root:
- service_config: environments and services documents
- resolver: scope filter + version override -> target versions
- cluster_state: running versions read from the cluster
- context_switcher: activates and probes the environment's kubectl context
- executor: concurrent per-service image updates
- report: preview and result tables
- deploy_log: per-invocation log file
- rollout: the check and deploy workflows tying them together

The shell_commands subpackage wraps kubectl.
"""

from .errors import (
    ConfigError,
    ContextSwitchError,
    DeploymentError,
    DeploymentFailedError,
    NoServicesSelectedError,
    UnknownEnvironmentError,
)
from .rollout import RolloutDeployer, RolloutPlan

__all__ = [
    "RolloutDeployer",
    "RolloutPlan",
    "DeploymentError",
    "ConfigError",
    "UnknownEnvironmentError",
    "ContextSwitchError",
    "NoServicesSelectedError",
    "DeploymentFailedError",
]
