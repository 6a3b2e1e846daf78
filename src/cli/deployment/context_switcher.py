"""Make sure kubectl points at the environment's cluster."""

from __future__ import annotations

from loguru import logger

from .errors import ContextSwitchError
from .shell_commands import KubectlCommands


class ContextSwitcher:
    """Switches the active kubectl context and probes the cluster."""

    def __init__(self, kubectl: KubectlCommands) -> None:
        self.kubectl = kubectl

    def ensure_context(self, context: str) -> bool:
        """Activate ``context`` if it is not already active.

        Returns:
            True if a switch happened, False if the context was already active

        Raises:
            ContextSwitchError: If switching fails or the cluster is unreachable
        """
        current = self.kubectl.get_current_context()
        if current.success and current.stdout.strip() == context:
            logger.debug(f"Context {context} already active")
            return False

        logger.info(f"Switching kubectl context to {context}")
        switched = self.kubectl.use_context(context)
        if not switched.success:
            raise ContextSwitchError(context, switched.diagnostic)

        probe = self.kubectl.get_nodes()
        if not probe.success:
            raise ContextSwitchError(
                context, f"Cluster is not reachable: {probe.diagnostic}"
            )
        return True
