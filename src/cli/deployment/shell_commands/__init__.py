"""Shell command abstractions for rollout operations.

This package wraps the external tools the rollout talks to:

- runner: subprocess execution with uniform CommandResult handling
- kubectl: Kubernetes context and deployment commands

Usage:
    from src.cli.deployment.shell_commands import ShellCommands

    commands = ShellCommands()
    result = commands.kubectl.get_current_context()
"""

from pathlib import Path

from .kubectl import KubectlCommands
from .runner import CommandRunner
from .types import CommandResult


class ShellCommands:
    """Unified interface for all shell command operations.

    Attributes:
        kubectl: Kubernetes kubectl commands
    """

    def __init__(self, cwd: Path | None = None) -> None:
        """Initialize the shell commands executor.

        Args:
            cwd: Working directory for commands (defaults to the process cwd)
        """
        self._runner = CommandRunner(cwd)
        self.kubectl = KubectlCommands(self._runner)


__all__ = [
    "ShellCommands",
    "CommandResult",
    "KubectlCommands",
    "CommandRunner",
]
