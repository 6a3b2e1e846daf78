"""Command runner for executing shell commands.

This module provides the base command execution functionality used by
the kubectl command module.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

from .types import CommandResult

# Exit codes used for failures that happen before/around the process itself
COMMAND_NOT_FOUND = 127
COMMAND_TIMED_OUT = 124


class CommandRunner:
    """Low-level command executor with consistent result handling.

    Every invocation produces a CommandResult; a missing executable or a
    timeout are reported as failed results rather than raised, so callers
    running commands on worker threads always get an outcome back.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        """Initialize the command runner.

        Args:
            cwd: Working directory for commands (defaults to the process cwd)
        """
        self.cwd = cwd

    def run(
        self,
        cmd: Sequence[str],
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        """Execute a command and return a structured result.

        Args:
            cmd: Command and arguments as a sequence
            timeout: Seconds to wait before giving up (None waits forever)

        Returns:
            CommandResult with success status, output, and return code
        """
        args = list(cmd)
        try:
            result = subprocess.run(
                args,
                cwd=self.cwd,
                capture_output=True,
                text=True,
                check=False,
                timeout=timeout,
            )
        except FileNotFoundError:
            return CommandResult(
                success=False,
                stderr=f"{args[0]}: command not found",
                returncode=COMMAND_NOT_FOUND,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                success=False,
                stderr=f"{' '.join(args[:3])} timed out after {timeout}s",
                returncode=COMMAND_TIMED_OUT,
            )

        return CommandResult(
            success=result.returncode == 0,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
