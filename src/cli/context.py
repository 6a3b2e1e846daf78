"""CLI context and dependency container."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
import typer

from src.cli.deployment.service_config import RolloutConfig, load_rollout_config
from src.cli.deployment.shell_commands import ShellCommands
from src.cli.shared.console import CLIConsole, console


@dataclass(frozen=True)
class CLIContext:
    """Runtime dependencies for CLI commands."""

    console: CLIConsole
    config: RolloutConfig
    commands: ShellCommands


def build_cli_context(config_file: Path, services_file: Path) -> CLIContext:
    """Load both configuration documents and build a fresh CLIContext.

    Raises:
        ConfigError: If either document cannot be loaded
    """
    return CLIContext(
        console=console,
        config=load_rollout_config(config_file, services_file),
        commands=ShellCommands(),
    )


def get_cli_context(
    config_file: Path,
    services_file: Path,
    ctx: typer.Context | None = None,
) -> CLIContext:
    """Return the CLIContext from Typer, falling back to a new instance."""
    context = ctx or click.get_current_context(silent=True)
    if context and isinstance(context.obj, CLIContext):
        return context.obj
    return build_cli_context(config_file, services_file)
