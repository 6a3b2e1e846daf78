"""Shared utilities for CLI commands.

This module provides the console wrapper used by all commands, including
status output, the deploy confirmation prompt and error reporting.
"""

from collections.abc import Callable
from functools import wraps

import typer
from rich.console import Console, ConsoleRenderable
from rich.panel import Panel

from src.cli.deployment.constants import CONFIRM_ANSWERS
from src.cli.deployment.errors import DeploymentError


class CLIConsole:
    """Rich console wrapper for consistent CLI output.

    Regular output goes to stdout; warnings and errors go to stderr.
    """

    def __init__(self) -> None:
        """Initialize the CLI console."""
        self.console = Console()
        self.err_console = Console(stderr=True)

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self.console.print(msg)

    def info(self, msg: str) -> None:
        self.console.print(f"[cyan]ℹ[/cyan]  {msg}")

    def ok(self, msg: str) -> None:
        self.console.print(f"[green]✅[/green] {msg}")

    def error(self, msg: str) -> None:
        self.err_console.print(f"[red]❌[/red] {msg}")

    def warn(self, msg: str) -> None:
        self.err_console.print(f"[yellow]⚠️[/yellow]  {msg}")

    def confirm_action(self, action: str, details: str | None = None) -> bool:
        """Ask the user to confirm an action that changes the cluster.

        Anything other than an explicit "y"/"yes" counts as a refusal,
        including an empty answer, end of input and Ctrl-C.

        Args:
            action: Description of the action (e.g., "Deploy 3 services to prod")
            details: Additional details about what will be affected

        Returns:
            True if the user confirmed, False otherwise
        """
        lines = [f"[bold yellow]{action}[/bold yellow]"]
        if details:
            lines.append(f"\n{details}")

        self.console.print(
            Panel(
                "\n".join(lines),
                title="Confirmation Required",
                border_style="yellow",
            )
        )

        try:
            response = self.console.input(
                "\n[bold]Proceed with the deployment?[/bold] \\[y/N]: "
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print("\n[dim]Cancelled.[/dim]")
            return False
        return response.strip().lower() in CONFIRM_ANSWERS

    def handle_error(
        self, message: str, details: str | None = None, exit_code: int = 1
    ) -> None:
        """Handle an error by printing a message to stderr and exiting.

        Args:
            message: Error message to display
            details: Optional additional details
            exit_code: Exit code to use
        """
        self.error(f"[bold red]{message}[/bold red]")
        if details:
            self.err_console.print(Panel(details, title="Details", border_style="red"))
        raise typer.Exit(exit_code)


def with_error_handling(func: Callable[..., None]) -> Callable[..., None]:
    """Decorator to wrap command functions with standard error handling.

    DeploymentError subclasses exit with status 1, Ctrl-C with 130.

    Args:
        func: The command function to wrap

    Returns:
        Wrapped function with error handling
    """

    @wraps(func)
    def wrapper(*args: object, **kwargs: object) -> None:
        try:
            func(*args, **kwargs)
        except DeploymentError as e:
            console.handle_error(e.message, e.details)
        except KeyboardInterrupt:
            console.print("\n[dim]Operation cancelled by user.[/dim]")
            raise typer.Exit(130) from None

    return wrapper


# Shared console instance for consistent output
console = CLIConsole()
