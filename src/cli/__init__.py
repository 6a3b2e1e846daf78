"""Main CLI application module.

This module provides the main entry point for the kube-rollout CLI.
Running it without a subcommand deploys; ``check`` only previews.
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

from .commands import check, deploy

# Create the main CLI application
app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
)

# Deploy runs when no subcommand is given
app.callback(invoke_without_command=True)(deploy)
app.command("check")(check)


def main() -> None:
    """Main entry point for the CLI."""
    load_dotenv(Path(".env"), override=False)
    app()


if __name__ == "__main__":
    main()
