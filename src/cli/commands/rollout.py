"""Rollout commands.

Deploy is the default action of the CLI; ``check`` previews the same
selection without confirmation or changes.
"""

from pathlib import Path
from typing import Annotated

import typer

from src.cli.context import get_cli_context
from src.cli.deployment.constants import (
    DEFAULT_ENVIRONMENTS_FILE,
    DEFAULT_LOG_DIR,
    DEFAULT_SERVICES_FILE,
    DEFAULT_UPDATE_TIMEOUT,
    ENV_CONFIG_FILE,
    ENV_LOG_DIR,
    ENV_SERVICES_FILE,
    ENV_TIMEOUT,
)
from src.cli.deployment.deploy_log import DeployLog, setup_logging
from src.cli.deployment.rollout import RolloutDeployer, RolloutPlan
from src.cli.shared.console import console, with_error_handling

# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

EnvOption = Annotated[
    str | None,
    typer.Option("--env", "-e", help="Environment to operate on (e.g. pre, prod)"),
]
ServicesOption = Annotated[
    str,
    typer.Option(
        "--services",
        "-s",
        help="Comma separated services or groups (default: all enabled)",
    ),
]
VersionOption = Annotated[
    str,
    typer.Option(
        "--version",
        help="Version for every selected service (default: services file)",
    ),
]
ConfigOption = Annotated[
    Path,
    typer.Option("--config", envvar=ENV_CONFIG_FILE, help="Environments document"),
]
ServicesFileOption = Annotated[
    Path,
    typer.Option(
        "--services-file", envvar=ENV_SERVICES_FILE, help="Services document"
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show debug logging on stderr"),
]


def _require_env(ctx: typer.Context, env: str | None) -> str:
    if not env:
        console.error("An environment is required: --env <name>")
        console.err_console.print(ctx.get_usage(), markup=False, highlight=False)
        raise typer.Exit(1)
    return env


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@with_error_handling
def deploy(
    ctx: typer.Context,
    env: EnvOption = None,
    services: ServicesOption = "",
    version: VersionOption = "",
    config_file: ConfigOption = DEFAULT_ENVIRONMENTS_FILE,
    services_file: ServicesFileOption = DEFAULT_SERVICES_FILE,
    log_dir: Annotated[
        Path,
        typer.Option("--log-dir", envvar=ENV_LOG_DIR, help="Deploy log directory"),
    ] = DEFAULT_LOG_DIR,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            envvar=ENV_TIMEOUT,
            min=0,
            help="Seconds allowed per service update (0 = no limit)",
        ),
    ] = DEFAULT_UPDATE_TIMEOUT,
    verbose: VerboseOption = False,
) -> None:
    """Deploy image versions to an environment.

    Shows the current and target version of every selected service, asks
    for confirmation, updates all services in parallel and prints the
    before/after versions.

    Examples:
        kube-rollout --env pre
        kube-rollout --env pre --services web-fe --version v1.0.0
        kube-rollout check --env pre
        kube-rollout check --env pre --services web-fe
    """
    if ctx.invoked_subcommand is not None:
        return

    env = _require_env(ctx, env)
    setup_logging(verbose)
    cli = get_cli_context(config_file, services_file, ctx)

    def confirm(plan: RolloutPlan) -> bool:
        return cli.console.confirm_action(
            f"Deploy {len(plan.target)} service(s) to {plan.environment.name}",
            f"Namespace: {plan.environment.namespace}\n"
            f"Registry:  {plan.environment.registry}",
        )

    log = DeployLog(log_dir, console=cli.console)
    with log.open():
        deployer = RolloutDeployer(
            cli.console,
            cli.config,
            cli.commands.kubectl,
            log,
            confirm=confirm,
            timeout=timeout or None,
        )
        outcomes = deployer.deploy(env, services, version)

    if outcomes is not None:
        cli.console.ok(f"Deployment finished: {len(outcomes)} service(s) updated")


@with_error_handling
def check(
    ctx: typer.Context,
    env: EnvOption = None,
    services: ServicesOption = "",
    version: VersionOption = "",
    config_file: ConfigOption = DEFAULT_ENVIRONMENTS_FILE,
    services_file: ServicesFileOption = DEFAULT_SERVICES_FILE,
    verbose: VerboseOption = False,
) -> None:
    """Preview version changes without deploying.

    Examples:
        kube-rollout check --env pre
        kube-rollout check --env prod --services nft --version v1.15.5
    """
    env = _require_env(ctx, env)
    setup_logging(verbose)
    cli = get_cli_context(config_file, services_file, ctx)

    deployer = RolloutDeployer(
        cli.console, cli.config, cli.commands.kubectl, DeployLog()
    )
    deployer.check(env, services, version)
