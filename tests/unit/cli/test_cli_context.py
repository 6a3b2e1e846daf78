"""Tests for CLI context dependency injection."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
import typer

from src.cli.context import CLIContext, build_cli_context, get_cli_context
from src.cli.deployment.errors import ConfigError


def test_cli_context_is_immutable():
    """Test that CLIContext is frozen/immutable."""
    ctx = CLIContext(console=Mock(), config=Mock(), commands=Mock())

    with pytest.raises(AttributeError):
        ctx.console = Mock()  # type: ignore[misc]


def test_build_cli_context_loads_both_documents(config_files):
    """Test that build_cli_context loads environments and services."""
    ctx = build_cli_context(*config_files)

    assert set(ctx.config.environments) == {"pre", "prod"}
    assert "docs-fe" in ctx.config.services.single_services
    assert ctx.commands.kubectl is not None


def test_build_cli_context_propagates_config_errors(tmp_path):
    """Test that a missing document aborts context creation."""
    with pytest.raises(ConfigError):
        build_cli_context(tmp_path / "config.json", tmp_path / "services.json")


@patch("src.cli.context.ShellCommands")
def test_build_cli_context_creates_shell_commands(mock_shell_commands, config_files):
    build_cli_context(*config_files)

    mock_shell_commands.assert_called_once_with()


def test_get_cli_context_from_typer_context():
    """Test that get_cli_context retrieves from Typer context."""
    mock_ctx_obj = CLIContext(console=Mock(), config=Mock(), commands=Mock())

    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = mock_ctx_obj

    result = get_cli_context(Path("config.json"), Path("services.json"), typer_ctx)

    assert result is mock_ctx_obj


def test_get_cli_context_with_invalid_obj_falls_back():
    """Test that get_cli_context builds a context when ctx.obj is not CLIContext."""
    typer_ctx = Mock(spec=typer.Context)
    typer_ctx.obj = "invalid"

    with patch("src.cli.context.build_cli_context") as mock_build:
        mock_build.return_value = Mock(spec=CLIContext)

        get_cli_context(Path("a.json"), Path("b.json"), typer_ctx)

        mock_build.assert_called_once_with(Path("a.json"), Path("b.json"))


@patch("click.get_current_context")
def test_get_cli_context_uses_click_context_as_fallback(mock_get_click_ctx):
    """Test that get_cli_context uses click context when typer ctx is None."""
    mock_ctx_obj = CLIContext(console=Mock(), config=Mock(), commands=Mock())
    mock_click_context = Mock()
    mock_click_context.obj = mock_ctx_obj
    mock_get_click_ctx.return_value = mock_click_context

    result = get_cli_context(Path("config.json"), Path("services.json"))

    assert result is mock_ctx_obj
    mock_get_click_ctx.assert_called_once_with(silent=True)
