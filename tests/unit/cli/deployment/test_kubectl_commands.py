"""Tests for kubectl command construction."""

from unittest.mock import MagicMock

import pytest

from src.cli.deployment.shell_commands.kubectl import (
    DEPLOYMENT_IMAGES_JSONPATH,
    KubectlCommands,
)
from src.cli.deployment.shell_commands.types import CommandResult


class TestKubectlCommands:
    @pytest.fixture
    def kubectl(self, mock_runner: MagicMock) -> KubectlCommands:
        """Create KubectlCommands instance with mock runner."""
        mock_runner.run.return_value = CommandResult(success=True)
        return KubectlCommands(mock_runner)

    def test_get_current_context(
        self, kubectl: KubectlCommands, mock_runner: MagicMock
    ) -> None:
        kubectl.get_current_context()

        mock_runner.run.assert_called_once_with(
            ["kubectl", "config", "current-context"], timeout=None
        )

    def test_use_context(self, kubectl: KubectlCommands, mock_runner: MagicMock) -> None:
        kubectl.use_context("prod-ctx")

        cmd = mock_runner.run.call_args[0][0]
        assert cmd == ["kubectl", "config", "use-context", "prod-ctx"]

    def test_get_nodes(self, kubectl: KubectlCommands, mock_runner: MagicMock) -> None:
        kubectl.get_nodes()

        assert mock_runner.run.call_args[0][0] == ["kubectl", "get", "nodes"]

    def test_get_deployment_images(
        self, kubectl: KubectlCommands, mock_runner: MagicMock
    ) -> None:
        kubectl.get_deployment_images("web")

        cmd = mock_runner.run.call_args[0][0]
        assert cmd[:5] == ["kubectl", "get", "deployment", "-n", "web"]
        assert cmd[-2:] == ["-o", DEPLOYMENT_IMAGES_JSONPATH]
        assert "containers[0].image" in DEPLOYMENT_IMAGES_JSONPATH

    def test_set_image(self, kubectl: KubectlCommands, mock_runner: MagicMock) -> None:
        result = kubectl.set_image(
            "web-fe", "web-fe", "registry.example.com/web-fe:v2", "web", timeout=60
        )

        assert result.success
        mock_runner.run.assert_called_once_with(
            [
                "kubectl",
                "set",
                "image",
                "deployment",
                "web-fe",
                "web-fe=registry.example.com/web-fe:v2",
                "-n",
                "web",
            ],
            timeout=60,
        )


def test_diagnostic_prefers_stderr() -> None:
    assert CommandResult(False, stdout="out", stderr=" err \n").diagnostic == "err"
    assert CommandResult(False, stdout=" out\n").diagnostic == "out"
