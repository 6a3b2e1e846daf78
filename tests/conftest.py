"""Shared fixtures for rollout tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from src.cli.deployment.service_config import RolloutConfig, load_rollout_config
from tests.fakes import ENVIRONMENTS_DOC, SERVICES_DOC, FakeCluster, write_json


@pytest.fixture
def config_files(tmp_path: Path) -> tuple[Path, Path]:
    """Environments and services documents written to disk."""
    return (
        write_json(tmp_path / "config.json", ENVIRONMENTS_DOC),
        write_json(tmp_path / "services.json", SERVICES_DOC),
    )


@pytest.fixture
def rollout_config(config_files: tuple[Path, Path]) -> RolloutConfig:
    return load_rollout_config(*config_files)


@pytest.fixture
def fake_cluster() -> FakeCluster:
    return FakeCluster()


@pytest.fixture
def mock_runner() -> MagicMock:
    """Create a mock command runner."""
    return MagicMock()


@pytest.fixture
def mock_console() -> MagicMock:
    return MagicMock()
