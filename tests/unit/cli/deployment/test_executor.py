"""Tests for concurrent per-service image updates."""

import threading
from unittest.mock import MagicMock

import pytest

from src.cli.deployment.executor import DeploymentExecutor, image_reference
from src.cli.deployment.shell_commands.types import CommandResult
from tests.fakes import REGISTRY, FakeCluster

TARGETS = {"web-fe": "v2.1.0", "docs-fe": "v3.48.1", "nft-core-be": "v1.15.5"}


def test_image_reference() -> None:
    assert image_reference("registry.example.com/", "web-fe", "v1") == (
        "registry.example.com/web-fe:v1"
    )


def test_updates_every_service_with_full_image() -> None:
    cluster = FakeCluster()

    outcomes = DeploymentExecutor(cluster).apply(TARGETS, REGISTRY, "web")

    assert [o.service for o in outcomes] == ["docs-fe", "nft-core-be", "web-fe"]
    assert all(o.success for o in outcomes)
    assert sorted(cluster.updates) == [
        ("docs-fe", "docs-fe", f"{REGISTRY}/docs-fe:v3.48.1", "web"),
        ("nft-core-be", "nft-core-be", f"{REGISTRY}/nft-core-be:v1.15.5", "web"),
        ("web-fe", "web-fe", f"{REGISTRY}/web-fe:v2.1.0", "web"),
    ]


def test_every_service_gets_its_own_worker() -> None:
    targets = {f"svc-{i:02d}": "v1" for i in range(40)}
    barrier = threading.Barrier(len(targets), timeout=5)
    kubectl = MagicMock()

    def set_image(*args, **kwargs) -> CommandResult:
        barrier.wait()
        return CommandResult(success=True)

    kubectl.set_image.side_effect = set_image

    outcomes = DeploymentExecutor(kubectl).apply(targets, REGISTRY, "web")

    assert [o.service for o in outcomes] == sorted(targets)
    assert all(o.success for o in outcomes)


def test_one_failure_does_not_affect_siblings() -> None:
    cluster = FakeCluster()
    cluster.failing = {"docs-fe"}

    outcomes = DeploymentExecutor(cluster).apply(TARGETS, REGISTRY, "web")

    failed = [o for o in outcomes if not o.success]
    succeeded = [o for o in outcomes if o.success]
    assert [o.service for o in failed] == ["docs-fe"]
    assert "NotFound" in failed[0].detail
    assert len(succeeded) == 2
    versions = cluster.versions()
    assert versions["web-fe"] == "v2.1.0"
    assert versions["nft-core-be"] == "v1.15.5"
    assert versions["docs-fe"] == "v3.48.0"


def test_updates_run_concurrently() -> None:
    barrier = threading.Barrier(len(TARGETS), timeout=5)
    kubectl = MagicMock()

    def set_image(*args, **kwargs) -> CommandResult:
        # Every update must be in flight at once for the barrier to release
        barrier.wait()
        return CommandResult(success=True, stdout="updated")

    kubectl.set_image.side_effect = set_image

    outcomes = DeploymentExecutor(kubectl).apply(TARGETS, REGISTRY, "web")

    assert all(o.success for o in outcomes)


def test_raising_update_becomes_a_failed_outcome() -> None:
    kubectl = MagicMock()

    def set_image(deployment, *args, **kwargs) -> CommandResult:
        if deployment == "web-fe":
            raise RuntimeError("kubectl crashed")
        return CommandResult(success=True)

    kubectl.set_image.side_effect = set_image

    outcomes = DeploymentExecutor(kubectl).apply(TARGETS, REGISTRY, "web")

    by_service = {o.service: o for o in outcomes}
    assert by_service["web-fe"].success is False
    assert by_service["web-fe"].detail == "kubectl crashed"
    assert by_service["docs-fe"].success is True
    assert by_service["nft-core-be"].success is True


@pytest.mark.parametrize("timeout", [None, 30.0])
def test_timeout_is_passed_to_kubectl(timeout) -> None:
    kubectl = MagicMock()
    kubectl.set_image.return_value = CommandResult(success=True)

    DeploymentExecutor(kubectl, timeout=timeout).apply(
        {"web-fe": "v1"}, REGISTRY, "web"
    )

    assert kubectl.set_image.call_args.kwargs["timeout"] == timeout


def test_empty_target_does_nothing() -> None:
    kubectl = MagicMock()

    assert DeploymentExecutor(kubectl).apply({}, REGISTRY, "web") == []
    kubectl.set_image.assert_not_called()
