"""Unit tests for the Docker swarm backend."""

import subprocess
from unittest.mock import patch

import pytest

from pravega_systest.core.exceptions import ConfigurationError, ServiceError
from pravega_systest.services.docker import (
    BookkeeperDockerService,
    HDFSDockerService,
    PravegaControllerDockerService,
    PravegaSegmentStoreDockerService,
    ZookeeperDockerService,
)

ZK_URI = "tcp://10.0.0.2:2181"


def completed(stdout="", returncode=0, stderr=""):
    return subprocess.CompletedProcess(
        args=["docker"], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.fixture
def mock_run():
    with patch("pravega_systest.services.docker.base.subprocess.run") as mock:
        mock.return_value = completed()
        yield mock


@pytest.fixture
def mock_sleep():
    with patch("pravega_systest.services.interface.time.sleep") as mock:
        yield mock


class TestDockerStart:
    """Test service creation through the docker CLI."""

    def test_start_controller_command(self, mock_run):
        service = PravegaControllerDockerService("controller", ZK_URI)

        service.start(wait_for_readiness=False)

        cmd = mock_run.call_args[0][0]
        assert cmd[:10] == [
            "docker",
            "service",
            "create",
            "--name",
            "controller",
            "--network",
            "docker-network",
            "--replicas",
            "1",
            "--detach",
        ]
        assert "ZK_URL=10.0.0.2:2181" in cmd
        assert "CONTROLLER_SERVER_PORT=9090" in cmd
        assert "REST_SERVER_PORT=9091" in cmd
        assert cmd[-2:] == ["pravega:latest", "controller"]

    def test_start_bookkeeper_uses_three_replicas(self, mock_run):
        BookkeeperDockerService("bookkeeper", ZK_URI).start(wait_for_readiness=False)

        cmd = mock_run.call_args[0][0]
        assert cmd[cmd.index("--replicas") + 1] == "3"
        assert cmd[-1] == "bookkeeper:latest"

    def test_start_waits_for_readiness(self, mock_run, mock_sleep):
        mock_run.side_effect = [
            completed(),
            completed("zookeeper 0/1\n"),
            completed("zookeeper 1/1\n"),
        ]
        service = ZookeeperDockerService("zookeeper")

        service.start(wait_for_readiness=True)

        assert mock_run.call_count == 3
        mock_sleep.assert_called_once()

    def test_start_failure_raises_service_error(self, mock_run):
        mock_run.return_value = completed(
            returncode=1, stderr="Error response from daemon: network docker-network not found"
        )

        with pytest.raises(ServiceError, match="network docker-network not found"):
            ZookeeperDockerService("zookeeper").start(wait_for_readiness=False)

    def test_existing_service_is_reused(self, mock_run, mock_sleep):
        mock_run.side_effect = [
            completed(
                returncode=1,
                stderr=(
                    "Error response from daemon: rpc error: code = AlreadyExists "
                    "desc = name conflicts with an existing object"
                ),
            ),
            completed("zookeeper 1/1\n"),
        ]

        ZookeeperDockerService("zookeeper").start(wait_for_readiness=True)

        assert mock_run.call_count == 2
        assert mock_run.call_args[0][0][:3] == ["docker", "service", "ls"]

    def test_image_uses_registry_and_version(self, monkeypatch):
        monkeypatch.setenv("dockerImageRegistry", "registry.local:5000/")
        monkeypatch.setenv("imageVersion", "0.13.0")

        service = PravegaControllerDockerService("controller", ZK_URI)

        assert service.image == "registry.local:5000/pravega:0.13.0"


class TestDockerStatus:
    """Test readiness checks and endpoint discovery."""

    @pytest.mark.parametrize(
        "stdout, expected",
        [
            ("zookeeper 1/1\n", True),
            ("zookeeper 3/3 (max 1 per node)\n", True),
            ("zookeeper 0/1\n", False),
            ("zookeeper 1/3\n", False),
            ("zookeeper-old 1/1\n", False),
            ("", False),
        ],
    )
    def test_is_running(self, mock_run, stdout, expected):
        mock_run.return_value = completed(stdout)

        assert ZookeeperDockerService("zookeeper").is_running() is expected

    def test_is_running_false_on_cli_error(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="daemon unavailable")

        assert ZookeeperDockerService("zookeeper").is_running() is False

    def test_service_details(self, mock_run):
        mock_run.return_value = completed(
            '[{"NetworkID": "abc", "Addr": "10.0.0.5/24"}]\n'
        )

        details = PravegaControllerDockerService("controller", ZK_URI).get_service_details()

        assert details == ["tcp://10.0.0.5:9090", "tcp://10.0.0.5:9091"]

    def test_service_details_without_endpoint(self, mock_run):
        mock_run.return_value = completed("null\n")

        assert ZookeeperDockerService("zookeeper").get_service_details() == []

    def test_hdfs_namenode_endpoint_first(self, mock_run):
        mock_run.return_value = completed('[{"Addr": "10.0.0.9/24"}]')

        details = HDFSDockerService("hdfs").get_service_details()

        assert details[0] == "tcp://10.0.0.9:8020"
        assert len(details) == 5


class TestDockerStopAndScale:
    """Test removal and scaling."""

    def test_stop(self, mock_run):
        ZookeeperDockerService("zookeeper").stop()

        assert mock_run.call_args[0][0] == ["docker", "service", "rm", "zookeeper"]

    def test_stop_tolerates_missing_service(self, mock_run):
        mock_run.return_value = completed(returncode=1, stderr="service zookeeper not found")

        ZookeeperDockerService("zookeeper").stop()

    def test_stop_failure_raises_service_error(self, mock_run):
        mock_run.return_value = completed(
            returncode=1, stderr="Cannot connect to the Docker daemon"
        )

        with pytest.raises(ServiceError, match="Cannot connect"):
            ZookeeperDockerService("zookeeper").stop()

    def test_scale(self, mock_run):
        service = BookkeeperDockerService("bookkeeper", ZK_URI)

        service.scale_service(5, wait_for_readiness=False)

        assert mock_run.call_args[0][0] == [
            "docker",
            "service",
            "scale",
            "--detach",
            "bookkeeper=5",
        ]
        assert service.replicas == 5

    def test_scale_to_zero_does_not_wait(self, mock_run, mock_sleep):
        service = BookkeeperDockerService("bookkeeper", ZK_URI)

        service.scale_service(0, wait_for_readiness=True)

        assert mock_run.call_count == 1
        mock_sleep.assert_not_called()


class TestSegmentStoreDockerService:
    """Test the HDFS-backed segment store."""

    def test_requires_hdfs_uri(self):
        with pytest.raises(ConfigurationError):
            PravegaSegmentStoreDockerService("segmentstore", ZK_URI, None, "tcp://ctrl:9090")

    def test_env_vars(self):
        service = PravegaSegmentStoreDockerService(
            "segmentstore", ZK_URI, "tcp://10.0.0.9:8020", "tcp://10.0.0.3:9090"
        )

        env = service.env_vars()

        assert env["HDFS_URL"] == "10.0.0.9:8020"
        assert env["TIER2_STORAGE"] == "HDFS"
        assert env["CONTROLLER_URL"] == "tcp://10.0.0.3:9090"
        assert env["ZK_URL"] == "10.0.0.2:2181"
        assert service.command_args() == ["segmentstore"]

    def test_bare_host_port_zookeeper_uri(self):
        service = BookkeeperDockerService("bookkeeper", "10.0.0.2:2181")

        assert service.env_vars()["ZK_URL"] == "10.0.0.2:2181"
