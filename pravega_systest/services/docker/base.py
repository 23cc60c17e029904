"""
Docker swarm backend.

Runs each component as a swarm service on the docker-network overlay,
driven through the docker CLI.
"""

import json
import subprocess
from abc import abstractmethod
from typing import Dict, List

from pravega_systest.core.constants import DOCKER_NETWORK
from pravega_systest.core.exceptions import ServiceError
from pravega_systest.core.telemetry import get_logger
from pravega_systest.services.interface import Service

logger = get_logger(__name__)

# Daemon messages for a service name that is already taken / does not exist
ALREADY_EXISTS_MARKERS = ("already exists", "name conflicts")
NOT_FOUND_MARKERS = ("not found", "no such service")


def _stderr_matches(stderr: str, markers) -> bool:
    stderr = (stderr or "").lower()
    return any(marker in stderr for marker in markers)


def _command_error(
    cmd: List[str], returncode: int, stdout: str, stderr: str
) -> ServiceError:
    return ServiceError(
        f"Docker command failed with exit code {returncode}\n"
        f"Command: {' '.join(cmd)}\n"
        f"Stdout: {stdout}\n"
        f"Stderr: {stderr}"
    )


class DockerBasedService(Service):
    """Service deployed as a Docker swarm service."""

    def __init__(self, service_id: str, replicas: int = 1):
        super().__init__(service_id)
        self.replicas = replicas

    @property
    @abstractmethod
    def image(self) -> str:
        pass

    @property
    @abstractmethod
    def ports(self) -> List[int]:
        """Container ports, in the order endpoints are reported."""
        pass

    def env_vars(self) -> Dict[str, str]:
        return {}

    def command_args(self) -> List[str]:
        return []

    def _docker(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        cmd = ["docker", *args]
        try:
            return subprocess.run(cmd, capture_output=True, text=True, check=check)
        except subprocess.CalledProcessError as e:
            raise _command_error(cmd, e.returncode, e.stdout, e.stderr) from e

    def start(self, wait_for_readiness: bool) -> None:
        cmd = [
            "service",
            "create",
            "--name",
            self.id,
            "--network",
            DOCKER_NETWORK,
            "--replicas",
            str(self.replicas),
            "--detach",
        ]

        for key, value in self.env_vars().items():
            cmd.extend(["-e", f"{key}={value}"])

        cmd.append(self.image)
        cmd.extend(self.command_args())

        logger.info(f"Creating Docker service {self.id} from image {self.image}")
        result = self._docker(*cmd, check=False)

        if result.returncode != 0:
            if not _stderr_matches(result.stderr, ALREADY_EXISTS_MARKERS):
                raise _command_error(
                    ["docker", *cmd], result.returncode, result.stdout, result.stderr
                )
            logger.info(f"Docker service {self.id} already deployed")

        if wait_for_readiness:
            self.wait_until_running()

    def stop(self) -> None:
        cmd = ["service", "rm", self.id]
        result = self._docker(*cmd, check=False)

        if result.returncode == 0:
            logger.info(f"Removed Docker service {self.id}")
        elif _stderr_matches(result.stderr, NOT_FOUND_MARKERS):
            logger.info(f"Docker service {self.id} already removed or not found")
        else:
            raise _command_error(
                ["docker", *cmd], result.returncode, result.stdout, result.stderr
            )

    def is_running(self) -> bool:
        result = self._docker(
            "service",
            "ls",
            "--filter",
            f"name={self.id}",
            "--format",
            "{{.Name}} {{.Replicas}}",
            check=False,
        )

        if result.returncode != 0:
            return False

        # The name filter matches prefixes, so look for the exact service
        for line in result.stdout.splitlines():
            name, _, replicas = line.strip().partition(" ")
            if name != self.id or not replicas:
                continue
            running, _, desired = replicas.split()[0].partition("/")
            return int(running) > 0 and int(running) == int(desired)

        return False

    def get_service_details(self) -> List[str]:
        result = self._docker(
            "service", "inspect", self.id, "--format", "{{json .Endpoint.VirtualIPs}}"
        )

        virtual_ips = json.loads(result.stdout) or []
        # Addr is in CIDR notation, e.g. "10.0.0.5/24"
        addresses = [vip["Addr"].split("/")[0] for vip in virtual_ips]

        return [
            f"tcp://{address}:{port}" for address in addresses for port in self.ports
        ]

    def scale_service(self, instance_count: int, wait_for_readiness: bool) -> None:
        logger.info(f"Scaling Docker service {self.id} to {instance_count} replicas")
        self._docker("service", "scale", "--detach", f"{self.id}={instance_count}")
        self.replicas = instance_count

        if wait_for_readiness and instance_count > 0:
            self.wait_until_running()
