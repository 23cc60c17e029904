"""
Marathon backend for sequential remote execution.

Manages components as Marathon applications on a DC/OS cluster through the
Marathon REST API.
"""

from abc import abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import httpx

from pravega_systest.core.config import get_config
from pravega_systest.core.exceptions import ServiceError
from pravega_systest.core.telemetry import get_logger
from pravega_systest.services.interface import Service

logger = get_logger(__name__)

APP_GROUP = "/pravega"
REQUEST_TIMEOUT = 30


class MarathonBasedService(Service):
    """Service deployed as a Marathon application."""

    cpus: float = 0.5
    mem: int = 1024

    def __init__(
        self, service_id: str, instances: int = 1, http_client: Optional[httpx.Client] = None
    ):
        super().__init__(service_id)
        self.app_id = f"{APP_GROUP}/{service_id}"
        self.instances = instances
        self.marathon_url = get_config("marathonURL", "http://marathon.mesos:8080")
        self._client = http_client

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(base_url=self.marathon_url, timeout=REQUEST_TIMEOUT)
        return self._client

    @property
    @abstractmethod
    def image(self) -> str:
        pass

    @property
    @abstractmethod
    def ports(self) -> List[int]:
        pass

    def env_vars(self) -> Dict[str, str]:
        return {}

    def command_args(self) -> List[str]:
        return []

    def app_definition(self) -> Dict[str, Any]:
        """Marathon application definition for this service."""
        return {
            "id": self.app_id,
            "instances": self.instances,
            "cpus": self.cpus,
            "mem": self.mem,
            "container": {
                "type": "DOCKER",
                "docker": {"image": self.image, "network": "HOST", "forcePullImage": True},
            },
            "args": self.command_args(),
            "env": self.env_vars(),
            "requirePorts": True,
            "portDefinitions": [{"port": port, "protocol": "tcp"} for port in self.ports],
            "healthChecks": [
                {
                    "protocol": "TCP",
                    "portIndex": 0,
                    "gracePeriodSeconds": 600,
                    "intervalSeconds": 60,
                    "timeoutSeconds": 20,
                    "maxConsecutiveFailures": 3,
                }
            ],
        }

    def _request(
        self, method: str, path: str, allowed_statuses: Iterable[int] = (), **kwargs: Any
    ) -> httpx.Response:
        """Send a request to Marathon, raising ServiceError on failures not allowed."""
        try:
            response = self.client.request(method, path, **kwargs)
            if response.status_code not in allowed_statuses:
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise ServiceError(f"Marathon {method} {path} failed: {e}") from e
        return response

    def start(self, wait_for_readiness: bool) -> None:
        logger.info(f"Deploying Marathon app {self.app_id} from image {self.image}")
        response = self._request(
            "POST", "/v2/apps", allowed_statuses=(409,), json=self.app_definition()
        )
        if response.status_code == 409:
            logger.info(f"Marathon app {self.app_id} already deployed")

        if wait_for_readiness:
            self.wait_until_running()

    def stop(self) -> None:
        response = self._request("DELETE", f"/v2/apps{self.app_id}", allowed_statuses=(404,))
        if response.status_code == 404:
            logger.info(f"Marathon app {self.app_id} already deleted or not found")
        else:
            logger.info(f"Deleted Marathon app {self.app_id}")

    def is_running(self) -> bool:
        response = self._request("GET", f"/v2/apps{self.app_id}", allowed_statuses=(404,))
        if response.status_code == 404:
            return False

        app = response.json()["app"]
        return app["tasksRunning"] > 0 and app["tasksRunning"] == app["instances"]

    def get_service_details(self) -> List[str]:
        response = self._request("GET", f"/v2/apps{self.app_id}/tasks")
        tasks = response.json()["tasks"]

        return [f"tcp://{task['host']}:{port}" for task in tasks for port in task["ports"]]

    def scale_service(self, instance_count: int, wait_for_readiness: bool) -> None:
        logger.info(f"Scaling Marathon app {self.app_id} to {instance_count} instances")
        self._request(
            "PUT",
            f"/v2/apps{self.app_id}",
            params={"force": "true"},
            json={"instances": instance_count},
        )
        self.instances = instance_count

        if wait_for_readiness and instance_count > 0:
            self.wait_until_running()
