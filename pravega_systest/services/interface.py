"""
Service handle interface.

Defines the common lifecycle contract for Pravega cluster components
regardless of the backend they are deployed on.
"""

import time
from abc import ABC, abstractmethod
from typing import List
from urllib.parse import urlsplit

from pravega_systest.core.exceptions import ConfigurationError

# Seconds between readiness checks while waiting for a service
READINESS_POLL_INTERVAL = 5


def host_port(uri: str) -> str:
    """
    Strip the scheme from a service URI: "tcp://zk:2181" -> "zk:2181".

    A bare "host:port" without a scheme is returned unchanged.

    Raises:
        ConfigurationError: If the URI has a scheme but no host
    """
    if "//" not in uri:
        return uri

    netloc = urlsplit(uri).netloc
    if not netloc:
        raise ConfigurationError(f"Service URI {uri!r} has no host")
    return netloc


class Service(ABC):
    """Abstract base class for a controllable remote service (Docker, K8s, Marathon)."""

    def __init__(self, service_id: str):
        self.id = service_id

    def get_id(self) -> str:
        return self.id

    @abstractmethod
    def start(self, wait_for_readiness: bool) -> None:
        """
        Deploy the service.

        Args:
            wait_for_readiness: Block until is_running() reports True
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Remove the service and its instances."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        pass

    @abstractmethod
    def get_service_details(self) -> List[str]:
        """
        Get the endpoints of the running instances.

        Returns:
            List of URIs (e.g. "tcp://10.0.0.5:2181"), one per instance and port
        """
        pass

    @abstractmethod
    def scale_service(self, instance_count: int, wait_for_readiness: bool) -> None:
        """
        Change the number of running instances.

        Args:
            instance_count: Desired number of instances
            wait_for_readiness: Block until the scaled service is running
        """
        pass

    def wait_until_running(self, poll_interval: float = READINESS_POLL_INTERVAL) -> None:
        """Poll is_running() until it reports True. There is no timeout."""
        while not self.is_running():
            time.sleep(poll_interval)
