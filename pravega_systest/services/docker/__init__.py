"""
Docker swarm service handles.
"""

from pravega_systest.services.docker.base import DockerBasedService
from pravega_systest.services.docker.services import (
    BookkeeperDockerService,
    HDFSDockerService,
    PravegaControllerDockerService,
    PravegaSegmentStoreDockerService,
    ZookeeperDockerService,
)

__all__ = [
    "DockerBasedService",
    "ZookeeperDockerService",
    "BookkeeperDockerService",
    "PravegaControllerDockerService",
    "PravegaSegmentStoreDockerService",
    "HDFSDockerService",
]
