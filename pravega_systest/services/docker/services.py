from typing import Dict, List, Optional

from pravega_systest.core.config import get_config
from pravega_systest.core.constants import (
    BOOKKEEPER_PORT,
    DOCKER_CONTROLLER_PORT,
    HDFS_PORT,
    REST_PORT,
    SEGMENT_STORE_PORT,
    ZOOKEEPER_PORT,
)
from pravega_systest.core.exceptions import ConfigurationError
from pravega_systest.services.docker.base import DockerBasedService
from pravega_systest.services.images import pravega_image
from pravega_systest.services.interface import host_port


class ZookeeperDockerService(DockerBasedService):
    def __init__(self, service_id: str):
        super().__init__(service_id)

    @property
    def image(self) -> str:
        return get_config("zookeeperImage", "zookeeper:3.5.4-beta")

    @property
    def ports(self) -> List[int]:
        return [ZOOKEEPER_PORT]


class BookkeeperDockerService(DockerBasedService):
    def __init__(self, service_id: str, zk_uri: str):
        super().__init__(service_id, replicas=3)
        self.zk_uri = zk_uri

    @property
    def image(self) -> str:
        return pravega_image("bookkeeperImageName", "bookkeeper")

    @property
    def ports(self) -> List[int]:
        return [BOOKKEEPER_PORT]

    def env_vars(self) -> Dict[str, str]:
        return {
            "ZK_URL": host_port(self.zk_uri),
            "bookiePort": str(BOOKKEEPER_PORT),
            "BK_useHostNameAsBookieID": "false",
        }


class PravegaControllerDockerService(DockerBasedService):
    def __init__(self, service_id: str, zk_uri: str):
        super().__init__(service_id)
        self.zk_uri = zk_uri

    @property
    def image(self) -> str:
        return pravega_image("pravegaImageName", "pravega")

    @property
    def ports(self) -> List[int]:
        return [DOCKER_CONTROLLER_PORT, REST_PORT]

    def env_vars(self) -> Dict[str, str]:
        return {
            "WAIT_FOR": host_port(self.zk_uri),
            "ZK_URL": host_port(self.zk_uri),
            "CONTROLLER_SERVER_PORT": str(DOCKER_CONTROLLER_PORT),
            "REST_SERVER_PORT": str(REST_PORT),
        }

    def command_args(self) -> List[str]:
        return ["controller"]


class PravegaSegmentStoreDockerService(DockerBasedService):
    def __init__(
        self,
        service_id: str,
        zk_uri: str,
        hdfs_uri: Optional[str],
        controller_uri: str,
    ):
        if not hdfs_uri:
            raise ConfigurationError(
                f"Segment store {service_id} requires an HDFS URI in Docker mode"
            )
        super().__init__(service_id)
        self.zk_uri = zk_uri
        self.hdfs_uri = hdfs_uri
        self.controller_uri = controller_uri

    @property
    def image(self) -> str:
        return pravega_image("pravegaImageName", "pravega")

    @property
    def ports(self) -> List[int]:
        return [SEGMENT_STORE_PORT]

    def env_vars(self) -> Dict[str, str]:
        return {
            "WAIT_FOR": host_port(self.zk_uri),
            "ZK_URL": host_port(self.zk_uri),
            "BK_ZK_URL": host_port(self.zk_uri),
            "CONTROLLER_URL": self.controller_uri,
            "TIER2_STORAGE": "HDFS",
            "HDFS_URL": host_port(self.hdfs_uri),
            "HDFS_REPLICATION": "1",
        }

    def command_args(self) -> List[str]:
        return ["segmentstore"]


class HDFSDockerService(DockerBasedService):
    """HDFS backing the segment store's long-term storage in Docker mode."""

    def __init__(self, service_id: str):
        super().__init__(service_id)

    @property
    def image(self) -> str:
        return get_config("hdfsImage", "pravega/hdfs:2.7.7")

    @property
    def ports(self) -> List[int]:
        # Namenode first; its endpoint is the one handed to the segment store
        return [HDFS_PORT, 50090, 50010, 50020, 50075]
