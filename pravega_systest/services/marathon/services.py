from typing import Dict, List, Optional

import httpx

from pravega_systest.core.config import get_config
from pravega_systest.core.constants import (
    ALTERNATIVE_CONTROLLER_PORT,
    ALTERNATIVE_REST_PORT,
    BOOKKEEPER_PORT,
    DEFAULT_CONTROLLER_NAME,
    MARATHON_CONTROLLER_PORT,
    REST_PORT,
    SEGMENT_STORE_PORT,
    ZOOKEEPER_PORT,
)
from pravega_systest.services.images import pravega_image
from pravega_systest.services.interface import host_port
from pravega_systest.services.marathon.base import MarathonBasedService


class ZookeeperMarathonService(MarathonBasedService):
    def __init__(self, service_id: str, http_client: Optional[httpx.Client] = None):
        super().__init__(service_id, http_client=http_client)

    @property
    def image(self) -> str:
        return get_config("zookeeperImage", "jplock/zookeeper:3.5.1-alpha")

    @property
    def ports(self) -> List[int]:
        return [ZOOKEEPER_PORT]


class BookkeeperMarathonService(MarathonBasedService):
    mem = 2048

    def __init__(
        self, service_id: str, zk_uri: str, http_client: Optional[httpx.Client] = None
    ):
        super().__init__(service_id, instances=3, http_client=http_client)
        self.zk_uri = zk_uri

    @property
    def image(self) -> str:
        return pravega_image("bookkeeperImageName", "bookkeeper")

    @property
    def ports(self) -> List[int]:
        return [BOOKKEEPER_PORT]

    def env_vars(self) -> Dict[str, str]:
        return {"ZK_URL": host_port(self.zk_uri), "bookiePort": str(BOOKKEEPER_PORT)}


class PravegaControllerMarathonService(MarathonBasedService):
    """
    Pravega controller app.

    A second controller deployed under another name listens on the
    alternative ports so both can share a host.
    """

    def __init__(
        self, service_id: str, zk_uri: str, http_client: Optional[httpx.Client] = None
    ):
        super().__init__(service_id, http_client=http_client)
        self.zk_uri = zk_uri
        if service_id == DEFAULT_CONTROLLER_NAME:
            self.controller_port = MARATHON_CONTROLLER_PORT
            self.rest_port = REST_PORT
        else:
            self.controller_port = ALTERNATIVE_CONTROLLER_PORT
            self.rest_port = ALTERNATIVE_REST_PORT

    @property
    def image(self) -> str:
        return pravega_image("pravegaImageName", "pravega")

    @property
    def ports(self) -> List[int]:
        return [self.controller_port, self.rest_port]

    def env_vars(self) -> Dict[str, str]:
        return {
            "ZK_URL": host_port(self.zk_uri),
            "CONTROLLER_SERVER_PORT": str(self.controller_port),
            "REST_SERVER_PORT": str(self.rest_port),
        }

    def command_args(self) -> List[str]:
        return ["controller"]


class PravegaSegmentStoreMarathonService(MarathonBasedService):
    mem = 4096

    def __init__(
        self,
        service_id: str,
        zk_uri: str,
        controller_uri: str,
        http_client: Optional[httpx.Client] = None,
    ):
        super().__init__(service_id, http_client=http_client)
        self.zk_uri = zk_uri
        self.controller_uri = controller_uri

    @property
    def image(self) -> str:
        return pravega_image("pravegaImageName", "pravega")

    @property
    def ports(self) -> List[int]:
        return [SEGMENT_STORE_PORT]

    def env_vars(self) -> Dict[str, str]:
        return {
            "ZK_URL": host_port(self.zk_uri),
            "BK_ZK_URL": host_port(self.zk_uri),
            "CONTROLLER_URL": self.controller_uri,
            "TIER2_STORAGE": "HDFS",
            "HDFS_URL": get_config("hdfsUrl", "namenode-0-node.hdfs.mesos:9001"),
        }

    def command_args(self) -> List[str]:
        return ["segmentstore"]
