from typing import Any, Dict, List, Mapping

from pravega_systest.cluster_spec import (
    build_patched_pravega_cluster_spec,
    to_request_body,
)
from pravega_systest.core.config import get_config
from pravega_systest.core.constants import (
    BOOKKEEPER_PORT,
    DOCKER_CONTROLLER_PORT,
    SEGMENT_STORE_PORT,
    ZOOKEEPER_PORT,
)
from pravega_systest.core.telemetry import get_logger
from pravega_systest.services.images import image_version, registry_prefix
from pravega_systest.services.interface import host_port
from pravega_systest.services.kubernetes.base import K8sBasedService

logger = get_logger(__name__)

PRAVEGA_CLUSTER_NAME = "pravega"
ZOOKEEPER_CLUSTER_NAME = "zookeeper"
CONTROLLER_REST_PORT = 10080
DEFAULT_BOOKKEEPER_REPLICAS = 3


class ZookeeperK8sService(K8sBasedService):
    """
    ZooKeeper ensemble as a ZookeeperCluster resource.

    The Pravega property bundle is accepted like on every Kubernetes handle
    but is not rendered; those options only apply to the PravegaCluster.
    """

    group = "zookeeper.pravega.io"
    version = "v1beta1"
    plural = "zookeeperclusters"
    kind = "ZookeeperCluster"
    resource_name = ZOOKEEPER_CLUSTER_NAME
    template_name = "zookeeper_cluster.yaml.j2"

    def __init__(self, service_id: str, properties: Mapping[str, str]):
        super().__init__(service_id, properties)
        self.replicas = 3

    @property
    def pod_label_selector(self) -> str:
        return f"app={self.resource_name}"

    @property
    def ports(self) -> List[int]:
        return [ZOOKEEPER_PORT]

    def template_vars(self) -> Dict[str, Any]:
        return {
            "replicas": self.replicas,
            "image_repository": get_config("zookeeperImageRepository", "pravega/zookeeper"),
            "image_tag": get_config("zookeeperImageVersion", "latest"),
        }

    def start(self, wait_for_readiness: bool) -> None:
        self.deploy_resource()
        if wait_for_readiness:
            self.wait_until_running()

    def stop(self) -> None:
        self.delete_resource()

    def scale_service(self, instance_count: int, wait_for_readiness: bool) -> None:
        # ZookeeperCluster keeps its replica count at the top of the spec
        self.patch_resource({"spec": {"replicas": instance_count}})
        self.replicas = instance_count
        if wait_for_readiness and instance_count > 0:
            self.wait_until_running()


class PravegaClusterComponentService(K8sBasedService):
    """
    A component of the shared PravegaCluster resource.

    The first component started creates the cluster; each component then
    scales its own replica field with a patched cluster spec.
    """

    group = "pravega.pravega.io"
    version = "v1alpha1"
    plural = "pravegaclusters"
    kind = "PravegaCluster"
    resource_name = PRAVEGA_CLUSTER_NAME
    template_name = "pravega_cluster.yaml.j2"

    # Section of the cluster spec and replica field owned by the component
    component: str
    replica_field: str

    def __init__(
        self, service_id: str, zk_uri: str, properties: Mapping[str, str], replicas: int
    ):
        super().__init__(service_id, properties)
        self.zk_uri = zk_uri
        self.replicas = replicas

    def template_vars(self) -> Dict[str, Any]:
        prefix = registry_prefix()
        return {
            "zookeeper_uri": host_port(self.zk_uri),
            "bookkeeper_image_repository": prefix
            + get_config("bookkeeperImageName", "bookkeeper"),
            "pravega_image_repository": prefix
            + get_config("pravegaImageName", "pravega"),
            "image_tag": image_version(),
            "bookkeeper_replicas": DEFAULT_BOOKKEEPER_REPLICAS,
            "controller_replicas": 0,
            "segment_store_replicas": 0,
            "options": self.properties,
        }

    def start(self, wait_for_readiness: bool) -> None:
        self.deploy_resource()
        self.scale_service(self.replicas, wait_for_readiness)

    def stop(self) -> None:
        self.scale_service(0, wait_for_readiness=False)

    def scale_service(self, instance_count: int, wait_for_readiness: bool) -> None:
        spec = build_patched_pravega_cluster_spec(
            self.replica_field,
            instance_count,
            self.component,
            self.namespace,
            self.resource_name,
            self.kind,
        )
        logger.info(
            f"Scaling {self.component}.{self.replica_field} of {self.resource_name} "
            f"to {instance_count}"
        )
        self.patch_resource(to_request_body(spec))
        self.replicas = instance_count

        if wait_for_readiness and instance_count > 0:
            self.wait_until_running()


class BookkeeperK8sService(PravegaClusterComponentService):
    component = "bookkeeper"
    replica_field = "replicas"

    def __init__(self, service_id: str, zk_uri: str, properties: Mapping[str, str]):
        super().__init__(service_id, zk_uri, properties, DEFAULT_BOOKKEEPER_REPLICAS)

    @property
    def pod_label_selector(self) -> str:
        return f"pravega_cluster={self.resource_name},component=bookie"

    @property
    def ports(self) -> List[int]:
        return [BOOKKEEPER_PORT]


class PravegaControllerK8sService(PravegaClusterComponentService):
    component = "pravega"
    replica_field = "controllerReplicas"

    def __init__(self, service_id: str, zk_uri: str, properties: Mapping[str, str]):
        super().__init__(service_id, zk_uri, properties, 1)

    @property
    def pod_label_selector(self) -> str:
        return f"pravega_cluster={self.resource_name},component=pravega-controller"

    @property
    def ports(self) -> List[int]:
        return [DOCKER_CONTROLLER_PORT, CONTROLLER_REST_PORT]


class PravegaSegmentStoreK8sService(PravegaClusterComponentService):
    component = "pravega"
    replica_field = "segmentStoreReplicas"

    def __init__(self, service_id: str, zk_uri: str, properties: Mapping[str, str]):
        super().__init__(service_id, zk_uri, properties, 1)

    @property
    def pod_label_selector(self) -> str:
        return f"pravega_cluster={self.resource_name},component=pravega-segmentstore"

    @property
    def ports(self) -> List[int]:
        return [SEGMENT_STORE_PORT]
