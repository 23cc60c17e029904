"""
Service factory.

Maps each Pravega cluster role to the handle for the active deployment
backend. This is the only place that knows which concrete handle serves a
(role, backend) pair.
"""

from typing import Optional

from pravega_systest.core.constants import DEFAULT_CONTROLLER_NAME, ExecutorType
from pravega_systest.core.telemetry import get_logger, trace_span
from pravega_systest.environment import SystemTestEnvironment, get_environment
from pravega_systest.services.docker import (
    BookkeeperDockerService,
    HDFSDockerService,
    PravegaControllerDockerService,
    PravegaSegmentStoreDockerService,
    ZookeeperDockerService,
)
from pravega_systest.services.interface import Service
from pravega_systest.services.kubernetes import (
    BookkeeperK8sService,
    PravegaControllerK8sService,
    PravegaSegmentStoreK8sService,
    ZookeeperK8sService,
)
from pravega_systest.services.marathon import (
    BookkeeperMarathonService,
    PravegaControllerMarathonService,
    PravegaSegmentStoreMarathonService,
    ZookeeperMarathonService,
)

logger = get_logger(__name__)

HDFS_SERVICE_ID = "hdfs"


class ServiceFactory:
    """
    Factory for the service handles of a system test.

    Built from a resolved SystemTestEnvironment; every create_* call
    dispatches on its executor type. Kubernetes handles additionally receive
    the Pravega property bundle, and Kubernetes is also the fallback for any
    other executor type.
    """

    def __init__(self, environment: SystemTestEnvironment):
        self.environment = environment

    @trace_span
    def create_zookeeper_service(self) -> Service:
        service_id = "zookeeper"

        match self.environment.executor_type:
            case ExecutorType.REMOTE_SEQUENTIAL:
                return ZookeeperMarathonService(service_id)
            case ExecutorType.DOCKER:
                return ZookeeperDockerService(service_id)
            case _:
                return ZookeeperK8sService(
                    service_id, self.environment.pravega_properties
                )

    @trace_span
    def create_bookkeeper_service(self, zk_uri: str) -> Service:
        service_id = "bookkeeper"

        match self.environment.executor_type:
            case ExecutorType.REMOTE_SEQUENTIAL:
                return BookkeeperMarathonService(service_id, zk_uri)
            case ExecutorType.DOCKER:
                return BookkeeperDockerService(service_id, zk_uri)
            case _:
                return BookkeeperK8sService(
                    service_id, zk_uri, self.environment.pravega_properties
                )

    @trace_span
    def create_controller_service(
        self, zk_uri: str, service_name: str = DEFAULT_CONTROLLER_NAME
    ) -> Service:
        match self.environment.executor_type:
            case ExecutorType.REMOTE_SEQUENTIAL:
                return PravegaControllerMarathonService(service_name, zk_uri)
            case ExecutorType.DOCKER:
                return PravegaControllerDockerService(service_name, zk_uri)
            case _:
                return PravegaControllerK8sService(
                    service_name, zk_uri, self.environment.pravega_properties
                )

    @trace_span
    def ensure_hdfs_service(self) -> str:
        """
        Make sure the HDFS service backing Docker segment stores is running.

        Starts it and waits for readiness if it is not running. Start
        failures propagate to the caller.

        Returns:
            The first endpoint reported by the HDFS service
        """
        hdfs_service = HDFSDockerService(HDFS_SERVICE_ID)

        if not hdfs_service.is_running():
            logger.info("HDFS service is not running, starting it")
            hdfs_service.start(wait_for_readiness=True)

        return hdfs_service.get_service_details()[0]

    @trace_span
    def create_segment_store_service(self, zk_uri: str, controller_uri: str) -> Service:
        service_id = "segmentstore"

        hdfs_uri: Optional[str] = None
        if self.environment.executor_type == ExecutorType.DOCKER:
            hdfs_uri = self.ensure_hdfs_service()

        match self.environment.executor_type:
            case ExecutorType.REMOTE_SEQUENTIAL:
                return PravegaSegmentStoreMarathonService(
                    service_id, zk_uri, controller_uri
                )
            case ExecutorType.DOCKER:
                return PravegaSegmentStoreDockerService(
                    service_id, zk_uri, hdfs_uri, controller_uri
                )
            case _:
                return PravegaSegmentStoreK8sService(
                    service_id, zk_uri, self.environment.pravega_properties
                )


# Global instance
_service_factory: Optional[ServiceFactory] = None


def get_service_factory() -> ServiceFactory:
    """Get the service factory for the process-wide environment."""
    global _service_factory

    if _service_factory is None:
        _service_factory = ServiceFactory(get_environment())

    return _service_factory


def create_zookeeper_service() -> Service:
    return get_service_factory().create_zookeeper_service()


def create_bookkeeper_service(zk_uri: str) -> Service:
    return get_service_factory().create_bookkeeper_service(zk_uri)


def create_controller_service(
    zk_uri: str, service_name: str = DEFAULT_CONTROLLER_NAME
) -> Service:
    return get_service_factory().create_controller_service(zk_uri, service_name)


def create_segment_store_service(zk_uri: str, controller_uri: str) -> Service:
    return get_service_factory().create_segment_store_service(zk_uri, controller_uri)
