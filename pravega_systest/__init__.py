"""
Pravega system test framework.

Provisions ZooKeeper, BookKeeper, controller and segment store handles on
Marathon, Docker swarm or Kubernetes, and resolves the configuration needed
to reach them.
"""

from pravega_systest.client import ClientConfig, Credentials, build_client_config
from pravega_systest.cluster_spec import build_patched_pravega_cluster_spec
from pravega_systest.core.config import (
    get_config,
    is_aws_execution,
    is_docker_exec_enabled,
    is_skip_service_installation_enabled,
)
from pravega_systest.core.constants import (
    ALTERNATIVE_CONTROLLER_PORT,
    ALTERNATIVE_REST_PORT,
    DOCKER_CONTROLLER_PORT,
    DOCKER_NETWORK,
    MARATHON_CONTROLLER_PORT,
    REST_PORT,
    ExecutorType,
)
from pravega_systest.environment import (
    SystemTestEnvironment,
    build_environment,
    get_environment,
    load_pravega_properties,
    resolve_auth_mode,
    resolve_executor_type,
)
from pravega_systest.factory import (
    ServiceFactory,
    create_bookkeeper_service,
    create_controller_service,
    create_segment_store_service,
    create_zookeeper_service,
    get_service_factory,
)
from pravega_systest.services import Service

__all__ = [
    "ExecutorType",
    "SystemTestEnvironment",
    "Service",
    "ServiceFactory",
    "ClientConfig",
    "Credentials",
    "DOCKER_CONTROLLER_PORT",
    "REST_PORT",
    "MARATHON_CONTROLLER_PORT",
    "ALTERNATIVE_CONTROLLER_PORT",
    "ALTERNATIVE_REST_PORT",
    "DOCKER_NETWORK",
    "get_config",
    "is_skip_service_installation_enabled",
    "is_docker_exec_enabled",
    "is_aws_execution",
    "resolve_executor_type",
    "resolve_auth_mode",
    "load_pravega_properties",
    "build_environment",
    "get_environment",
    "get_service_factory",
    "create_zookeeper_service",
    "create_bookkeeper_service",
    "create_controller_service",
    "create_segment_store_service",
    "build_client_config",
    "build_patched_pravega_cluster_spec",
]
