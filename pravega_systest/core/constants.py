from enum import StrEnum


class ExecutorType(StrEnum):
    """Deployment backends a system test can run against."""

    REMOTE_SEQUENTIAL = "remote_sequential"
    DOCKER = "docker"
    KUBERNETES = "kubernetes"


# Controller and REST ports
DOCKER_CONTROLLER_PORT = 9090
REST_PORT = 9091
MARATHON_CONTROLLER_PORT = 9092
ALTERNATIVE_CONTROLLER_PORT = 9093
ALTERNATIVE_REST_PORT = 9094

ZOOKEEPER_PORT = 2181
BOOKKEEPER_PORT = 3181
SEGMENT_STORE_PORT = 12345
HDFS_PORT = 8020

DOCKER_NETWORK = "docker-network"

# Property bundles, selected by auth mode
PROPERTIES_FILE = "pravega.properties"
PROPERTIES_FILE_WITH_AUTH = "pravega_withAuth.properties"

PRAVEGA_API_VERSION = "pravega.pravega.io/v1alpha1"

DEFAULT_CONTROLLER_NAME = "controller"
