"""
Kubernetes operator-managed service handles.
"""

from pravega_systest.services.kubernetes.base import K8sBasedService
from pravega_systest.services.kubernetes.services import (
    BookkeeperK8sService,
    PravegaClusterComponentService,
    PravegaControllerK8sService,
    PravegaSegmentStoreK8sService,
    ZookeeperK8sService,
)

__all__ = [
    "K8sBasedService",
    "PravegaClusterComponentService",
    "ZookeeperK8sService",
    "BookkeeperK8sService",
    "PravegaControllerK8sService",
    "PravegaSegmentStoreK8sService",
]
