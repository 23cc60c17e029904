from types import MappingProxyType
from typing import Any, Dict, Mapping

from pravega_systest.core.constants import PRAVEGA_API_VERSION


def build_patched_pravega_cluster_spec(
    service: str,
    replica_count: int,
    component: str,
    namespace: str,
    name: str,
    kind: str,
) -> Mapping[str, Any]:
    """
    Build a cluster spec holding only the values that need to be patched.

    Every value not named here keeps whatever was set at deployment time;
    merging is left to the orchestration layer.

    Args:
        service: Replica field to patch (e.g. "segmentStoreReplicas")
        replica_count: Desired number of replicas
        component: Component section of the spec (e.g. "pravega")
        namespace: Namespace of the cluster resource
        name: Name of the cluster resource
        kind: Kind of the cluster resource

    Returns:
        Read-only nested mapping in custom-resource patch shape
    """
    component_spec = MappingProxyType({service: replica_count})

    return MappingProxyType(
        {
            "apiVersion": PRAVEGA_API_VERSION,
            "kind": kind,
            "metadata": MappingProxyType({"name": name, "namespace": namespace}),
            "spec": MappingProxyType({component: component_spec}),
        }
    )


def to_request_body(spec: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy a (nested) read-only spec into plain dicts for API serialization."""
    return {
        key: to_request_body(value) if isinstance(value, Mapping) else value
        for key, value in spec.items()
    }
