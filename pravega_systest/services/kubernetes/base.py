"""
Kubernetes backend.

Components are custom resources reconciled by the Zookeeper and Pravega
operators, managed using:
- Kubernetes Python client for API interactions
- Jinja2 templates for the custom resource manifests
"""

import os
from abc import abstractmethod
from typing import Any, Dict, List, Mapping, Optional

import yaml
from jinja2 import Environment, FileSystemLoader
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from pravega_systest.core.config import get_config
from pravega_systest.core.exceptions import ServiceError
from pravega_systest.core.telemetry import get_logger
from pravega_systest.services.interface import Service

logger = get_logger(__name__)

TEMPLATE_DIR = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "templates"
)


class K8sBasedService(Service):
    """Service deployed as an operator-managed custom resource."""

    group: str
    version: str
    plural: str
    kind: str
    resource_name: str
    template_name: str

    def __init__(self, service_id: str, properties: Mapping[str, str]):
        super().__init__(service_id)
        self.properties = properties
        self.namespace = get_config("namespace", "default")
        self.jinja_env = Environment(loader=FileSystemLoader(TEMPLATE_DIR))
        self._core_v1: Optional[client.CoreV1Api] = None
        self._custom_objects: Optional[client.CustomObjectsApi] = None

    def _connect(self) -> None:
        """Load K8s config (in-cluster or kubeconfig) and create API clients."""
        try:
            config.load_incluster_config()
        except config.ConfigException:
            config.load_kube_config()

        self._core_v1 = client.CoreV1Api()
        self._custom_objects = client.CustomObjectsApi()

    @property
    def core_v1(self) -> client.CoreV1Api:
        if self._core_v1 is None:
            self._connect()
        return self._core_v1

    @property
    def custom_objects(self) -> client.CustomObjectsApi:
        if self._custom_objects is None:
            self._connect()
        return self._custom_objects

    @property
    @abstractmethod
    def pod_label_selector(self) -> str:
        pass

    @property
    @abstractmethod
    def ports(self) -> List[int]:
        pass

    @abstractmethod
    def template_vars(self) -> Dict[str, Any]:
        pass

    def render_manifest(self) -> Dict[str, Any]:
        """Render the custom resource manifest from its Jinja2 template."""
        template = self.jinja_env.get_template(self.template_name)
        manifest_yaml = template.render(
            name=self.resource_name, namespace=self.namespace, **self.template_vars()
        )
        return yaml.safe_load(manifest_yaml)

    def deploy_resource(self) -> None:
        """Create the custom resource, reusing it if it is already deployed."""
        body = self.render_manifest()

        try:
            self.custom_objects.create_namespaced_custom_object(
                group=self.group,
                version=self.version,
                namespace=self.namespace,
                plural=self.plural,
                body=body,
            )
            logger.info(f"Created {self.kind} {self.resource_name} in {self.namespace}")
        except ApiException as e:
            if e.status == 409:
                logger.info(f"{self.kind} {self.resource_name} already deployed")
                return
            raise ServiceError(
                f"Failed to create {self.kind} {self.resource_name}: {e}"
            ) from e

    def patch_resource(self, body: Dict[str, Any]) -> None:
        try:
            self.custom_objects.patch_namespaced_custom_object(
                group=self.group,
                version=self.version,
                namespace=self.namespace,
                plural=self.plural,
                name=self.resource_name,
                body=body,
            )
        except ApiException as e:
            raise ServiceError(
                f"Failed to patch {self.kind} {self.resource_name}: {e}"
            ) from e

    def delete_resource(self) -> None:
        try:
            self.custom_objects.delete_namespaced_custom_object(
                group=self.group,
                version=self.version,
                namespace=self.namespace,
                plural=self.plural,
                name=self.resource_name,
            )
            logger.info(f"Deleted {self.kind} {self.resource_name} in {self.namespace}")
        except ApiException as e:
            if e.status == 404:
                logger.info(f"{self.kind} {self.resource_name} already deleted or not found")
                return
            raise ServiceError(
                f"Failed to delete {self.kind} {self.resource_name}: {e}"
            ) from e

    def _list_pods(self) -> List[Any]:
        try:
            pods = self.core_v1.list_namespaced_pod(
                namespace=self.namespace, label_selector=self.pod_label_selector
            )
        except ApiException as e:
            raise ServiceError(f"Failed to list pods for {self.id}: {e}") from e

        return sorted(pods.items, key=lambda pod: pod.metadata.name)

    def is_running(self) -> bool:
        pods = self._list_pods()
        return bool(pods) and all(pod.status.phase == "Running" for pod in pods)

    def get_service_details(self) -> List[str]:
        return [
            f"tcp://{pod.status.pod_ip}:{port}"
            for pod in self._list_pods()
            if pod.status.phase == "Running"
            for port in self.ports
        ]
