"""
Process-wide system test environment.

Resolves which deployment backend is active, whether security is enabled and
which Pravega properties apply. The result is computed once per process by
get_environment() and handed explicitly to the service factory.
"""

import threading
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

import javaproperties
from pydantic import SecretStr

from pravega_systest.core.config import Settings, settings
from pravega_systest.core.constants import (
    PROPERTIES_FILE,
    PROPERTIES_FILE_WITH_AUTH,
    ExecutorType,
)
from pravega_systest.core.telemetry import get_logger

logger = get_logger(__name__)

EMPTY_PROPERTIES: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class SystemTestEnvironment:
    """Configuration resolved once per process and shared by all factory calls."""

    executor_type: ExecutorType
    auth_enabled: bool
    pravega_properties: Mapping[str, str]
    auth_username: str
    auth_password: SecretStr


def resolve_executor_type(config: Settings) -> ExecutorType:
    """
    Determine the deployment backend from the execType setting.

    "docker" selects Docker and "remote_sequential" selects Marathon; any
    other value, including the LOCAL default, selects Kubernetes.
    """
    exec_type = config.exec_type.strip().lower()
    if exec_type == ExecutorType.DOCKER:
        return ExecutorType.DOCKER
    if exec_type == ExecutorType.REMOTE_SEQUENTIAL:
        return ExecutorType.REMOTE_SEQUENTIAL
    return ExecutorType.KUBERNETES


def resolve_auth_mode(config: Settings) -> bool:
    return config.security_enabled


def load_pravega_properties(
    auth_enabled: bool, properties_dir: Optional[str] = None
) -> Mapping[str, str]:
    """
    Load the Pravega property bundle matching the auth mode.

    Args:
        auth_enabled: Selects pravega_withAuth.properties over pravega.properties
        properties_dir: Directory to read the bundle from instead of the
            packaged resources

    Returns:
        Read-only mapping of property names to values. Empty if the bundle
        could not be read.
    """
    resource_name = PROPERTIES_FILE_WITH_AUTH if auth_enabled else PROPERTIES_FILE

    if properties_dir:
        resource = Path(properties_dir) / resource_name
    else:
        resource = resources.files("pravega_systest") / "resources" / resource_name

    try:
        with resource.open("r", encoding="utf-8") as fp:
            properties = javaproperties.load(fp)
    except (OSError, ValueError) as e:
        logger.error(f"Error reading properties file {resource_name}: {e}")
        return EMPTY_PROPERTIES

    logger.info(f"Loaded {len(properties)} properties from {resource_name}")
    return MappingProxyType(dict(properties))


def build_environment(config: Settings) -> SystemTestEnvironment:
    """Resolve the executor type, auth mode and property bundle from settings."""
    auth_enabled = resolve_auth_mode(config)
    environment = SystemTestEnvironment(
        executor_type=resolve_executor_type(config),
        auth_enabled=auth_enabled,
        pravega_properties=load_pravega_properties(
            auth_enabled, config.properties_dir
        ),
        auth_username=config.auth_username,
        auth_password=config.auth_password,
    )
    logger.info(
        f"System test environment: executor={environment.executor_type}, "
        f"auth_enabled={environment.auth_enabled}"
    )
    return environment


# Global instance
_environment: Optional[SystemTestEnvironment] = None
_environment_lock = threading.Lock()


def get_environment() -> SystemTestEnvironment:
    """
    Get the process-wide environment, resolving it on first use.

    Returns:
        SystemTestEnvironment: The same instance for the life of the process
    """
    global _environment

    if _environment is None:
        with _environment_lock:
            if _environment is None:
                _environment = build_environment(settings)

    return _environment
