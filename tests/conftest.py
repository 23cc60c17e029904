# Shared pytest configuration and fixtures for all test types
from types import MappingProxyType

import pytest
from pydantic import SecretStr

import pravega_systest.environment as environment_module
import pravega_systest.factory as factory_module
from pravega_systest.core.constants import ExecutorType
from pravega_systest.environment import SystemTestEnvironment

# Flags and image settings read from the environment by the framework
CONFIG_ENV_VARS = [
    "execType",
    "securityEnabled",
    "skipServiceInstallation",
    "awsExec",
    "authUsername",
    "authPassword",
    "propertiesDir",
    "namespace",
    "dockerImageRegistry",
    "imageVersion",
    "pravegaImageName",
    "bookkeeperImageName",
    "zookeeperImage",
    "zookeeperImageRepository",
    "zookeeperImageVersion",
    "hdfsImage",
    "hdfsUrl",
    "marathonURL",
]


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Run every test without framework settings leaking in from the shell."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Drop the process-wide environment and factory between tests."""
    monkeypatch.setattr(environment_module, "_environment", None)
    monkeypatch.setattr(factory_module, "_service_factory", None)


@pytest.fixture
def pravega_properties():
    return MappingProxyType({"log.level": "DEBUG", "pravegaservice.containerCount": "4"})


@pytest.fixture
def make_environment(pravega_properties):
    """Build a SystemTestEnvironment for a given executor type."""

    def _make(
        executor_type=ExecutorType.KUBERNETES,
        auth_enabled=False,
        auth_username="admin",
        auth_password="1111_aaaa",
    ) -> SystemTestEnvironment:
        return SystemTestEnvironment(
            executor_type=executor_type,
            auth_enabled=auth_enabled,
            pravega_properties=pravega_properties,
            auth_username=auth_username,
            auth_password=SecretStr(auth_password),
        )

    return _make
