import os
from typing import Annotated, Any, Mapping, Optional, Tuple, Type

from pydantic import AliasChoices, BeforeValidator, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def get_config(
    key: str, default: str, properties: Optional[Mapping[str, str]] = None
) -> str:
    """
    Get a configuration value from the environment or explicit properties.

    Args:
        key: Configuration key, used verbatim as the environment variable name
        default: Value returned when neither source defines the key
        properties: Explicitly supplied properties (e.g. from the test runner)

    Returns:
        The environment value if set, else the property value, else default
    """
    if key in os.environ:
        return os.environ[key]
    if properties is not None and key in properties:
        return properties[key]
    return default


def parse_flag(value: Any) -> bool:
    """Only a case-insensitive "true" enables a flag; anything else is false."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


Flag = Annotated[bool, BeforeValidator(parse_flag)]


def is_skip_service_installation_enabled(
    properties: Optional[Mapping[str, str]] = None,
) -> bool:
    """
    Check whether already deployed services should be reused.

    When set, tests run against services that are already deployed on the
    cluster instead of deploying them first. Defaults to false.
    """
    return parse_flag(get_config("skipServiceInstallation", "false", properties))


def is_docker_exec_enabled(properties: Optional[Mapping[str, str]] = None) -> bool:
    return get_config("execType", "LOCAL", properties).strip().lower() == "docker"


def is_aws_execution(properties: Optional[Mapping[str, str]] = None) -> bool:
    return parse_flag(get_config("awsExec", "false", properties))


class Settings(BaseSettings):
    """
    Resolved system test settings.

    Values passed to the constructor play the role of system properties:
    environment variables override them, and they override the defaults.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Executor selection
    exec_type: str = Field(
        default="LOCAL", validation_alias=AliasChoices("execType", "exec_type")
    )

    # Flags
    security_enabled: Flag = Field(
        default=False,
        validation_alias=AliasChoices("securityEnabled", "security_enabled"),
    )
    skip_service_installation: Flag = Field(
        default=False,
        validation_alias=AliasChoices(
            "skipServiceInstallation", "skip_service_installation"
        ),
    )
    aws_exec: Flag = Field(
        default=False, validation_alias=AliasChoices("awsExec", "aws_exec")
    )

    # Client credentials used when security is enabled
    auth_username: str = Field(
        default="admin", validation_alias=AliasChoices("authUsername", "auth_username")
    )
    auth_password: SecretStr = Field(
        default=SecretStr("1111_aaaa"),
        validation_alias=AliasChoices("authPassword", "auth_password"),
    )

    # Directory holding the property bundles; packaged resources when unset
    properties_dir: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("propertiesDir", "properties_dir")
    )

    # Logging / OpenTelemetry
    log_level: str = Field(
        default="INFO", validation_alias=AliasChoices("logLevel", "log_level")
    )
    otel_service_name: str = Field(
        default="pravega-systest",
        validation_alias=AliasChoices("otelServiceName", "otel_service_name"),
    )
    otel_exporter_endpoint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "otelExporterEndpoint", "otel_exporter_endpoint"
        ),
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # Environment first, then explicit properties
        return env_settings, init_settings, dotenv_settings, file_secret_settings


settings = Settings()
