import base64
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from pravega_systest.core.telemetry import get_logger
from pravega_systest.environment import SystemTestEnvironment, get_environment

logger = get_logger(__name__)


class Credentials(BaseModel):
    """Username/password credentials presented to the controller."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: SecretStr
    method: str = "Basic"

    @property
    def auth_token(self) -> str:
        """Base64 "username:password" token sent with the Basic method."""
        raw = f"{self.username}:{self.password.get_secret_value()}"
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")


class ClientConfig(BaseModel):
    """Configuration for a Pravega client connecting to a controller."""

    model_config = ConfigDict(frozen=True)

    controller_uri: str = Field(..., description="Controller endpoint URI")
    credentials: Optional[Credentials] = Field(
        default=None, description="Credentials, only set when auth is enabled"
    )


def build_client_config(
    controller_uri: str, environment: Optional[SystemTestEnvironment] = None
) -> ClientConfig:
    """
    Build a client config for the given controller.

    Args:
        controller_uri: Controller endpoint, e.g. "tcp://10.0.0.5:9090"
        environment: Resolved environment; the process-wide one if omitted

    Returns:
        A new ClientConfig, carrying credentials only when auth is enabled
    """
    if environment is None:
        environment = get_environment()

    if not environment.auth_enabled:
        logger.debug("Generating config with auth disabled.")
        return ClientConfig(controller_uri=controller_uri)

    logger.debug("Generating config with auth enabled.")
    return ClientConfig(
        controller_uri=controller_uri,
        credentials=Credentials(
            username=environment.auth_username,
            password=environment.auth_password,
        ),
    )
