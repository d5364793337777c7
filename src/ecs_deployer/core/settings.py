"""Runtime settings for the ECS deployer."""

from typing import Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ecs_deployer.config.paths import env_path
from ecs_deployer.core.deployments.aws_ecs import DeploymentConfigurationError

ENV_FILE_PATH = str(env_path())

CredentialKind = Literal["assume-role", "federated-assume-role", "ecs-assume-role", "static"]


class SettingsError(DeploymentConfigurationError):
    """Raised when deployer settings cannot be loaded."""


class AWSSettings(BaseSettings):
    """AWS session configuration."""

    model_config = SettingsConfigDict(env_prefix="AWS_", env_file=ENV_FILE_PATH, extra="ignore")

    profile: str | None = Field(default=None, description="AWS named profile")


class CredentialSettings(BaseSettings):
    """Credentials of the account server groups are deployed into."""

    model_config = SettingsConfigDict(
        env_prefix="ECS_DEPLOYER_",
        env_file=ENV_FILE_PATH,
        extra="ignore",
    )

    credential_kind: CredentialKind = Field(
        default="assume-role",
        description="How the deployer reaches the target account",
    )
    assume_role: str | None = Field(
        default=None,
        description="Role assumed in the target account, e.g. role/ecs-deployer",
    )
    account_id: str | None = Field(
        default=None,
        description="Target account ID, read from STS when unset",
    )
    partition: str = Field(default="aws", description="AWS partition of the target account")
    session_name: str | None = Field(default=None, description="Federated session name")


class DeployerSettings(BaseSettings):
    """Main deployer configuration."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    aws: AWSSettings
    credentials: CredentialSettings


def get_settings() -> DeployerSettings:
    """Load and return the deployer configuration."""
    try:
        return DeployerSettings(aws=AWSSettings(), credentials=CredentialSettings())
    except ValidationError as exc:
        raise SettingsError(f"Invalid deployer settings: {exc}") from exc
