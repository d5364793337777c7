"""ECS deployer core modules."""

from ecs_deployer.core.accounts import credentials_from_settings
from ecs_deployer.core.models import ServiceSpecFile, SpecFileError, load_service_spec
from ecs_deployer.core.settings import DeployerSettings, SettingsError, get_settings

__all__ = [
    "credentials_from_settings",
    "DeployerSettings",
    "get_settings",
    "load_service_spec",
    "ServiceSpecFile",
    "SettingsError",
    "SpecFileError",
]
