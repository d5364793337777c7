"""ECS deployer - create versioned ECS server groups with autoscaling."""

from ecs_deployer.core.deployments.aws_ecs import (
    DeploymentResult,
    ServiceSpec,
    create_server_group,
)

__all__ = [
    "create_server_group",
    "DeploymentResult",
    "ServiceSpec",
]
