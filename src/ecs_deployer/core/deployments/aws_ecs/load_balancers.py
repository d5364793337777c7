"""Target group lookup for ECS services."""

from typing import Any, cast

from botocore.exceptions import ClientError

from ecs_deployer.core.deployments.aws_ecs.errors import (
    AmbiguousTargetGroupError,
    TargetGroupNotFoundError,
)
from ecs_deployer.core.deployments.aws_ecs.models import LoadBalancerBinding, ServiceSpec


def retrieve_load_balancer(elbv2: Any, spec: ServiceSpec, version: str) -> LoadBalancerBinding:
    """Return the load balancer binding for a server group version.

    Without a target group in the spec the binding is left unattached.

    Raises:
        TargetGroupNotFoundError: If no target group has the requested name.
        AmbiguousTargetGroupError: If several target groups have the requested name.
    """
    if spec.target_group is None:
        return LoadBalancerBinding(container_name=version, container_port=spec.container_port)

    return LoadBalancerBinding(
        container_name=version,
        container_port=spec.container_port,
        target_group_arn=_target_group_arn(elbv2, spec.target_group),
    )


def _target_group_arn(elbv2: Any, name: str) -> str:
    """Resolve a target group name to its ARN."""
    try:
        response = elbv2.describe_target_groups(Names=[name])
    except ClientError as exc:
        code = exc.response.get("Error", {}).get("Code")
        if code == "TargetGroupNotFound":
            raise TargetGroupNotFoundError(
                f"There is no target group with the name {name}."
            ) from exc
        raise

    target_groups = response.get("TargetGroups", [])
    if len(target_groups) > 1:
        raise AmbiguousTargetGroupError(f"There are multiple target groups with the name {name}.")
    if not target_groups:
        raise TargetGroupNotFoundError(f"There is no target group with the name {name}.")
    return cast(str, target_groups[0]["TargetGroupArn"])
