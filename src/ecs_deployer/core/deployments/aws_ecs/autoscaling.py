"""Application Auto Scaling registration for ECS services."""

from collections.abc import Callable
from typing import Any

from ecs_deployer.core.deployments.aws_ecs.metrics import (
    ECS_SCALABLE_DIMENSION,
    ECS_SERVICE_NAMESPACE,
    MetricAssociator,
)
from ecs_deployer.core.deployments.aws_ecs.models import ServiceSpec


def scalable_target_resource_id(cluster_name: str, service_name: str) -> str:
    """Return the Application Auto Scaling resource ID of an ECS service."""
    return f"service/{cluster_name}/{service_name}"


def register_scalable_target(
    session: Any,
    spec: ServiceSpec,
    service_name: str,
    role_arn: str,
    reporter: Callable[[str], None],
) -> str:
    """Register an ECS service as a scalable target.

    Returns:
        The scalable target resource ID.
    """
    autoscaling = session.client("application-autoscaling")
    resource_id = scalable_target_resource_id(spec.ecs_cluster_name, service_name)

    reporter("Creating Amazon Application Auto Scaling Scalable Target Definition...")
    autoscaling.register_scalable_target(
        ServiceNamespace=ECS_SERVICE_NAMESPACE,
        ScalableDimension=ECS_SCALABLE_DIMENSION,
        ResourceId=resource_id,
        RoleARN=role_arn,
        MinCapacity=spec.capacity.min,
        MaxCapacity=spec.capacity.max,
    )
    reporter("Done creating Amazon Application Auto Scaling Scalable Target Definition.")
    return resource_id


def associate_alarms(
    associator: MetricAssociator,
    spec: ServiceSpec,
    region: str,
    service_name: str,
    resource_id: str,
) -> bool:
    """Attach the spec's alarm-driven scaling policies to a scalable target.

    Returns:
        True when alarms were associated, false when the spec declares none.
    """
    if not spec.autoscaling_policies:
        return False

    alarm_names = [alarm.alarm_name for alarm in spec.autoscaling_policies]
    associator.associate_asg_with_metrics(
        spec.credential_account,
        region,
        alarm_names,
        service_name,
        resource_id,
    )
    return True
