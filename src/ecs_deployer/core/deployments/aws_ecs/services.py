"""ECS service creation."""

import logging
from collections.abc import Callable
from typing import Any, cast

from ecs_deployer.core.deployments.aws_ecs.load_balancers import retrieve_load_balancer
from ecs_deployer.core.deployments.aws_ecs.models import ServiceSpec

logger = logging.getLogger(__name__)

# Rolling replacements never drop below the desired count.
DEPLOYMENT_CONFIGURATION = {"minimumHealthyPercent": 100, "maximumPercent": 200}


def next_service_name(spec: ServiceSpec, version: str) -> str:
    """Return the service name of a server group version."""
    return f"{spec.family_name}-{version}"


def create_service(
    session: Any,
    spec: ServiceSpec,
    task_definition_arn: str,
    service_role_arn: str,
    version: str,
    reporter: Callable[[str], None],
) -> dict[str, Any]:
    """Create the ECS service for a server group version.

    Args:
        session: boto3 session.
        spec: Service spec being deployed.
        task_definition_arn: Registered task definition.
        service_role_arn: Role ECS uses to register tasks with the load balancer.
        version: Server group version.
        reporter: Progress callback.

    Returns:
        The created service as returned by ECS.
    """
    ecs = session.client("ecs")
    service_name = next_service_name(spec, version)
    load_balancer = retrieve_load_balancer(session.client("elbv2"), spec, version)
    desired_count = spec.capacity.desired

    request: dict[str, Any] = {
        "serviceName": service_name,
        "desiredCount": desired_count,
        "cluster": spec.ecs_cluster_name,
        "role": service_role_arn,
        "loadBalancers": [load_balancer.to_request()],
        "taskDefinition": task_definition_arn,
        "placementStrategy": [rule.to_request() for rule in spec.placement_strategy],
        "deploymentConfiguration": dict(DEPLOYMENT_CONFIGURATION),
    }

    reporter(
        f"Creating {desired_count} of {service_name} with {task_definition_arn} "
        f"for {spec.credential_account}."
    )
    logger.info(f"Create service request: {request}")
    response = ecs.create_service(**request)
    reporter(
        f"Done creating {desired_count} of {service_name} with {task_definition_arn} "
        f"for {spec.credential_account}."
    )
    return cast(dict[str, Any], response["service"])
