"""Server group creation for ECS."""

import logging
from collections.abc import Callable
from typing import Any

from ecs_deployer.core.deployments.aws_ecs.autoscaling import (
    associate_alarms,
    register_scalable_target,
)
from ecs_deployer.core.deployments.aws_ecs.credentials import (
    AccountCredentials,
    infer_assumed_role_arn,
)
from ecs_deployer.core.deployments.aws_ecs.ecs_tasks import register_task_definition
from ecs_deployer.core.deployments.aws_ecs.metrics import (
    CloudWatchMetricAssociator,
    MetricAssociator,
)
from ecs_deployer.core.deployments.aws_ecs.models import DeploymentResult, ServiceSpec
from ecs_deployer.core.deployments.aws_ecs.services import create_service
from ecs_deployer.core.deployments.aws_ecs.versions import infer_next_server_group_version

logger = logging.getLogger(__name__)


def create_server_group(
    session: Any,
    spec: ServiceSpec,
    credentials: AccountCredentials,
    reporter: Callable[[str], None],
    metric_associator: MetricAssociator | None = None,
) -> DeploymentResult:
    """Create a new ECS server group revision.

    Steps run strictly in order and stop at the first failure. Resources
    created before a failure are left in place.

    Args:
        session: boto3 session for the spec's region.
        spec: Service spec to deploy.
        credentials: Credentials of the target account.
        reporter: Progress callback.
        metric_associator: Collaborator that attaches alarms to the new
            scalable target. Defaults to CloudWatch.

    Returns:
        The created server group keyed by region.
    """
    reporter("Initializing Create Amazon ECS Server Group Operation...")
    region = spec.region
    ecs = session.client("ecs")

    version = infer_next_server_group_version(ecs, spec.ecs_cluster_name, spec.family_name)
    logger.info(f"Next server group version for {spec.family_name}: {version}")

    reporter("Creating Amazon ECS Task Definition...")
    task_definition_arn = register_task_definition(session, spec, version, reporter)
    reporter("Done creating Amazon ECS Task Definition...")

    service_role_arn = infer_assumed_role_arn(credentials)
    service = create_service(
        session,
        spec,
        task_definition_arn,
        service_role_arn,
        version,
        reporter,
    )
    service_name = str(service["serviceName"])

    resource_id = register_scalable_target(session, spec, service_name, service_role_arn, reporter)

    if metric_associator is None:
        metric_associator = CloudWatchMetricAssociator(session)
    if associate_alarms(metric_associator, spec, region, service_name, resource_id):
        reporter(f"Associated {len(spec.autoscaling_policies)} alarms with {service_name}.")

    return make_deployment_result(region, service_name)


def make_deployment_result(region: str, service_name: str) -> DeploymentResult:
    """Return the deployment result for a single-region server group."""
    return DeploymentResult(
        server_group_names=(f"{region}:{service_name}",),
        server_group_name_by_region={region: service_name},
    )
