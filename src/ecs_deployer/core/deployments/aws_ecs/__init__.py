"""AWS ECS server group deployment helpers."""

from ecs_deployer.core.deployments.aws_ecs.autoscaling import (
    associate_alarms,
    register_scalable_target,
    scalable_target_resource_id,
)
from ecs_deployer.core.deployments.aws_ecs.credentials import (
    AccountCredentials,
    AssumeRoleCredentials,
    EcsAssumeRoleCredentials,
    FederatedAssumeRoleCredentials,
    infer_assumed_role_arn,
)
from ecs_deployer.core.deployments.aws_ecs.deploy import (
    create_server_group,
    make_deployment_result,
)
from ecs_deployer.core.deployments.aws_ecs.ecs_tasks import (
    build_container_definition,
    register_task_definition,
)
from ecs_deployer.core.deployments.aws_ecs.errors import (
    AlarmNotFoundError,
    AmbiguousTargetGroupError,
    DeploymentConfigurationError,
    TargetGroupNotFoundError,
    TrustRelationshipError,
    UnsupportedCredentialsError,
)
from ecs_deployer.core.deployments.aws_ecs.iam import (
    ECS_TASKS_SERVICE_PRINCIPAL,
    TrustRelationship,
    check_role_trust_relations,
    trusted_entities,
)
from ecs_deployer.core.deployments.aws_ecs.load_balancers import retrieve_load_balancer
from ecs_deployer.core.deployments.aws_ecs.metrics import (
    CloudWatchMetricAssociator,
    MetricAssociator,
)
from ecs_deployer.core.deployments.aws_ecs.models import (
    NO_IAM_ROLE,
    Capacity,
    DeploymentResult,
    LoadBalancerBinding,
    MetricAlarm,
    PlacementStrategy,
    ServiceSpec,
)
from ecs_deployer.core.deployments.aws_ecs.services import (
    DEPLOYMENT_CONFIGURATION,
    create_service,
    next_service_name,
)
from ecs_deployer.core.deployments.aws_ecs.session import create_session, get_account_id
from ecs_deployer.core.deployments.aws_ecs.versions import (
    format_server_group_version,
    infer_next_server_group_version,
    parse_server_group_version,
)

__all__ = [
    "AccountCredentials",
    "AlarmNotFoundError",
    "AmbiguousTargetGroupError",
    "AssumeRoleCredentials",
    "Capacity",
    "CloudWatchMetricAssociator",
    "DEPLOYMENT_CONFIGURATION",
    "DeploymentConfigurationError",
    "DeploymentResult",
    "ECS_TASKS_SERVICE_PRINCIPAL",
    "EcsAssumeRoleCredentials",
    "FederatedAssumeRoleCredentials",
    "LoadBalancerBinding",
    "MetricAlarm",
    "MetricAssociator",
    "NO_IAM_ROLE",
    "PlacementStrategy",
    "ServiceSpec",
    "TargetGroupNotFoundError",
    "TrustRelationship",
    "TrustRelationshipError",
    "UnsupportedCredentialsError",
    "associate_alarms",
    "build_container_definition",
    "check_role_trust_relations",
    "create_server_group",
    "create_service",
    "create_session",
    "format_server_group_version",
    "get_account_id",
    "infer_assumed_role_arn",
    "infer_next_server_group_version",
    "make_deployment_result",
    "next_service_name",
    "parse_server_group_version",
    "register_scalable_target",
    "register_task_definition",
    "retrieve_load_balancer",
    "scalable_target_resource_id",
    "trusted_entities",
]
