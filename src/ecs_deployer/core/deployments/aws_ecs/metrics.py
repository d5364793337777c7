"""Association of CloudWatch alarms with new ECS scalable targets."""

import copy
import logging
from typing import Any, Protocol, cast

from ecs_deployer.core.deployments.aws_ecs.errors import AlarmNotFoundError

logger = logging.getLogger(__name__)

ECS_SERVICE_NAMESPACE = "ecs"
ECS_SCALABLE_DIMENSION = "ecs:service:DesiredCount"

_ALARM_FIELDS = (
    "AlarmDescription",
    "ActionsEnabled",
    "MetricName",
    "Namespace",
    "Statistic",
    "ExtendedStatistic",
    "Period",
    "Unit",
    "EvaluationPeriods",
    "DatapointsToAlarm",
    "Threshold",
    "ComparisonOperator",
    "TreatMissingData",
    "EvaluateLowSampleCountPercentile",
    "Metrics",
    "ThresholdMetricId",
)
_ACTION_FIELDS = ("AlarmActions", "OKActions", "InsufficientDataActions")
_POLICY_CONFIGURATIONS = (
    "StepScalingPolicyConfiguration",
    "TargetTrackingScalingPolicyConfiguration",
)


class MetricAssociator(Protocol):
    """Attaches alarm-driven scaling to a freshly registered scalable target."""

    def associate_asg_with_metrics(
        self,
        account: str,
        region: str,
        alarm_names: list[str],
        service_name: str,
        resource_id: str,
    ) -> None:
        """Associate the named alarms with a scalable target."""


class CloudWatchMetricAssociator:
    """Copy alarms and their scaling policies onto a new ECS service.

    Each named alarm is duplicated as ``<alarm>-<service>``. The copy watches
    the new service and triggers copies of the original alarm's Application
    Auto Scaling policies, registered against the new scalable target as
    ``<policy>-<service>``. Actions that are not scaling policies (SNS topics
    for example) are kept unchanged.
    """

    def __init__(self, session: Any) -> None:
        self._session = session

    def associate_asg_with_metrics(
        self,
        account: str,
        region: str,
        alarm_names: list[str],
        service_name: str,
        resource_id: str,
    ) -> None:
        cloudwatch = self._session.client("cloudwatch", region_name=region)
        autoscaling = self._session.client("application-autoscaling", region_name=region)

        alarms = _describe_alarms(cloudwatch, alarm_names)
        for alarm in alarms:
            logger.info(
                f"Associating alarm {alarm['AlarmName']} with {resource_id} in {account}/{region}"
            )
            copied_policies: dict[str, str] = {}
            for field_name in _ACTION_FIELDS:
                for action in alarm.get(field_name, []):
                    if _is_scaling_policy(action) and action not in copied_policies:
                        copied_policies[action] = _copy_scaling_policy(
                            autoscaling, action, service_name, resource_id
                        )
            _put_alarm_copy(cloudwatch, alarm, service_name, resource_id, copied_policies)


def _describe_alarms(cloudwatch: Any, alarm_names: list[str]) -> list[dict[str, Any]]:
    """Fetch metric alarms by name."""
    alarms: list[dict[str, Any]] = []
    next_token: str | None = None
    while True:
        request: dict[str, Any] = {"AlarmNames": alarm_names}
        if next_token:
            request["NextToken"] = next_token
        response = cloudwatch.describe_alarms(**request)
        alarms.extend(response.get("MetricAlarms", []))
        next_token = response.get("NextToken")
        if not next_token:
            break

    found = {alarm["AlarmName"] for alarm in alarms}
    missing = [name for name in alarm_names if name not in found]
    if missing:
        raise AlarmNotFoundError(f"CloudWatch alarms not found: {', '.join(missing)}.")
    return alarms


def _is_scaling_policy(action: str) -> bool:
    return ":autoscaling:" in action and ":scalingPolicy:" in action and "/ecs/" in action


def _parse_policy_arn(policy_arn: str) -> tuple[str, str]:
    """Return the resource ID and policy name of a scaling policy ARN.

    ``...:scalingPolicy:<id>:resource/ecs/service/<cluster>/<service>:policyName/<name>``
    """
    resource_part, _, policy_name = policy_arn.partition(":policyName/")
    resource_id = resource_part.split(":resource/ecs/", 1)[-1]
    return resource_id, policy_name


def _copy_scaling_policy(
    autoscaling: Any,
    policy_arn: str,
    service_name: str,
    resource_id: str,
) -> str:
    """Register a copy of a scaling policy for a new scalable target."""
    source_resource_id, policy_name = _parse_policy_arn(policy_arn)
    response = autoscaling.describe_scaling_policies(
        ServiceNamespace=ECS_SERVICE_NAMESPACE,
        ResourceId=source_resource_id,
        PolicyNames=[policy_name],
    )
    policies = response.get("ScalingPolicies", [])
    if not policies:
        logger.warning(f"Scaling policy {policy_arn} not found, keeping the action unchanged")
        return policy_arn

    policy = policies[0]
    request: dict[str, Any] = {
        "PolicyName": f"{policy_name}-{service_name}",
        "ServiceNamespace": ECS_SERVICE_NAMESPACE,
        "ResourceId": resource_id,
        "ScalableDimension": policy.get("ScalableDimension", ECS_SCALABLE_DIMENSION),
        "PolicyType": policy["PolicyType"],
    }
    for configuration in _POLICY_CONFIGURATIONS:
        if configuration in policy:
            request[configuration] = policy[configuration]

    created = autoscaling.put_scaling_policy(**request)
    return cast(str, created["PolicyARN"])


def _put_alarm_copy(
    cloudwatch: Any,
    alarm: dict[str, Any],
    service_name: str,
    resource_id: str,
    copied_policies: dict[str, str],
) -> None:
    """Create an alarm that watches the new service."""
    request: dict[str, Any] = {"AlarmName": f"{alarm['AlarmName']}-{service_name}"}
    for field_name in _ALARM_FIELDS:
        if field_name in alarm:
            request[field_name] = alarm[field_name]
    for field_name in _ACTION_FIELDS:
        if field_name in alarm:
            request[field_name] = [
                copied_policies.get(action, action) for action in alarm[field_name]
            ]
    if "Dimensions" in alarm:
        request["Dimensions"] = _service_dimensions(
            alarm["Dimensions"], service_name, resource_id
        )
    if "Metrics" in alarm:
        request["Metrics"] = _service_metrics(alarm["Metrics"], service_name, resource_id)

    cloudwatch.put_metric_alarm(**request)


def _service_metrics(
    metrics: list[dict[str, Any]],
    service_name: str,
    resource_id: str,
) -> list[dict[str, Any]]:
    """Point the metric queries of a metric math alarm at the new service."""
    updated = copy.deepcopy(metrics)
    for query in updated:
        metric = query.get("MetricStat", {}).get("Metric", {})
        if "Dimensions" in metric:
            metric["Dimensions"] = _service_dimensions(
                metric["Dimensions"], service_name, resource_id
            )
    return updated


def _service_dimensions(
    dimensions: list[dict[str, str]],
    service_name: str,
    resource_id: str,
) -> list[dict[str, str]]:
    """Point ECS service dimensions at the new service."""
    # resource_id is service/<cluster>/<service>
    cluster_name = resource_id.split("/")[1] if resource_id.count("/") >= 2 else None
    updated = []
    for dimension in dimensions:
        if dimension["Name"] == "ServiceName":
            updated.append({"Name": "ServiceName", "Value": service_name})
        elif dimension["Name"] == "ClusterName" and cluster_name:
            updated.append({"Name": "ClusterName", "Value": cluster_name})
        else:
            updated.append(dimension)
    return updated
