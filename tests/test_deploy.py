"""End-to-end tests for server group creation."""

from collections.abc import Callable
from unittest.mock import MagicMock, call

import pytest
from botocore.exceptions import ClientError
from conftest import ACCOUNT_ID, CLUSTER, TASK_DEFINITION_ARN, service_arn

from ecs_deployer.core.deployments.aws_ecs import (
    AccountCredentials,
    AssumeRoleCredentials,
    DeploymentResult,
    MetricAlarm,
    ServiceSpec,
    TargetGroupNotFoundError,
    UnsupportedCredentialsError,
    create_server_group,
    make_deployment_result,
)

ROLE_ARN = f"arn:aws:iam::{ACCOUNT_ID}:role/ecs-deployer"


def test_first_deployment_of_a_family(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """An empty cluster gets orders-prod-v0001 with autoscaling bounds."""
    result = create_server_group(session, make_spec(), credentials, reporter, MagicMock())

    task_request = clients["ecs"].register_task_definition.call_args.kwargs
    assert task_request["family"] == "orders-prod"
    assert task_request["containerDefinitions"][0]["name"] == "v0001"
    assert task_request["containerDefinitions"][0]["image"] == "repo/orders:42"

    service_request = clients["ecs"].create_service.call_args.kwargs
    assert service_request["serviceName"] == "orders-prod-v0001"
    assert service_request["taskDefinition"] == TASK_DEFINITION_ARN
    assert service_request["role"] == ROLE_ARN

    clients["application-autoscaling"].register_scalable_target.assert_called_once_with(
        ServiceNamespace="ecs",
        ScalableDimension="ecs:service:DesiredCount",
        ResourceId=f"service/{CLUSTER}/orders-prod-v0001",
        RoleARN=ROLE_ARN,
        MinCapacity=2,
        MaxCapacity=6,
    )

    assert result == DeploymentResult(
        server_group_names=("us-east-1:orders-prod-v0001",),
        server_group_name_by_region={"us-east-1": "orders-prod-v0001"},
    )


def test_next_revision_follows_existing_services(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """Existing revisions push the version forward."""
    clients["ecs"].list_services.return_value = {
        "serviceArns": [service_arn("orders-prod-v0008"), service_arn("orders-prod-v0009")]
    }

    result = create_server_group(
        session,
        make_spec(availability_zones={"eu-west-1": ["eu-west-1a", "eu-west-1b"]}),
        credentials,
        reporter,
        MagicMock(),
    )

    assert result.server_group_names == ("eu-west-1:orders-prod-v0010",)
    assert result.server_group_name_by_region == {"eu-west-1": "orders-prod-v0010"}


def test_stages_run_in_order(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """Each remote call happens after the previous stage returned."""
    calls = MagicMock()
    calls.attach_mock(clients["ecs"].list_services, "list_services")
    calls.attach_mock(clients["ecs"].register_task_definition, "register_task_definition")
    calls.attach_mock(clients["ecs"].create_service, "create_service")
    calls.attach_mock(
        clients["application-autoscaling"].register_scalable_target, "register_scalable_target"
    )
    associator = MagicMock()
    calls.attach_mock(associator.associate_asg_with_metrics, "associate_asg_with_metrics")

    create_server_group(
        session,
        make_spec(autoscaling_policies=(MetricAlarm("orders-cpu-high"),)),
        credentials,
        reporter,
        associator,
    )

    assert [name for name, _, _ in calls.mock_calls] == [
        "list_services",
        "register_task_definition",
        "create_service",
        "register_scalable_target",
        "associate_asg_with_metrics",
    ]
    associator.associate_asg_with_metrics.assert_called_once_with(
        "prod",
        "us-east-1",
        ["orders-cpu-high"],
        "orders-prod-v0001",
        f"service/{CLUSTER}/orders-prod-v0001",
    )


def test_no_alarms_means_no_association(
    session: MagicMock,
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """The metric collaborator is untouched when no alarms are declared."""
    associator = MagicMock()

    create_server_group(session, make_spec(), credentials, reporter, associator)

    associator.associate_asg_with_metrics.assert_not_called()


def test_default_associator_uses_cloudwatch(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """Without an explicit collaborator the CloudWatch associator runs."""
    clients["cloudwatch"].describe_alarms.return_value = {
        "MetricAlarms": [{"AlarmName": "orders-cpu-high", "AlarmActions": []}]
    }

    create_server_group(
        session,
        make_spec(autoscaling_policies=(MetricAlarm("orders-cpu-high"),)),
        credentials,
        reporter,
    )

    clients["cloudwatch"].put_metric_alarm.assert_called_once_with(
        AlarmName="orders-cpu-high-orders-prod-v0001",
        AlarmActions=[],
    )
    reporter.assert_has_calls([call("Associated 1 alarms with orders-prod-v0001.")])


def test_service_failure_keeps_task_definition(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """Remote failures propagate unchanged and nothing is rolled back."""
    error = ClientError({"Error": {"Code": "InvalidParameterException"}}, "CreateService")
    clients["ecs"].create_service.side_effect = error

    with pytest.raises(ClientError) as excinfo:
        create_server_group(session, make_spec(), credentials, reporter, MagicMock())

    assert excinfo.value is error
    clients["ecs"].register_task_definition.assert_called_once()
    clients["ecs"].deregister_task_definition.assert_not_called()
    clients["application-autoscaling"].register_scalable_target.assert_not_called()


def test_missing_target_group_stops_before_service(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    credentials: AssumeRoleCredentials,
    reporter: MagicMock,
) -> None:
    """A target group lookup failure aborts the remaining stages."""
    clients["elbv2"].describe_target_groups.return_value = {"TargetGroups": []}

    with pytest.raises(TargetGroupNotFoundError):
        create_server_group(
            session, make_spec(target_group="orders"), credentials, reporter, MagicMock()
        )

    clients["ecs"].create_service.assert_not_called()
    clients["application-autoscaling"].register_scalable_target.assert_not_called()


def test_unsupported_credentials_fail_before_service(
    session: MagicMock,
    clients: dict[str, MagicMock],
    make_spec: Callable[..., ServiceSpec],
    reporter: MagicMock,
) -> None:
    """Credentials without a role stop the deployment before the service exists."""
    with pytest.raises(UnsupportedCredentialsError):
        create_server_group(
            session,
            make_spec(),
            AccountCredentials(name="prod", account_id=ACCOUNT_ID),
            reporter,
            MagicMock(),
        )

    clients["ecs"].create_service.assert_not_called()


def test_make_deployment_result() -> None:
    """Results carry one region-qualified name and one region entry."""
    assert make_deployment_result("ap-south-1", "orders-v0002") == DeploymentResult(
        server_group_names=("ap-south-1:orders-v0002",),
        server_group_name_by_region={"ap-south-1": "orders-v0002"},
    )


def test_deployment_result_is_immutable() -> None:
    """Results cannot be changed after creation and can be hashed."""
    result = make_deployment_result("ap-south-1", "orders-v0002")

    with pytest.raises(TypeError):
        result.server_group_name_by_region["us-east-1"] = "orders-v0003"  # type: ignore[index]
    with pytest.raises(AttributeError):
        result.server_group_names.append("us-east-1:orders-v0003")  # type: ignore[attr-defined]
    assert hash(result) == hash(make_deployment_result("ap-south-1", "orders-v0002"))
