"""Shared fixtures for ECS deployer tests."""

from collections.abc import Callable
from dataclasses import replace
from typing import Any
from unittest.mock import MagicMock

import pytest

from ecs_deployer.core.deployments.aws_ecs import (
    AssumeRoleCredentials,
    Capacity,
    ServiceSpec,
)

CLUSTER = "main"
ACCOUNT_ID = "123456789012"
TASK_DEFINITION_ARN = f"arn:aws:ecs:us-east-1:{ACCOUNT_ID}:task-definition/orders-prod:1"

SPEC_DATA = {
    "application": "orders",
    "stack": "prod",
    "freeFormDetails": "canary",
    "dockerImageAddress": "repo/orders:42",
    "containerPort": 8080,
    "computeUnits": 256,
    "reservedMemory": 512,
    "iamRole": "orders-task",
    "capacity": {"desired": 3, "min": 2, "max": 6},
    "placementStrategySequence": [{"type": "spread", "field": "instanceId"}],
    "targetGroup": "orders-tg",
    "autoscalingPolicies": [{"alarmName": "orders-cpu-high"}],
    "ecsClusterName": "main",
    "credentialAccount": "prod",
    "availabilityZones": {"us-east-1": ["us-east-1a", "us-east-1b"]},
}


def service_arn(name: str) -> str:
    """Return the ARN of a service in the test cluster."""
    return f"arn:aws:ecs:us-east-1:{ACCOUNT_ID}:service/{CLUSTER}/{name}"


@pytest.fixture
def clients() -> dict[str, MagicMock]:
    """Mock boto3 clients keyed by service name, with empty-account defaults."""
    ecs = MagicMock(name="ecs")
    ecs.list_services.return_value = {"serviceArns": []}
    ecs.register_task_definition.return_value = {
        "taskDefinition": {"taskDefinitionArn": TASK_DEFINITION_ARN}
    }
    ecs.create_service.side_effect = lambda **request: {
        "service": {
            "serviceName": request["serviceName"],
            "serviceArn": service_arn(request["serviceName"]),
            "desiredCount": request["desiredCount"],
        }
    }
    return {
        "ecs": ecs,
        "iam": MagicMock(name="iam"),
        "elbv2": MagicMock(name="elbv2"),
        "application-autoscaling": MagicMock(name="application-autoscaling"),
        "cloudwatch": MagicMock(name="cloudwatch"),
        "sts": MagicMock(name="sts"),
    }


@pytest.fixture
def session(clients: dict[str, MagicMock]) -> MagicMock:
    """Mock boto3 session handing out the mock clients."""
    mock_session = MagicMock(name="session")
    mock_session.client.side_effect = lambda name, **_: clients[name]
    return mock_session


@pytest.fixture
def make_spec() -> Callable[..., ServiceSpec]:
    """Build service specs for the orders application."""
    base = ServiceSpec(
        application="orders",
        stack="prod",
        docker_image_address="repo/orders:42",
        container_port=8080,
        compute_units=256,
        reserved_memory=512,
        capacity=Capacity(desired=3, min=2, max=6),
        ecs_cluster_name=CLUSTER,
        credential_account="prod",
        availability_zones={"us-east-1a": ["us-east-1a"]},
    )

    def _make(**overrides: Any) -> ServiceSpec:
        return replace(base, **overrides)

    return _make


@pytest.fixture
def credentials() -> AssumeRoleCredentials:
    """Credentials assuming the deployer role."""
    return AssumeRoleCredentials(
        name="prod",
        account_id=ACCOUNT_ID,
        assume_role="role/ecs-deployer",
    )


@pytest.fixture
def reporter() -> MagicMock:
    """Progress callback recording status messages."""
    return MagicMock(name="reporter")
