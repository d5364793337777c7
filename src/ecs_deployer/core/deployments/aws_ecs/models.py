"""Data models for ECS server group deployment."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ecs_deployer.core.deployments.aws_ecs.errors import DeploymentConfigurationError

NO_IAM_ROLE = "None (No IAM role)"
DEFAULT_PORT_PROTOCOL = "tcp"

_AVAILABILITY_ZONE = re.compile(r"^([a-z]{2}(?:-[a-z]+)+-\d+)[a-z]$")


@dataclass(frozen=True)
class Capacity:
    """Desired, minimum and maximum task counts."""

    desired: int
    min: int
    max: int


@dataclass(frozen=True)
class PlacementStrategy:
    """A single ECS task placement rule."""

    type: str
    field: str | None = None

    def to_request(self) -> dict[str, str]:
        """Return the ECS API shape of the rule."""
        request = {"type": self.type}
        if self.field is not None:
            request["field"] = self.field
        return request


@dataclass(frozen=True)
class MetricAlarm:
    """A CloudWatch alarm that drives a scaling policy."""

    alarm_name: str
    alarm_arn: str | None = None


@dataclass(frozen=True)
class ServiceSpec:
    """Declarative description of one ECS server group revision."""

    application: str
    docker_image_address: str
    container_port: int
    compute_units: int
    reserved_memory: int
    capacity: Capacity
    ecs_cluster_name: str
    credential_account: str
    availability_zones: dict[str, list[str]]
    stack: str | None = None
    free_form_details: str | None = None
    port_protocol: str = DEFAULT_PORT_PROTOCOL
    iam_role: str | None = NO_IAM_ROLE
    placement_strategy: tuple[PlacementStrategy, ...] = ()
    target_group: str | None = None
    autoscaling_policies: tuple[MetricAlarm, ...] = ()

    @property
    def family_name(self) -> str:
        """Return the family the revisions of this service are versioned under."""
        family = self.application
        if self.stack is not None:
            family += f"-{self.stack}"
        if self.free_form_details is not None:
            family += f"-{self.free_form_details}"
        return family

    @property
    def region(self) -> str:
        """Return the region of the first availability zone entry.

        Keys are normally region names. A zone name such as ``us-east-1a`` is
        reduced to its region.
        """
        if not self.availability_zones:
            raise DeploymentConfigurationError(
                "The service spec does not name any availability zones."
            )
        key = next(iter(self.availability_zones))
        match = _AVAILABILITY_ZONE.match(key)
        return match.group(1) if match else key

    @property
    def has_iam_role(self) -> bool:
        """Return true when a task role was requested."""
        return self.iam_role is not None and self.iam_role != NO_IAM_ROLE


@dataclass(frozen=True)
class LoadBalancerBinding:
    """Binding of a service container to an optional target group."""

    container_name: str
    container_port: int
    target_group_arn: str | None = None

    def to_request(self) -> dict[str, Any]:
        """Return the ECS API shape of the binding."""
        request: dict[str, Any] = {
            "containerName": self.container_name,
            "containerPort": self.container_port,
        }
        if self.target_group_arn is not None:
            request["targetGroupArn"] = self.target_group_arn
        return request


@dataclass(frozen=True)
class DeploymentResult:
    """Identifiers of the server group created by a deployment."""

    server_group_names: tuple[str, ...] = ()
    server_group_name_by_region: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "server_group_names", tuple(self.server_group_names))
        object.__setattr__(
            self,
            "server_group_name_by_region",
            MappingProxyType(dict(self.server_group_name_by_region)),
        )

    def __hash__(self) -> int:
        return hash(
            (self.server_group_names, tuple(self.server_group_name_by_region.items()))
        )
