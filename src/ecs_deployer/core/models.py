"""Service spec file models for the ECS deployer."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from ecs_deployer.core.deployments.aws_ecs import (
    NO_IAM_ROLE,
    Capacity,
    DeploymentConfigurationError,
    MetricAlarm,
    PlacementStrategy,
    ServiceSpec,
)


class SpecFileError(DeploymentConfigurationError):
    """Service spec file related errors."""


class _SpecModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


class CapacityModel(_SpecModel):
    """Task counts of the server group."""

    desired: int = Field(ge=0)
    min: int = Field(ge=0)
    max: int = Field(ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> "CapacityModel":
        if self.min > self.max:
            raise ValueError("capacity min must not exceed max")
        return self


class PlacementStrategyModel(_SpecModel):
    """A task placement rule."""

    type: str
    field: str | None = None


class MetricAlarmModel(_SpecModel):
    """An alarm whose scaling policies are copied to the new server group."""

    alarm_name: str
    alarm_arn: str | None = None


class ServiceSpecFile(_SpecModel):
    """JSON representation of a service spec."""

    application: str = Field(min_length=1)
    stack: str | None = None
    free_form_details: str | None = None
    docker_image_address: str = Field(min_length=1)
    container_port: int = Field(gt=0, le=65535)
    port_protocol: str = "tcp"
    compute_units: int = Field(ge=0)
    reserved_memory: int = Field(gt=0)
    iam_role: str | None = NO_IAM_ROLE
    capacity: CapacityModel
    placement_strategy_sequence: list[PlacementStrategyModel] = Field(default_factory=list)
    target_group: str | None = None
    autoscaling_policies: list[MetricAlarmModel] = Field(default_factory=list)
    ecs_cluster_name: str = Field(min_length=1)
    credential_account: str = Field(min_length=1)
    availability_zones: dict[str, list[str]] = Field(min_length=1)

    def to_service_spec(self) -> ServiceSpec:
        """Convert the file model into a deployable service spec."""
        return ServiceSpec(
            application=self.application,
            stack=self.stack,
            free_form_details=self.free_form_details,
            docker_image_address=self.docker_image_address,
            container_port=self.container_port,
            port_protocol=self.port_protocol,
            compute_units=self.compute_units,
            reserved_memory=self.reserved_memory,
            iam_role=self.iam_role,
            capacity=Capacity(
                desired=self.capacity.desired,
                min=self.capacity.min,
                max=self.capacity.max,
            ),
            placement_strategy=tuple(
                PlacementStrategy(type=rule.type, field=rule.field)
                for rule in self.placement_strategy_sequence
            ),
            target_group=self.target_group,
            autoscaling_policies=tuple(
                MetricAlarm(alarm_name=alarm.alarm_name, alarm_arn=alarm.alarm_arn)
                for alarm in self.autoscaling_policies
            ),
            ecs_cluster_name=self.ecs_cluster_name,
            credential_account=self.credential_account,
            availability_zones=dict(self.availability_zones),
        )


def load_service_spec(path: Path) -> ServiceSpec:
    """Load a service spec from a JSON file.

    Args:
        path: Path to the spec file.

    Returns:
        The validated service spec.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SpecFileError(f"Invalid service spec file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise SpecFileError("Service spec file must contain a JSON object.")

    try:
        return ServiceSpecFile.model_validate(data).to_service_spec()
    except ValidationError as exc:
        raise SpecFileError(f"Invalid service spec values: {exc}") from exc
