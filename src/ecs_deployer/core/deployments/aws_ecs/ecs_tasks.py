"""ECS task definition helpers."""

from collections.abc import Callable
from typing import Any, cast

from ecs_deployer.core.deployments.aws_ecs.iam import check_role_trust_relations
from ecs_deployer.core.deployments.aws_ecs.models import ServiceSpec


def register_task_definition(
    session: Any,
    spec: ServiceSpec,
    version: str,
    reporter: Callable[[str], None],
) -> str:
    """Register the task definition for a server group version.

    When the spec names a task role, the role's trust policy is checked
    before anything is registered.

    Returns:
        The task definition ARN.
    """
    ecs = session.client("ecs")
    request: dict[str, Any] = {
        "family": spec.family_name,
        "containerDefinitions": [build_container_definition(spec, version)],
    }

    if spec.has_iam_role:
        iam = session.client("iam")
        check_role_trust_relations(iam, cast(str, spec.iam_role), reporter)
        request["taskRoleArn"] = spec.iam_role

    response = ecs.register_task_definition(**request)
    return cast(str, response["taskDefinition"]["taskDefinitionArn"])


def build_container_definition(spec: ServiceSpec, version: str) -> dict[str, Any]:
    """Return the single container of a server group version."""
    return {
        "name": version,
        "image": spec.docker_image_address,
        "cpu": spec.compute_units,
        "memoryReservation": spec.reserved_memory,
        "portMappings": [
            {
                "hostPort": 0,
                "containerPort": spec.container_port,
                "protocol": spec.port_protocol or "tcp",
            }
        ],
        "environment": [
            _environment_entry("SERVER_GROUP", version),
            _environment_entry("CLOUD_STACK", spec.stack),
            _environment_entry("CLOUD_DETAIL", spec.free_form_details),
        ],
    }


def _environment_entry(name: str, value: str | None) -> dict[str, str]:
    # ECS rejects null values, an unset qualifier keeps only the name.
    if value is None:
        return {"name": name}
    return {"name": name, "value": value}
