"""IAM trust policy checks for ECS task roles."""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from urllib.parse import unquote

from ecs_deployer.core.deployments.aws_ecs.errors import TrustRelationshipError

ECS_TASKS_SERVICE_PRINCIPAL = "ecs-tasks.amazonaws.com"


@dataclass(frozen=True)
class TrustRelationship:
    """A principal allowed to assume a role."""

    type: str
    value: str


def check_role_trust_relations(
    iam: Any,
    role_name: str,
    reporter: Callable[[str], None],
) -> None:
    """Ensure the ECS tasks service is allowed to assume a role.

    Args:
        iam: IAM client.
        role_name: Role to inspect.
        reporter: Progress callback.

    Raises:
        TrustRelationshipError: If the role does not trust the ECS tasks service.
    """
    reporter(f"Checking role trust relations for: {role_name}")
    response = iam.get_role(RoleName=role_name)
    document = response["Role"].get("AssumeRolePolicyDocument", {})

    trusted_services = {
        relationship.value
        for relationship in trusted_entities(document)
        if relationship.type == "Service"
    }
    if ECS_TASKS_SERVICE_PRINCIPAL not in trusted_services:
        raise TrustRelationshipError(
            f"The {role_name} role does not have a trust relationship to "
            f"{ECS_TASKS_SERVICE_PRINCIPAL}."
        )


def trusted_entities(policy_document: dict[str, Any] | str) -> set[TrustRelationship]:
    """Return the principals an assume-role policy allows.

    boto3 returns the document already decoded; the raw IAM API returns it as
    URL-encoded JSON, which is accepted too.
    """
    if isinstance(policy_document, str):
        policy_document = json.loads(unquote(policy_document))

    statements = policy_document.get("Statement", [])
    if isinstance(statements, dict):
        statements = [statements]

    relationships: set[TrustRelationship] = set()
    for statement in statements:
        if statement.get("Effect") != "Allow":
            continue
        principal = statement.get("Principal")
        if principal == "*":
            relationships.add(TrustRelationship("AWS", "*"))
            continue
        if not isinstance(principal, dict):
            continue
        for principal_type, values in principal.items():
            if isinstance(values, str):
                values = [values]
            for value in values:
                relationships.add(TrustRelationship(principal_type, value))
    return relationships
