"""Build deployment credentials from settings."""

from typing import Any

from ecs_deployer.core.deployments.aws_ecs import (
    AccountCredentials,
    AssumeRoleCredentials,
    EcsAssumeRoleCredentials,
    FederatedAssumeRoleCredentials,
    get_account_id,
)
from ecs_deployer.core.settings import CredentialSettings


def credentials_from_settings(
    settings: CredentialSettings,
    account_name: str,
    session: Any,
) -> AccountCredentials:
    """Return the credentials variant configured for an account.

    The account ID is read from STS when it is not configured.
    """
    account_id = settings.account_id or get_account_id(session)
    role = settings.assume_role or ""

    if settings.credential_kind == "assume-role":
        return AssumeRoleCredentials(
            name=account_name,
            account_id=account_id,
            partition=settings.partition,
            assume_role=role,
        )
    if settings.credential_kind == "federated-assume-role":
        return FederatedAssumeRoleCredentials(
            name=account_name,
            account_id=account_id,
            partition=settings.partition,
            assume_role=role,
            session_name=settings.session_name,
        )
    if settings.credential_kind == "ecs-assume-role":
        return EcsAssumeRoleCredentials(
            name=account_name,
            account_id=account_id,
            partition=settings.partition,
            assume_role=role,
        )
    return AccountCredentials(
        name=account_name,
        account_id=account_id,
        partition=settings.partition,
    )
