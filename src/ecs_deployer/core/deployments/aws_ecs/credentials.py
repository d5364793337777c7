"""Account credentials and the roles they assume."""

from dataclasses import dataclass

from ecs_deployer.core.deployments.aws_ecs.errors import UnsupportedCredentialsError


@dataclass(frozen=True)
class AccountCredentials:
    """Credentials used directly, without assuming a role."""

    name: str
    account_id: str
    partition: str = "aws"

    def assumed_role_name(self) -> str | None:
        """Return the role these credentials assume, if any."""
        return None


@dataclass(frozen=True)
class AssumeRoleCredentials(AccountCredentials):
    """Credentials that assume a role in the target account."""

    assume_role: str = ""

    def assumed_role_name(self) -> str | None:
        return self.assume_role


@dataclass(frozen=True)
class FederatedAssumeRoleCredentials(AccountCredentials):
    """Federated credentials that assume a role in the target account."""

    assume_role: str = ""
    session_name: str | None = None

    def assumed_role_name(self) -> str | None:
        return self.assume_role


@dataclass(frozen=True)
class EcsAssumeRoleCredentials(AccountCredentials):
    """Credentials that assume a role dedicated to ECS deployments."""

    assume_role: str = ""

    def assumed_role_name(self) -> str | None:
        return self.assume_role


def infer_assumed_role_arn(credentials: AccountCredentials) -> str:
    """Return the ARN of the role the credentials assume.

    The role is used as-is after the account, so a value such as
    ``role/deployer`` yields ``arn:aws:iam::123456789012:role/deployer``.

    Raises:
        UnsupportedCredentialsError: If the credentials do not assume a role.
    """
    role = credentials.assumed_role_name()
    if not role:
        raise UnsupportedCredentialsError(
            f"Credentials of kind {type(credentials).__name__} for account "
            f"{credentials.name} do not assume a role and are not supported."
        )
    return f"arn:{credentials.partition}:iam::{credentials.account_id}:{role}"
