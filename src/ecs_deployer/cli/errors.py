"""Deployment error helpers for the CLI."""

from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    ProfileNotFound,
)

from ecs_deployer.cli.ui import console
from ecs_deployer.core.deployments.aws_ecs import DeploymentConfigurationError


def report_deployment_error(exc: Exception) -> None:
    """Render deployment errors with actionable guidance.

    Args:
        exc: Raised exception from a deployment action.
    """
    if isinstance(exc, DeploymentConfigurationError):
        console.print(f"[red]Invalid deployment configuration: {exc}[/red]")
        console.print("[dim]Fix the service spec or account settings and retry.[/dim]")
        return

    if is_aws_auth_error(exc):
        console.print(
            "[red]AWS authentication failed. Your credentials are missing, invalid, "
            "or expired.[/red]"
        )
        console.print(
            "[dim]If using AWS profile/SSO, run: aws sso login --profile <profile>. "
            "If using temporary keys, refresh AWS_SESSION_TOKEN and retry.[/dim]"
        )
        return

    if is_aws_endpoint_error(exc):
        console.print("[red]Could not reach AWS endpoint from this environment.[/red]")
        console.print("[dim]Check network connectivity and the spec's region.[/dim]")
        return

    if isinstance(exc, ClientError):
        code = exc.response.get("Error", {}).get("Code", "")
        console.print(f"[red]AWS rejected the request ({code}): {exc}[/red]")
        console.print(
            "[dim]Resources created before the failure were kept. "
            "A retry deploys the next server group version.[/dim]"
        )
        return

    console.print(f"[red]Deployment failed: {exc}[/red]")


def is_aws_auth_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates AWS auth issues.

    Args:
        exc: Raised exception from a deployment action.

    Returns:
        True when the chain contains an auth-related error.
    """
    auth_codes = {
        "ExpiredToken",
        "ExpiredTokenException",
        "UnrecognizedClientException",
        "InvalidClientTokenId",
        "InvalidSignatureException",
        "AccessDenied",
        "AccessDeniedException",
    }
    for item in exception_chain(exc):
        if isinstance(item, (NoCredentialsError, ProfileNotFound)):
            return True
        if isinstance(item, ClientError):
            code = str(item.response.get("Error", {}).get("Code", ""))
            if code in auth_codes:
                return True
    return False


def is_aws_endpoint_error(exc: Exception) -> bool:
    """Return true when an exception chain indicates endpoint/network errors."""
    return any(isinstance(item, EndpointConnectionError) for item in exception_chain(exc))


def exception_chain(exc: BaseException) -> list[BaseException]:
    """Return exceptions in cause/context chain, root first."""
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        chain.append(current)
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return chain
