"""CLI entrypoint for the ECS deployer."""

import logging
import sys
from pathlib import Path

import click

from ecs_deployer.cli.errors import report_deployment_error
from ecs_deployer.cli.ui import console, print_deployment_result, report_step
from ecs_deployer.core import (
    SettingsError,
    credentials_from_settings,
    get_settings,
    load_service_spec,
)
from ecs_deployer.core.deployments.aws_ecs import (
    check_role_trust_relations,
    create_server_group,
    create_session,
    infer_next_server_group_version,
    next_service_name,
)

logger = logging.getLogger(__name__)

SPEC_FILE = click.argument(
    "spec_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@click.group()
@click.option("--profile", default=None, help="AWS profile, overrides AWS_PROFILE.")
@click.option("-v", "--verbose", is_flag=True, help="Log AWS requests and decisions.")
@click.pass_context
def cli(ctx: click.Context, profile: str | None, verbose: bool) -> None:
    """Create versioned ECS server groups.

    Args:
        ctx: Click context for the command invocation.
        profile: AWS profile override.
        verbose: Whether to log at debug level.
    """
    try:
        settings = get_settings()
    except SettingsError as exc:
        report_deployment_error(exc)
        sys.exit(1)

    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level)
    ctx.obj = {"settings": settings, "profile": profile or settings.aws.profile}


@cli.command()
@SPEC_FILE
@click.pass_context
def deploy(ctx: click.Context, spec_file: Path) -> None:
    """Deploy the next server group version described by SPEC_FILE."""
    try:
        spec = load_service_spec(spec_file)
        session = create_session(spec.region, ctx.obj["profile"])
        credentials = credentials_from_settings(
            ctx.obj["settings"].credentials,
            spec.credential_account,
            session,
        )
        result = create_server_group(session, spec, credentials, report_step)
    except Exception as exc:  # noqa: BLE001
        logger.debug("Deployment failed", exc_info=True)
        report_deployment_error(exc)
        sys.exit(1)

    print_deployment_result(result)


@cli.command("next-version")
@SPEC_FILE
@click.pass_context
def next_version(ctx: click.Context, spec_file: Path) -> None:
    """Print the server group version the next deploy of SPEC_FILE would use."""
    try:
        spec = load_service_spec(spec_file)
        session = create_session(spec.region, ctx.obj["profile"])
        version = infer_next_server_group_version(
            session.client("ecs"),
            spec.ecs_cluster_name,
            spec.family_name,
        )
    except Exception as exc:  # noqa: BLE001
        report_deployment_error(exc)
        sys.exit(1)

    console.print(next_service_name(spec, version))


@cli.command("check-role")
@click.argument("role_name")
@click.option("--region", required=True, help="Region to create the IAM client in.")
@click.pass_context
def check_role(ctx: click.Context, role_name: str, region: str) -> None:
    """Check that ROLE_NAME can be used as an ECS task role."""
    try:
        session = create_session(region, ctx.obj["profile"])
        check_role_trust_relations(session.client("iam"), role_name, report_step)
    except Exception as exc:  # noqa: BLE001
        report_deployment_error(exc)
        sys.exit(1)

    console.print(f"[green]{role_name} trusts the ECS tasks service.[/green]")


def main() -> None:
    """Run the CLI."""
    cli()
