"""Shared Rich console and output helpers for the CLI."""

from rich.console import Console
from rich.table import Table

from ecs_deployer.core.deployments.aws_ecs import DeploymentResult

console = Console()


def report_step(message: str) -> None:
    """Report deployment progress to the user.

    Args:
        message: Progress message to display.
    """
    console.print(f"[bold cyan]•[/bold cyan] {message}")


def print_deployment_result(result: DeploymentResult) -> None:
    """Print the created server groups as a table.

    Args:
        result: Result of a server group deployment.
    """
    table = Table(title="Created server groups", show_header=True, header_style="bold cyan")
    table.add_column("Region", style="white", no_wrap=True)
    table.add_column("Service", style="bright_white")
    table.add_column("Server group", style="green")

    for server_group_name in result.server_group_names:
        region, _, service_name = server_group_name.partition(":")
        table.add_row(region, service_name, server_group_name)

    console.print(table)
