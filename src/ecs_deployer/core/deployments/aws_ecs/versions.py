"""Server group version inference for ECS services."""

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_VERSION_DIGITS = re.compile(r"\+?[0-9]+")
_MAX_VERSION = 2**31 - 1


def infer_next_server_group_version(ecs: Any, cluster_name: str, family_name: str) -> str:
    """Return the version the next server group of a family should use.

    Every service in the cluster whose ARN contains the family name counts,
    so a family that is a substring of another family shares its versions.
    Nothing is persisted; the live service list is the only source of truth.

    Args:
        ecs: ECS client.
        cluster_name: Cluster to scan.
        family_name: Family the versions belong to.

    Returns:
        The next version, formatted as ``v%04d``.
    """
    latest_version = 0
    next_token: str | None = None

    while True:
        request: dict[str, Any] = {"cluster": cluster_name}
        if next_token:
            request["nextToken"] = next_token

        response = ecs.list_services(**request)
        for service_arn in response.get("serviceArns", []):
            if family_name in service_arn:
                latest_version = max(latest_version, parse_server_group_version(service_arn))

        next_token = response.get("nextToken")
        if not next_token:
            break

    logger.info(f"Latest version of {family_name} in {cluster_name}: {latest_version}")
    return format_server_group_version(latest_version + 1)


def parse_server_group_version(service_arn: str) -> int:
    """Return the version encoded after the last ``-`` of a service ARN.

    Names without a parsable version, or with one beyond a signed 32-bit
    integer, count as version 0.
    """
    if "-" not in service_arn:
        return 0
    suffix = service_arn.rsplit("-", 1)[1].replace("v", "")
    if not _VERSION_DIGITS.fullmatch(suffix):
        return 0
    version = int(suffix)
    return version if version <= _MAX_VERSION else 0


def format_server_group_version(version: int) -> str:
    """Format a version number as a server group suffix."""
    return f"v{version:04d}"
