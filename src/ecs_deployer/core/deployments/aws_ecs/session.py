"""AWS session helpers."""

from typing import cast

import boto3
from botocore.exceptions import ClientError


def create_session(region: str, profile: str | None = None) -> boto3.session.Session:
    """Create a boto3 session bound to the deployment region."""
    if profile:
        return boto3.session.Session(profile_name=profile, region_name=region)
    return boto3.session.Session(region_name=region)


def get_account_id(session: boto3.session.Session) -> str:
    """Return the account of the caller identity."""
    sts = session.client("sts")
    try:
        response = sts.get_caller_identity()
    except ClientError as exc:
        raise RuntimeError(f"Failed to read AWS identity: {exc}") from exc
    return cast(str, response["Account"])
