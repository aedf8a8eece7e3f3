"""Builder for S3 provider instances."""

from __future__ import annotations

from ..config import Configuration
from ..constants import (
    ACCESS_KEY,
    DEFAULT_REGION,
    ENDPOINT,
    ENDPOINT_REGION,
    PATH_STYLE_ACCESS,
    SECRET_KEY,
    SESSION_TOKEN,
)
from ..services.aws.client import AWSProvider
from ..utils.lookup import lookup_password


def create_provider_from_config(bucket: str, conf: Configuration) -> AWSProvider:
    """Create an S3 provider for a bucket from layered configuration.

    Every option honours per-bucket overrides, so buckets in different
    accounts or regions can share one configuration.

    Args:
        bucket: Bucket the provider will be used for
        conf: Configuration to scan

    Returns:
        Configured S3 provider instance

    Raises:
        ValueError: If only one half of the access key pair is set
        SecretLookupError: If a credential store fails
    """
    access_key = lookup_password(bucket, conf, ACCESS_KEY)
    secret_key = lookup_password(bucket, conf, SECRET_KEY)
    if bool(access_key) != bool(secret_key):
        raise ValueError(f"{ACCESS_KEY} and {SECRET_KEY} must be set together")

    session_token = lookup_password(bucket, conf, SESSION_TOKEN)
    endpoint = lookup_password(bucket, conf, ENDPOINT)
    region = lookup_password(bucket, conf, ENDPOINT_REGION, default_val=DEFAULT_REGION)
    path_style = lookup_password(bucket, conf, PATH_STYLE_ACCESS, default_val="false")

    return AWSProvider(
        endpoint=endpoint or None,
        region=region,
        access_key=access_key or None,
        secret_key=secret_key or None,
        session_token=session_token or None,
        path_style=path_style.lower() == "true",
    )
