"""Layered lookup of configuration secrets with per-bucket overrides."""

from __future__ import annotations

import logging

from .. import metrics
from ..config import Configuration
from ..constants import BUCKET_PATTERN, FS_S3A_PREFIX
from .errors import ConfigurationError, SecretLookupError

logger = logging.getLogger(__name__)


def bucket_keys(bucket: str, base_key: str) -> tuple[str, str]:
    """Build the long and short per-bucket forms of a base key.

    Args:
        bucket: Bucket name
        base_key: Global key, e.g. "fs.s3a.secret.key"

    Returns:
        Tuple of (long_key, short_key), e.g.
        ("fs.s3a.bucket.b.fs.s3a.secret.key", "fs.s3a.bucket.b.secret.key")
    """
    subkey = base_key[len(FS_S3A_PREFIX):]
    long_key = BUCKET_PATTERN.format(bucket=bucket, subkey=base_key)
    short_key = BUCKET_PATTERN.format(bucket=bucket, subkey=subkey)
    return long_key, short_key


def read_password(conf: Configuration, key: str, default_val: str | None) -> str | None:
    """Read one key from the configuration and its credential providers.

    Args:
        conf: Configuration to query
        key: Exact key to read
        default_val: Value returned when the key is absent

    Returns:
        The trimmed stored value, or ``default_val``

    Raises:
        SecretLookupError: If the store fails
    """
    try:
        value = conf.get_password(key)
    except OSError as e:
        raise SecretLookupError(key) from e
    return value.strip() if value is not None else default_val


def _get_password(conf: Configuration, key: str, current: str | None, default_val: str | None = "") -> str | None:
    # a non-empty current value wins over anything stored under key
    if current:
        return current
    return read_password(conf, key, default_val)


def lookup_password(
    bucket: str | None,
    conf: Configuration,
    base_key: str,
    override_val: str | None = None,
    default_val: str = "",
) -> str:
    """Get a secret from the configuration, handling per-bucket overrides.

    Precedence, highest first: ``override_val``, the short per-bucket key,
    the long per-bucket key, the global key, ``default_val``. Per-bucket keys
    are only consulted when ``bucket`` is non-empty.

    Args:
        bucket: Bucket name or "" if none known
        conf: Configuration to query
        base_key: Global key, must start with "fs.s3a."
        override_val: Used instead of any configured value if non-empty
        default_val: Returned when nothing is set

    Returns:
        The resolved value

    Raises:
        ConfigurationError: If ``base_key`` is not an fs.s3a key
        SecretLookupError: If the store fails
    """
    if not base_key.startswith(FS_S3A_PREFIX):
        raise ConfigurationError(f"{base_key} does not start with {FS_S3A_PREFIX}")

    source = "override" if override_val else None
    if bucket:
        long_key, short_key = bucket_keys(bucket, base_key)
        # the short key is checked first so it takes precedence over the long one
        short_val = _get_password(conf, short_key, override_val)
        if short_val and source is None:
            source = "bucket_short"
        initial_val = _get_password(conf, long_key, short_val)
        if initial_val and source is None:
            source = "bucket_long"
    else:
        initial_val = override_val

    value = _get_password(conf, base_key, initial_val, None)
    if value and source is None:
        source = "global"
    if not value:
        value = default_val
        source = "default"

    metrics.secret_lookups_total.labels(source=source).inc()
    return value
