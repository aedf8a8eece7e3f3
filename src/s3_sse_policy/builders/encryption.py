"""Builder for encryption secrets from layered configuration."""

from __future__ import annotations

import logging

from .. import metrics
from ..config import Configuration
from ..constants import (
    SERVER_SIDE_ENCRYPTION_ALGORITHM,
    SERVER_SIDE_ENCRYPTION_KEY,
    SSE_C_INVALID_KEY,
    SSE_C_INVALID_KEY_ERROR,
    SSE_C_NO_KEY,
    SSE_C_NO_KEY_ERROR,
    SSE_S3_WITH_KEY,
    SSE_S3_WITH_KEY_ERROR,
)
from ..services.aws.models import SSECustomerKey
from ..services.encryption.methods import EncryptionMethod
from ..services.encryption.secrets import EncryptionSecrets
from ..utils.errors import EncryptionValidationError, SecretLookupError, password_diagnostics
from ..utils.lookup import lookup_password

logger = logging.getLogger(__name__)


def get_server_side_encryption_key(bucket: str | None, conf: Configuration) -> str:
    """Get any SSE key from the configuration or a credential provider.

    Store failures are logged and swallowed: the result is then "".

    Args:
        bucket: Bucket to query for
        conf: Configuration to examine

    Returns:
        The encryption key or ""
    """
    try:
        return lookup_password(bucket, conf, SERVER_SIDE_ENCRYPTION_KEY)
    except SecretLookupError as e:
        logger.error(f"Cannot retrieve {SERVER_SIDE_ENCRYPTION_KEY}: {e}")
        metrics.secret_lookup_failures_total.labels(key=SERVER_SIDE_ENCRYPTION_KEY).inc()
        return ""


def validate_encryption_method(method: EncryptionMethod, key: str) -> str:
    """Check that a method and key are consistent.

    Args:
        method: Encryption method
        key: Encryption key, possibly empty

    Returns:
        Diagnostics text describing the key

    Raises:
        EncryptionValidationError: If SSE-C has no usable key or SSE-S3 has one
    """
    key_length = len(key) if key and key.strip() else 0
    diagnostics = password_diagnostics(key, "key")

    if method is EncryptionMethod.SSE_C:
        logger.debug(f"Using SSE-C with {diagnostics}")
        if key_length == 0:
            raise EncryptionValidationError(SSE_C_NO_KEY, SSE_C_NO_KEY_ERROR)
        try:
            SSECustomerKey(key).raw_key()
        except ValueError as e:
            raise EncryptionValidationError(SSE_C_INVALID_KEY, f"{SSE_C_INVALID_KEY_ERROR} ({diagnostics})") from e
    elif method is EncryptionMethod.SSE_S3:
        if key_length != 0:
            raise EncryptionValidationError(SSE_S3_WITH_KEY, f"{SSE_S3_WITH_KEY_ERROR} ({diagnostics})")
    elif method is EncryptionMethod.SSE_KMS:
        logger.debug(f"Using SSE-KMS with {diagnostics}")
    elif method is EncryptionMethod.NONE:
        logger.debug("Data is unencrypted")
    else:
        raise AssertionError(f"Unhandled encryption method {method}")

    return diagnostics


def _resolve(bucket: str | None, conf: Configuration) -> tuple[EncryptionMethod, str, str]:
    # validation and the returned secrets share a single key read
    algorithm = lookup_password(bucket, conf, SERVER_SIDE_ENCRYPTION_ALGORITHM)
    method = EncryptionMethod.from_name(algorithm)
    key = get_server_side_encryption_key(bucket, conf)
    try:
        diagnostics = validate_encryption_method(method, key)
    except EncryptionValidationError:
        metrics.encryption_resolutions_total.labels(method=method.name, result="invalid").inc()
        raise
    metrics.encryption_resolutions_total.labels(method=method.name, result="success").inc()
    return method, key, diagnostics


def resolve_encryption_method(bucket: str | None, conf: Configuration) -> tuple[EncryptionMethod, str]:
    """Resolve and validate the server-side encryption method.

    Args:
        bucket: Bucket to query for
        conf: Configuration to scan

    Returns:
        Tuple of (method, key diagnostics)

    Raises:
        ConfigurationError: On a malformed key
        SecretLookupError: If the algorithm cannot be read
        EncryptionValidationError: On an inconsistent method/key combination
    """
    method, _, diagnostics = _resolve(bucket, conf)
    return method, diagnostics


def get_encryption_algorithm(bucket: str | None, conf: Configuration) -> EncryptionMethod:
    """Get the validated server-side encryption method (NONE unless one is set)."""
    method, _ = resolve_encryption_method(bucket, conf)
    return method


def create_encryption_secrets(bucket: str | None, conf: Configuration) -> EncryptionSecrets:
    """Create the encryption secrets for a bucket.

    The key used to build the secrets is the one that was validated.

    Args:
        bucket: Bucket the filesystem is bound to
        conf: Configuration to scan

    Returns:
        Validated encryption secrets

    Raises:
        EncryptionValidationError: On an inconsistent method/key combination
    """
    method, key, _ = _resolve(bucket, conf)
    secrets = EncryptionSecrets(method, key)
    logger.info(f"Encryption for bucket {bucket or '(none)'}: {secrets}")
    return secrets
