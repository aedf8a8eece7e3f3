"""Factories for request-level encryption parameters from encryption secrets."""

from __future__ import annotations

from ..aws.models import SSEAwsKeyManagementParams, SSECustomerKey
from .methods import EncryptionMethod
from .secrets import EncryptionSecrets


def create_sse_customer_key(secrets: EncryptionSecrets) -> SSECustomerKey | None:
    """Create an SSE-C key if the secrets use SSE-C and carry a key.

    Args:
        secrets: Source of the encryption secrets

    Returns:
        Customer key to attach to a request, or None
    """
    if secrets.has_key() and secrets.method is EncryptionMethod.SSE_C:
        return SSECustomerKey(secrets.key)
    return None


def create_sse_aws_key_management_params(secrets: EncryptionSecrets) -> SSEAwsKeyManagementParams | None:
    """Create SSE-KMS settings if the secrets use SSE-KMS.

    The configured key is used when present, otherwise the storage default
    master key.

    Args:
        secrets: Source of the encryption secrets

    Returns:
        KMS settings to attach to a request, or None
    """
    if secrets.method is not EncryptionMethod.SSE_KMS:
        return None
    if secrets.has_key():
        return SSEAwsKeyManagementParams(secrets.key)
    return SSEAwsKeyManagementParams()
