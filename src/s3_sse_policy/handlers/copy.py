"""Selection of encryption parameters for copy requests.

A copy must carry the encryption settings of the destination, otherwise S3
re-encrypts the new object with the bucket default (or not at all). The
order below matters: the source SSE-KMS key id is propagated first and an
explicit SSE-KMS destination policy then replaces it.
"""

from __future__ import annotations

import logging

from .. import metrics
from ..services.aws.models import (
    CopyEncryptionParameters,
    CopyObjectRequest,
    SourceObjectMetadata,
    SSEAwsKeyManagementParams,
    SSECustomerKey,
)
from ..services.encryption.methods import EncryptionMethod
from ..services.encryption.operations import (
    create_sse_aws_key_management_params,
    create_sse_customer_key,
)
from ..services.encryption.secrets import EncryptionSecrets

logger = logging.getLogger(__name__)


def select_copy_encryption_parameters(
    source_metadata: SourceObjectMetadata,
    secrets: EncryptionSecrets,
) -> CopyEncryptionParameters:
    """Compute the encryption parameters for a copy request.

    Args:
        source_metadata: Metadata of the object being copied
        secrets: Encryption secrets of the destination filesystem

    Returns:
        Parameters to attach to the copy request
    """
    source_key: SSECustomerKey | None = None
    destination_key: SSECustomerKey | None = None
    kms_params: SSEAwsKeyManagementParams | None = None

    source_kms_id = source_metadata.sse_kms_key_id
    propagated = bool(source_kms_id)
    if source_kms_id:
        logger.debug(f"Propagating SSE-KMS settings from source {source_kms_id}")
        kms_params = SSEAwsKeyManagementParams(source_kms_id)

    method = secrets.method
    if method is EncryptionMethod.SSE_C:
        customer_key = create_sse_customer_key(secrets)
        if customer_key is not None:
            # the copy decrypts with the same key it re-encrypts with
            source_key = customer_key
            destination_key = customer_key
    elif method is EncryptionMethod.SSE_KMS:
        destination_kms = create_sse_aws_key_management_params(secrets)
        if destination_kms is not None:
            if kms_params is not None and kms_params != destination_kms:
                logger.debug("Destination SSE-KMS policy overrides the propagated source key")
            kms_params = destination_kms
    elif method in (EncryptionMethod.NONE, EncryptionMethod.SSE_S3):
        pass
    else:
        raise AssertionError(f"Unhandled encryption method {method}")

    metrics.copy_parameter_selections_total.labels(
        destination_method=method.name,
        propagated=str(propagated).lower(),
    ).inc()
    return CopyEncryptionParameters(
        source_customer_key=source_key,
        destination_customer_key=destination_key,
        kms_params=kms_params,
    )


def apply_copy_encryption_parameters(
    params: CopyEncryptionParameters,
    request: CopyObjectRequest,
) -> CopyObjectRequest:
    """Write the populated parameter slots into a copy request.

    Args:
        params: Selected encryption parameters
        request: Request to update in place

    Returns:
        The same request, for chaining
    """
    if params.source_customer_key is not None:
        request.source_sse_customer_key = params.source_customer_key
    if params.destination_customer_key is not None:
        request.destination_sse_customer_key = params.destination_customer_key
    if params.kms_params is not None:
        request.sse_kms_params = params.kms_params
    return request
