"""Models for S3 copy requests and their encryption parameters."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from ...constants import METADATA_DIRECTIVE_COPY, SSE_CUSTOMER_ALGORITHM, SSE_KMS_HEADER_VALUE


@dataclass(frozen=True)
class SourceObjectMetadata:
    """Snapshot of a stored object's attributes at copy time."""

    key: str
    sse_kms_key_id: str | None = None
    server_side_encryption: str | None = None
    sse_customer_algorithm: str | None = None
    content_length: int | None = None
    etag: str | None = None

    @classmethod
    def from_head_object_response(cls, key: str, response: dict[str, Any]) -> SourceObjectMetadata:
        """Build metadata from a boto3 ``head_object`` response."""
        return cls(
            key=key,
            sse_kms_key_id=response.get("SSEKMSKeyId"),
            server_side_encryption=response.get("ServerSideEncryption"),
            sse_customer_algorithm=response.get("SSECustomerAlgorithm"),
            content_length=response.get("ContentLength"),
            etag=response.get("ETag"),
        )


@dataclass(frozen=True)
class SSECustomerKey:
    """Customer-supplied key for SSE-C, held as base64 text."""

    key: str = field(repr=False)
    algorithm: str = SSE_CUSTOMER_ALGORITHM

    def raw_key(self) -> bytes:
        """Decode the key material; boto3 base64-encodes it again on the wire.

        Raises:
            ValueError: If the key is not valid base64
        """
        try:
            return base64.b64decode(self.key, validate=True)
        except binascii.Error as e:
            raise ValueError("SSE-C key is not valid base64") from e


@dataclass(frozen=True)
class SSEAwsKeyManagementParams:
    """SSE-KMS settings; a None key id selects the storage default key."""

    kms_key_id: str | None = None

    def uses_default_key(self) -> bool:
        return not self.kms_key_id


@dataclass(frozen=True)
class CopyEncryptionParameters:
    """Encryption parameters selected for one copy request."""

    source_customer_key: SSECustomerKey | None = None
    destination_customer_key: SSECustomerKey | None = None
    kms_params: SSEAwsKeyManagementParams | None = None

    @property
    def kms_key_id(self) -> str | None:
        return self.kms_params.kms_key_id if self.kms_params else None

    def is_empty(self) -> bool:
        return (
            self.source_customer_key is None
            and self.destination_customer_key is None
            and self.kms_params is None
        )


@dataclass
class CopyObjectRequest:
    """Mutable copy request with settable encryption slots."""

    source_bucket: str
    source_key: str
    destination_bucket: str
    destination_key: str
    source_sse_customer_key: SSECustomerKey | None = None
    destination_sse_customer_key: SSECustomerKey | None = None
    sse_kms_params: SSEAwsKeyManagementParams | None = None
    metadata_directive: str = METADATA_DIRECTIVE_COPY

    def to_boto3_params(self) -> dict[str, Any]:
        """Render keyword arguments for ``S3.Client.copy_object``."""
        params: dict[str, Any] = {
            "CopySource": {"Bucket": self.source_bucket, "Key": self.source_key},
            "Bucket": self.destination_bucket,
            "Key": self.destination_key,
            "MetadataDirective": self.metadata_directive,
        }
        if self.source_sse_customer_key is not None:
            params["CopySourceSSECustomerAlgorithm"] = self.source_sse_customer_key.algorithm
            params["CopySourceSSECustomerKey"] = self.source_sse_customer_key.raw_key()
        if self.destination_sse_customer_key is not None:
            params["SSECustomerAlgorithm"] = self.destination_sse_customer_key.algorithm
            params["SSECustomerKey"] = self.destination_sse_customer_key.raw_key()
        if self.sse_kms_params is not None:
            params["ServerSideEncryption"] = SSE_KMS_HEADER_VALUE
            if self.sse_kms_params.kms_key_id:
                params["SSEKMSKeyId"] = self.sse_kms_params.kms_key_id
        return params
