"""Base S3 provider interface."""

from __future__ import annotations

from typing import Protocol

from ..aws.models import CopyObjectRequest, SourceObjectMetadata, SSECustomerKey


class S3Provider(Protocol):
    """Protocol defining the storage operations used around copies."""

    def get_object_metadata(
        self,
        bucket: str,
        key: str,
        sse_customer_key: SSECustomerKey | None = None,
    ) -> SourceObjectMetadata:
        """Fetch the metadata of an object.

        Args:
            bucket: Bucket name
            key: Object key
            sse_customer_key: Key needed to HEAD an SSE-C encrypted object
        """
        ...

    def copy_object(self, request: CopyObjectRequest) -> dict:
        """Execute a server-side copy."""
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object."""
        ...
