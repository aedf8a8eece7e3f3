"""S3 filesystem handle which keeps encryption settings across copies and renames."""

from __future__ import annotations

import logging
import time
from typing import Any

from . import metrics
from .builders.encryption import create_encryption_secrets
from .builders.provider import create_provider_from_config
from .config import Configuration
from .handlers.copy import apply_copy_encryption_parameters, select_copy_encryption_parameters
from .logging import log_copy_event
from .services.aws.models import CopyObjectRequest, SourceObjectMetadata
from .services.encryption.methods import EncryptionMethod
from .services.encryption.operations import create_sse_customer_key
from .services.encryption.secrets import EncryptionSecrets
from .services.s3.base import S3Provider
from .tracing import trace_span
from .utils.errors import sanitize_exception

logger = logging.getLogger(__name__)


class EncryptingS3FileSystem:
    """Wraps an S3 provider and applies the bucket's encryption policy to copies.

    The encryption secrets are resolved once, when the handle is created, and
    are never changed afterwards. Creation fails if the configured policy is
    inconsistent. Operations this class does not define are forwarded to the
    wrapped provider.
    """

    def __init__(
        self,
        provider: S3Provider,
        bucket: str,
        conf: Configuration,
        encryption_secrets: EncryptionSecrets | None = None,
    ) -> None:
        """Initialize the filesystem handle.

        Args:
            provider: Storage client performing the requests
            bucket: Bucket this handle is bound to
            conf: Configuration to resolve the encryption policy from
            encryption_secrets: Secrets propagated from elsewhere (e.g. a
                delegation token); skips resolution when given
        """
        self._provider = provider
        self._bucket = bucket
        self._conf = conf
        with trace_span("s3_sse_policy.initialize", attributes={"bucket": bucket}):
            if encryption_secrets is None:
                encryption_secrets = create_encryption_secrets(bucket, conf)
            self._encryption_secrets = encryption_secrets
        logger.info(f"Initialized filesystem for bucket {bucket} with {self._encryption_secrets}")

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def conf(self) -> Configuration:
        return self._conf

    @property
    def provider(self) -> S3Provider:
        return self._provider

    @property
    def encryption_secrets(self) -> EncryptionSecrets:
        return self._encryption_secrets

    @property
    def server_side_encryption_algorithm(self) -> EncryptionMethod:
        return self._encryption_secrets.method

    def get_object_metadata(self, key: str) -> SourceObjectMetadata:
        """Fetch object metadata, presenting the SSE-C key when one is configured."""
        return self._provider.get_object_metadata(
            self._bucket,
            key,
            sse_customer_key=create_sse_customer_key(self._encryption_secrets),
        )

    def set_optional_copy_object_request_parameters(self, request: CopyObjectRequest) -> CopyObjectRequest:
        """Attach encryption parameters to a copy request.

        The source metadata is fetched first; failures of that fetch
        propagate unchanged.
        """
        logger.debug(f"Setting copy encryption parameters: {request.source_key} -> {request.destination_key}")
        source_metadata = self.get_object_metadata(request.source_key)
        params = select_copy_encryption_parameters(source_metadata, self._encryption_secrets)
        return apply_copy_encryption_parameters(params, request)

    def _copy(self, src_key: str, dst_key: str) -> dict[str, Any]:
        request = CopyObjectRequest(
            source_bucket=self._bucket,
            source_key=src_key,
            destination_bucket=self._bucket,
            destination_key=dst_key,
        )
        self.set_optional_copy_object_request_parameters(request)
        return self._provider.copy_object(request)

    def _run(self, operation: str, src_key: str, dst_key: str) -> dict[str, Any]:
        start_time = time.time()
        attributes = {"bucket": self._bucket, "source": src_key, "destination": dst_key}
        try:
            with trace_span(f"s3_sse_policy.{operation}", attributes=attributes):
                response = self._copy(src_key, dst_key)
                if operation == "rename":
                    self._provider.delete_object(self._bucket, src_key)
        except Exception as e:
            metrics.copy_operations_total.labels(operation=operation, result="error").inc()
            log_copy_event(
                logger, operation, self._bucket, src_key, dst_key,
                result="error",
                encryption=str(self._encryption_secrets),
                message=sanitize_exception(e),
            )
            raise
        finally:
            metrics.copy_duration_seconds.labels(operation=operation).observe(time.time() - start_time)

        metrics.copy_operations_total.labels(operation=operation, result="success").inc()
        log_copy_event(
            logger, operation, self._bucket, src_key, dst_key,
            result="success",
            encryption=str(self._encryption_secrets),
            message=f"{operation} completed",
        )
        return response

    def copy_file(self, src_key: str, dst_key: str) -> dict[str, Any]:
        """Copy an object within the bucket, keeping its encryption policy.

        Returns:
            The provider's copy response
        """
        return self._run("copy", src_key, dst_key)

    def rename(self, src_key: str, dst_key: str) -> dict[str, Any]:
        """Rename an object: copy it, then delete the source.

        The source is only deleted after the copy succeeded.
        """
        return self._run("rename", src_key, dst_key)

    def __getattr__(self, name: str) -> Any:
        # only reached for attributes not defined here
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._provider, name)

    def __repr__(self) -> str:
        return f"EncryptingS3FileSystem(bucket={self._bucket}, encryption={self._encryption_secrets})"


def create_filesystem(bucket: str, conf: Configuration) -> EncryptingS3FileSystem:
    """Create a provider and a filesystem handle for a bucket.

    Raises:
        EncryptionValidationError: If the encryption policy is inconsistent
    """
    provider = create_provider_from_config(bucket, conf)
    return EncryptingS3FileSystem(provider, bucket, conf)
