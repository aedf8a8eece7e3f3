"""AWS S3 client implementation."""

from __future__ import annotations

import logging
import time
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from ... import metrics
from ...utils.errors import sanitize_exception
from ...utils.rate_limit import rate_limit_s3, retry_on_throttle
from .models import CopyObjectRequest, SourceObjectMetadata, SSECustomerKey

logger = logging.getLogger(__name__)


class AWSProvider:
    """AWS S3 provider implementation."""

    def __init__(
        self,
        endpoint: str | None,
        region: str,
        access_key: str | None = None,
        secret_key: str | None = None,
        session_token: str | None = None,
        path_style: bool = False,
    ) -> None:
        """Initialize AWS S3 provider.

        Args:
            endpoint: S3 endpoint URL, None for the AWS default
            region: AWS region
            access_key: Access key ID, None to use the default credential chain
            secret_key: Secret access key
            session_token: Optional session token for temporary credentials
            path_style: Use path-style addressing
        """
        self.endpoint = endpoint
        self.region = region
        self.path_style = path_style

        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": "path" if path_style else "auto"},
        )

        self.client = boto3.client(
            "s3",
            endpoint_url=endpoint or None,
            region_name=region,
            aws_access_key_id=access_key or None,
            aws_secret_access_key=secret_key or None,
            aws_session_token=session_token or None,
            config=config,
        )

    def _call(self, operation: str, **params: Any) -> dict[str, Any]:
        start_time = time.time()
        try:
            response = getattr(self.client, operation)(**params)
        except ClientError:
            metrics.s3_api_call_total.labels(operation=operation, result="error").inc()
            raise
        finally:
            metrics.s3_api_call_duration_seconds.labels(operation=operation).observe(time.time() - start_time)
        metrics.s3_api_call_total.labels(operation=operation, result="success").inc()
        return response

    @retry_on_throttle("head_object")
    @rate_limit_s3
    def get_object_metadata(
        self,
        bucket: str,
        key: str,
        sse_customer_key: SSECustomerKey | None = None,
    ) -> SourceObjectMetadata:
        """Fetch object metadata with a HEAD request."""
        params: dict[str, Any] = {"Bucket": bucket, "Key": key}
        if sse_customer_key is not None:
            params["SSECustomerAlgorithm"] = sse_customer_key.algorithm
            params["SSECustomerKey"] = sse_customer_key.raw_key()
        try:
            response = self._call("head_object", **params)
        except ClientError as e:
            logger.error(f"Failed to get metadata for s3://{bucket}/{key}: {sanitize_exception(e)}")
            raise
        return SourceObjectMetadata.from_head_object_response(key, response)

    @retry_on_throttle("copy_object")
    @rate_limit_s3
    def copy_object(self, request: CopyObjectRequest) -> dict[str, Any]:
        """Execute a server-side copy."""
        try:
            return self._call("copy_object", **request.to_boto3_params())
        except ClientError as e:
            logger.error(
                f"Failed to copy s3://{request.source_bucket}/{request.source_key} to "
                f"s3://{request.destination_bucket}/{request.destination_key}: {sanitize_exception(e)}"
            )
            raise

    @retry_on_throttle("delete_object")
    @rate_limit_s3
    def delete_object(self, bucket: str, key: str) -> None:
        """Delete an object."""
        try:
            self._call("delete_object", Bucket=bucket, Key=key)
        except ClientError as e:
            logger.error(f"Failed to delete s3://{bucket}/{key}: {sanitize_exception(e)}")
            raise
