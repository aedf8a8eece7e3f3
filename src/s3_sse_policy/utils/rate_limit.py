"""Rate limiting and throttle retry utilities for S3 API calls."""

from __future__ import annotations

import logging
import os
import threading
import time
from functools import wraps
from typing import Any, Callable, TypeVar

from botocore.exceptions import ClientError

from .. import metrics
from ..constants import THROTTLE_ERROR_CODES

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Any])

# Rate limit configuration
_S3_RATE_LIMIT_PER_SECOND = float(os.getenv("S3_RATE_LIMIT_PER_SECOND", "50.0"))
_S3_MAX_RETRIES = int(os.getenv("S3_MAX_RETRIES", "3"))

# Track last call time
_s3_last_call_time: float = 0.0
_s3_lock = threading.Lock()


def rate_limit_s3(func: _F) -> _F:
    """Decorator to rate limit S3 API calls.

    Enforces a minimum interval between calls across all threads.
    """
    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        global _s3_last_call_time
        with _s3_lock:
            current_time = time.time()
            min_interval = 1.0 / _S3_RATE_LIMIT_PER_SECOND

            time_since_last_call = current_time - _s3_last_call_time
            if time_since_last_call < min_interval:
                time.sleep(min_interval - time_since_last_call)

            _s3_last_call_time = time.time()
        return func(*args, **kwargs)

    return wrapper  # type: ignore


def is_throttle_error(e: ClientError) -> bool:
    """Check whether an S3 error asks the client to slow down."""
    error = e.response.get("Error", {})
    status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return error.get("Code") in THROTTLE_ERROR_CODES or status == 503


def retry_on_throttle(operation: str, max_retries: int | None = None) -> Callable[[_F], _F]:
    """Decorator retrying throttled S3 calls with exponential backoff.

    Args:
        operation: Operation name used for metrics and logs
        max_retries: Maximum retries (defaults to S3_MAX_RETRIES)
    """
    def decorator(func: _F) -> _F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            retries = _S3_MAX_RETRIES if max_retries is None else max_retries
            attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except ClientError as e:
                    if not is_throttle_error(e) or attempt >= retries:
                        raise
                    # Exponential backoff: 1s, 2s, 4s
                    sleep_time = 2 ** attempt
                    logger.warning(f"S3 {operation} throttled, retrying in {sleep_time}s")
                    metrics.s3_throttle_retries_total.labels(operation=operation).inc()
                    time.sleep(sleep_time)
                    attempt += 1

        return wrapper  # type: ignore

    return decorator
