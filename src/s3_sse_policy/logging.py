"""Structured logging configuration for the S3 SSE policy library."""

import json
import logging
import os
import sys
from typing import Any


def setup_structured_logging(level: str | None = None) -> None:
    """Configure structured JSON logging.

    Args:
        level: Log level name; defaults to LOG_LEVEL or INFO
    """
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_copy_event(
    logger: logging.Logger,
    operation: str,
    bucket: str,
    source_key: str,
    destination_key: str,
    result: str,
    encryption: str,
    message: str,
    **kwargs: Any,
) -> None:
    """Log a structured copy or rename event."""
    log_data = {
        "operation": operation,
        "bucket": bucket,
        "source": source_key,
        "destination": destination_key,
        "result": result,
        "encryption": encryption,
        "message": message,
    }
    log_data.update(kwargs)
    level = logging.INFO if result == "success" else logging.ERROR
    logger.log(level, json.dumps(sanitize_secrets(log_data)))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    secret_fields = {"encryption_key", "customer_key", "secret_key", "session_token", "password"}
    sanitized = log_data.copy()
    for field in secret_fields:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized
