"""Utility functions for the S3 SSE policy library."""

from .errors import password_diagnostics, sanitize_error_message, sanitize_exception
from .lookup import bucket_keys, lookup_password, read_password

__all__ = [
    "bucket_keys",
    "lookup_password",
    "password_diagnostics",
    "read_password",
    "sanitize_error_message",
    "sanitize_exception",
]
