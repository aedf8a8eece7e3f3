"""Error taxonomy and sanitization utilities to prevent secret leakage."""

from __future__ import annotations

import re
from enum import Enum


class ErrorKind(str, Enum):
    """Kinds of failure raised by the policy core."""

    CONFIGURATION = "configuration"
    IO = "io"
    VALIDATION = "validation"
    VERSION_MISMATCH = "version_mismatch"
    SERIALIZATION = "serialization"


class EncryptionPolicyError(Exception):
    """Base class for all errors raised by this package."""

    kind: ErrorKind = ErrorKind.CONFIGURATION


class ConfigurationError(EncryptionPolicyError, ValueError):
    """A configuration key is outside the recognized namespace."""

    kind = ErrorKind.CONFIGURATION


class SecretLookupError(EncryptionPolicyError, OSError):
    """The configuration or credential store failed while reading a key."""

    kind = ErrorKind.IO

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Cannot find password option {key}")


class EncryptionValidationError(EncryptionPolicyError, ValueError):
    """The SSE method and key combination is inconsistent."""

    kind = ErrorKind.VALIDATION

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        super().__init__(message)


class SerializationError(EncryptionPolicyError, OSError):
    """A serialized payload is malformed or a field exceeds its bound."""

    kind = ErrorKind.SERIALIZATION


class SerializationVersionMismatch(SerializationError):
    """The payload was written by an incompatible protocol revision."""

    kind = ErrorKind.VERSION_MISMATCH

    def __init__(self, expected: int, actual: int, message: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message)


def password_diagnostics(value: str | None, description: str) -> str:
    """Describe a secret without revealing it.

    Args:
        value: Secret value, possibly None
        description: Noun used in the text, e.g. "key"

    Returns:
        Text safe for logs and error messages
    """
    if value is None:
        return f"null {description}"
    length = len(value)
    if length == 0:
        return f"empty {description}"
    if length == 1:
        return f"{description} of length 1"
    return f"{description} of length {length} ending with {value[-1]}"


# Patterns that might expose key material
SENSITIVE_PATTERNS = [
    r"x-amz-server-side-encryption-customer-key[:\s]+([A-Za-z0-9/+=]+)",
    r"sse[_\s]?customer[_\s]?key[:\s=]+'?([A-Za-z0-9/+=]+)",
    r"aws[_\s]?secret[_\s]?access[_\s]?key[:\s=]+'?([A-Za-z0-9/+=]{40})",
    r"session[_\s]?token[:\s=]+'?([A-Za-z0-9/+=]+)",
]

# Fields to redact completely
SENSITIVE_FIELDS = {
    "secret_key",
    "session_token",
    "password",
    "encryption_key",
    "customer_key",
    "sse_customer_key",
}


def sanitize_error_message(message: str) -> str:
    """Sanitize an error message to remove key material.

    Args:
        message: Original error message

    Returns:
        Sanitized error message with sensitive data redacted
    """
    sanitized = message
    for pattern in SENSITIVE_PATTERNS:
        sanitized = re.sub(pattern, "[REDACTED]", sanitized, flags=re.IGNORECASE)

    for field in SENSITIVE_FIELDS:
        sanitized = re.sub(
            rf"\b{field}[:=\s]+([^\s,;\)]+)",
            f"{field}: [REDACTED]",
            sanitized,
            flags=re.IGNORECASE,
        )

    return sanitized


def sanitize_exception(error: BaseException) -> str:
    """Sanitize an exception message."""
    return sanitize_error_message(str(error))
