"""Encryption secrets in a form which can be shared and marshalled."""

from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO

from ... import metrics
from ...constants import (
    ENCRYPTION_SECRETS_VERSION,
    INCOMPATIBLE_VERSION_ERROR,
    MAX_SECRET_LENGTH,
    NO_ENCRYPTION_TEXT,
)
from ...utils.errors import SerializationError, SerializationVersionMismatch
from ...utils.wire import read_long, read_string, write_long, write_string
from .methods import EncryptionMethod

logger = logging.getLogger(__name__)


class EncryptionSecrets:
    """Encryption algorithm and key, resolved once per filesystem handle.

    Instances are immutable and safe to share between threads. The method is
    never stored: it is always derived from the algorithm name, both on
    construction and after deserialization. Never print the key; ``str`` and
    ``repr`` only show the method.

    Wire format (big-endian, no padding):

    * 8-byte signed version tag
    * algorithm as a length-prefixed UTF-8 string
    * key as a length-prefixed UTF-8 string

    Each string is limited to MAX_SECRET_LENGTH bytes once encoded.

    If the format ever changes incompatibly, change the version tag so that
    older readers reject the payload.
    """

    __slots__ = ("_algorithm", "_key", "_method")

    MAX_SECRET_LENGTH = MAX_SECRET_LENGTH
    VERSION = ENCRYPTION_SECRETS_VERSION

    def __init__(self, algorithm: str | EncryptionMethod = "", key: str = "") -> None:
        if isinstance(algorithm, EncryptionMethod):
            algorithm = algorithm.method
        object.__setattr__(self, "_algorithm", algorithm or "")
        object.__setattr__(self, "_key", key or "")
        object.__setattr__(self, "_method", EncryptionMethod.from_name(self._algorithm))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def algorithm(self) -> str:
        return self._algorithm

    @property
    def key(self) -> str:
        return self._key

    @property
    def method(self) -> EncryptionMethod:
        return self._method

    def has_algorithm(self) -> bool:
        return bool(self._algorithm)

    def has_key(self) -> bool:
        return bool(self._key)

    def write(self, stream: BinaryIO) -> None:
        """Write the secrets to a binary stream.

        Raises:
            SerializationError: If a field exceeds MAX_SECRET_LENGTH
        """
        try:
            write_long(stream, self.VERSION)
            write_string(stream, self._algorithm, self.MAX_SECRET_LENGTH)
            write_string(stream, self._key, self.MAX_SECRET_LENGTH)
        except SerializationError:
            metrics.serialization_total.labels(direction="write", result="error").inc()
            raise
        metrics.serialization_total.labels(direction="write", result="success").inc()

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write(buffer)
        return buffer.getvalue()

    @classmethod
    def read(cls, stream: BinaryIO) -> EncryptionSecrets:
        """Read secrets from a binary stream.

        The version tag is checked before any field is read. The method is
        re-derived from the algorithm; the combination is not re-validated.

        Raises:
            SerializationVersionMismatch: If the version tag does not match
            SerializationError: If the payload is truncated or malformed
        """
        try:
            version = read_long(stream)
            if version != cls.VERSION:
                raise SerializationVersionMismatch(cls.VERSION, version, INCOMPATIBLE_VERSION_ERROR)
            algorithm = read_string(stream, cls.MAX_SECRET_LENGTH)
            key = read_string(stream, cls.MAX_SECRET_LENGTH)
        except SerializationVersionMismatch:
            metrics.serialization_total.labels(direction="read", result="version_mismatch").inc()
            raise
        except SerializationError:
            metrics.serialization_total.labels(direction="read", result="error").inc()
            raise
        metrics.serialization_total.labels(direction="read", result="success").inc()
        return cls(algorithm, key)

    @classmethod
    def from_bytes(cls, data: bytes) -> EncryptionSecrets:
        return cls.read(io.BytesIO(data))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._algorithm, self._key))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, EncryptionSecrets):
            return NotImplemented
        return self._algorithm == other._algorithm and self._key == other._key

    def __hash__(self) -> int:
        return hash((self._algorithm, self._key))

    def __str__(self) -> str:
        if self._method is EncryptionMethod.NONE:
            return NO_ENCRYPTION_TEXT
        return self._method.method

    def __repr__(self) -> str:
        return f"EncryptionSecrets({self})"


NO_ENCRYPTION = EncryptionSecrets()
