"""Server-side encryption methods."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)


class EncryptionMethod(Enum):
    """Server-side encryption methods and their configuration names."""

    NONE = ""
    SSE_S3 = "AES256"
    SSE_KMS = "SSE-KMS"
    SSE_C = "SSE-C"

    @property
    def method(self) -> str:
        """Name used in configuration and in human-readable output."""
        return self.value

    @classmethod
    def from_name(cls, name: str | None) -> EncryptionMethod:
        """Map an algorithm name to a method.

        Blank and unrecognized names map to NONE.

        Args:
            name: Algorithm name, e.g. "SSE-KMS"

        Returns:
            The matching encryption method
        """
        if name is None or not name.strip():
            return cls.NONE
        name = name.strip()
        method = _METHODS_BY_NAME.get(name)
        if method is None:
            logger.warning(f"Unknown server side encryption method {name}, treating as unencrypted")
            return cls.NONE
        return method


_METHODS_BY_NAME = {method.value: method for method in EncryptionMethod if method.value}
_METHODS_BY_NAME["SSE-S3"] = EncryptionMethod.SSE_S3
