"""Layered configuration store with credential provider support."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Protocol

from .constants import DEPRECATED_KEYS

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Protocol for secured stores consulted before plain configuration."""

    def get_credential_entry(self, alias: str) -> str | None:
        """Return the secret stored under ``alias`` or None if absent.

        Raises:
            OSError: If the backing store cannot be read
        """
        ...


class Configuration:
    """Key/value configuration with an ordered list of credential providers.

    Plain values live in a dictionary. ``get_password`` asks each credential
    provider in turn and falls back to the plain value, so secrets can be kept
    out of the configuration itself. Deprecated key names are transparently
    mapped to their replacements on both read and write.
    """

    def __init__(
        self,
        values: Mapping[str, str] | None = None,
        credential_providers: Iterable[CredentialProvider] | None = None,
    ) -> None:
        self._values: dict[str, str] = {}
        self._credential_providers = list(credential_providers or [])
        for key, value in (values or {}).items():
            self.set(key, value)

    @staticmethod
    def _canonical(key: str) -> str:
        replacement = DEPRECATED_KEYS.get(key)
        if replacement is not None:
            logger.warning(f"Configuration key {key} is deprecated, use {replacement}")
            return replacement
        return key

    def set(self, key: str, value: str) -> None:
        self._values[self._canonical(key)] = value

    def unset(self, key: str) -> None:
        self._values.pop(self._canonical(key), None)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._values.get(self._canonical(key), default)

    def add_credential_provider(self, provider: CredentialProvider) -> None:
        self._credential_providers.append(provider)

    @property
    def credential_providers(self) -> list[CredentialProvider]:
        return list(self._credential_providers)

    def get_password(self, key: str) -> str | None:
        """Look up a secret, preferring credential providers.

        Args:
            key: Configuration key

        Returns:
            Secret value or None if no provider and no plain value has it

        Raises:
            OSError: If a credential provider fails
        """
        key = self._canonical(key)
        aliases = [key] + [old for old, new in DEPRECATED_KEYS.items() if new == key]
        for provider in self._credential_providers:
            for alias in aliases:
                value = provider.get_credential_entry(alias)
                if value is not None:
                    return value
        return self._values.get(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._canonical(key) in self._values

    def __repr__(self) -> str:
        return f"Configuration(keys={len(self._values)}, providers={len(self._credential_providers)})"
