"""Kubernetes secrets as a credential store for encryption settings."""

from __future__ import annotations

import base64
import binascii
import logging

from kubernetes import client
from urllib3.exceptions import HTTPError

from .cache import get_cached_object, invalidate_cache, make_cache_key, set_cached_object

logger = logging.getLogger(__name__)


def _decode_value(value: str | bytes) -> str:
    # Handle both string and bytes (different versions of kubernetes client)
    if isinstance(value, bytes):
        return value.decode("utf-8")
    try:
        return base64.b64decode(value, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return value


def read_secret_data(
    api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
) -> dict[str, str] | None:
    """Read all data from a Kubernetes secret.

    Args:
        api: Kubernetes API client
        namespace: Namespace of the secret
        secret_name: Name of the secret

    Returns:
        Dictionary of decoded secret data, or None if the secret does not exist

    Raises:
        OSError: On any other API or transport failure
    """
    try:
        secret = api.read_namespaced_secret(name=secret_name, namespace=namespace)
    except client.exceptions.ApiException as e:
        if e.status == 404:
            return None
        raise OSError(
            f"Failed to read secret '{secret_name}' in namespace '{namespace}': status {e.status}"
        ) from e
    except HTTPError as e:
        raise OSError(
            f"Failed to read secret '{secret_name}' in namespace '{namespace}': {e}"
        ) from e
    return {key: _decode_value(value) for key, value in (secret.data or {}).items()}


class KubernetesSecretCredentialProvider:
    """Credential provider reading aliases from one Kubernetes secret.

    Secret data keys are the configuration keys themselves, e.g.
    ``fs.s3a.server-side-encryption.key``. Decoded data is cached for
    CREDENTIAL_CACHE_TTL_SECONDS.
    """

    def __init__(self, api: client.CoreV1Api, namespace: str, secret_name: str) -> None:
        self.api = api
        self.namespace = namespace
        self.secret_name = secret_name
        self._cache_key = make_cache_key("Secret", namespace, secret_name)

    def _data(self) -> dict[str, str]:
        data = get_cached_object(self._cache_key)
        if data is None:
            logger.debug(f"Reading credentials from secret {self.namespace}/{self.secret_name}")
            data = read_secret_data(self.api, self.namespace, self.secret_name)
            if data is None:
                logger.warning(f"Credential secret {self.namespace}/{self.secret_name} not found")
                data = {}
            set_cached_object(self._cache_key, data)
        return data

    def get_credential_entry(self, alias: str) -> str | None:
        return self._data().get(alias)

    def refresh(self) -> None:
        """Drop cached data so the next lookup reads the secret again."""
        invalidate_cache(self._cache_key)

    def __repr__(self) -> str:
        return f"KubernetesSecretCredentialProvider({self.namespace}/{self.secret_name})"
