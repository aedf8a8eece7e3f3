"""Short-lived cache of credential store reads.

Every per-bucket lookup can ask a credential provider for up to three keys,
and a filesystem handle resolves several options at creation. Caching the
decoded secret data keeps that to one Kubernetes API read per secret within
CREDENTIAL_CACHE_TTL_SECONDS. Entries hold secret material: never log them.
"""

from __future__ import annotations

import os
import threading
import time
from typing import Any, Optional

# key -> (decoded secret data, monotonic time stored)
_entries: dict[str, tuple[Any, float]] = {}
_entries_lock = threading.Lock()
_cache_ttl: float = float(os.getenv("CREDENTIAL_CACHE_TTL_SECONDS", "30.0"))


def get_cached_object(key: str) -> Optional[Any]:
    """Return cached secret data, evicting it once older than the TTL.

    Args:
        key: Key from make_cache_key

    Returns:
        The cached data, or None on a miss
    """
    with _entries_lock:
        entry = _entries.get(key)
        if entry is None:
            return None
        data, stored_at = entry
        if time.monotonic() - stored_at > _cache_ttl:
            _entries.pop(key, None)
            return None
        return data


def set_cached_object(key: str, obj: Any) -> None:
    with _entries_lock:
        _entries[key] = (obj, time.monotonic())


def invalidate_cache(pattern: Optional[str] = None) -> None:
    """Drop cached secret data so the next lookup reads the store again.

    Args:
        pattern: Substring of the keys to drop; None drops everything
    """
    with _entries_lock:
        if pattern is None:
            _entries.clear()
            return
        for key in [key for key in _entries if pattern in key]:
            _entries.pop(key, None)


def make_cache_key(kind: str, namespace: str, name: str) -> str:
    """Build a key such as ``Secret:default:s3-creds``."""
    return f"{kind}:{namespace}:{name}"
