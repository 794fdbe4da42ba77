"""Cache backends for the settings store.

Every backend follows the same fetch/write/delete/clear contract. The
settings store treats the cache as derived state: any entry may be missing
or stale and reads fall back to the database on a miss.

Backends:
- NullCache: no-op, every fetch computes (default)
- MemoryCache: per-process dictionary with expiration
- RedisCache: shared cache in Redis, JSON-encoded values
"""

import copy
import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import timedelta
from typing import Any

import redis

from adminkit.config import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "adminkit:settings:"


class SettingsCache(ABC):
    """Fetch-or-compute cache keyed by string."""

    @abstractmethod
    def fetch(
        self,
        key: str,
        compute: Callable[[], Any],
        expires_in: timedelta | None = None,
    ) -> Any:
        """Return the cached value for ``key`` or compute, store and return it."""

    @abstractmethod
    def write(self, key: str, value: Any, expires_in: timedelta | None = None) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every entry owned by this cache."""


class NullCache(SettingsCache):
    """Cache that never stores anything."""

    def fetch(
        self,
        key: str,
        compute: Callable[[], Any],
        expires_in: timedelta | None = None,
    ) -> Any:
        return compute()

    def write(self, key: str, value: Any, expires_in: timedelta | None = None) -> None:
        pass

    def delete(self, key: str) -> None:
        pass

    def clear(self) -> None:
        pass


class MemoryCache(SettingsCache):
    """In-process cache with per-entry expiration.

    Expired entries are dropped lazily when they are looked up. A cached
    None is a hit; only a missing or expired entry triggers ``compute``.
    Values are copied on the way in and out so callers cannot mutate
    cached state.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._lock = threading.RLock()
        self._clock = clock

    def fetch(
        self,
        key: str,
        compute: Callable[[], Any],
        expires_in: timedelta | None = None,
    ) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None:
                value, expires_at = entry
                if expires_at is None or expires_at > self._clock():
                    return copy.deepcopy(value)
                del self._entries[key]

        value = compute()
        self.write(key, value, expires_in)
        return value

    def write(self, key: str, value: Any, expires_in: timedelta | None = None) -> None:
        expires_at = None
        if expires_in is not None:
            expires_at = self._clock() + expires_in.total_seconds()
        with self._lock:
            self._entries[key] = (copy.deepcopy(value), expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class RedisCache(SettingsCache):
    """Redis-backed cache.

    Keys are namespaced with ``key_prefix`` so that ``clear()`` only removes
    entries written by the settings store, never the rest of the database.
    """

    def __init__(
        self,
        client: redis.Redis,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> None:
        self.client = client
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = DEFAULT_KEY_PREFIX) -> "RedisCache":
        """Create a cache connected to the Redis server at ``url``."""
        client = redis.Redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
        return cls(client, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def fetch(
        self,
        key: str,
        compute: Callable[[], Any],
        expires_in: timedelta | None = None,
    ) -> Any:
        raw = self.client.get(self._key(key))
        if raw is not None:
            return json.loads(raw)

        value = compute()
        self.write(key, value, expires_in)
        return value

    def write(self, key: str, value: Any, expires_in: timedelta | None = None) -> None:
        self.client.set(self._key(key), json.dumps(value), ex=expires_in)

    def delete(self, key: str) -> None:
        self.client.delete(self._key(key))

    def clear(self) -> None:
        keys = list(self.client.scan_iter(match=f"{self.key_prefix}*"))
        if keys:
            self.client.delete(*keys)
        logger.debug("Cleared %d settings cache keys from Redis", len(keys))


def build_settings_cache(
    backend: str,
    redis_url: str | None = None,
    key_prefix: str = DEFAULT_KEY_PREFIX,
) -> SettingsCache:
    """Create the cache backend named by ``backend``.

    Raises:
        ConfigurationError: If the backend is unknown or misconfigured
    """
    backend = backend.lower()

    if backend == "null":
        return NullCache()

    if backend == "memory":
        return MemoryCache()

    if backend == "redis":
        if not redis_url:
            raise ConfigurationError("REDIS_URL must be set for the redis settings cache")
        logger.info("Using Redis settings cache with prefix %s", key_prefix)
        return RedisCache.from_url(redis_url, key_prefix=key_prefix)

    raise ConfigurationError(f"Unknown settings cache backend: {backend}")
