"""In-process registry cache backed by cachetools.TLRUCache.

Used for tests and one-shot CLI runs where the registry snapshot need not
outlive the process.  Each entry carries its own time-to-use, so the TTL
passed to :meth:`MemoryCacheProvider.set` (the registry service passes the
seven-day registry TTL) is honoured per key.  Swap for
:class:`~src.providers.cache.sqlite_cache.SQLiteCacheProvider` to persist.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, NamedTuple

import structlog
from cachetools import TLRUCache

from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

_NO_EXPIRY = float("inf")


class _Entry(NamedTuple):
    value: Any
    ttl: float | None


class MemoryCacheProvider(ICacheProvider):
    """Bounded in-memory cache with per-entry expiry.

    Parameters
    ----------
    max_size:
        Maximum number of entries; the least recently used entry is evicted
        beyond it.
    ttl:
        Seconds an entry lives when :meth:`set` is called without a TTL.
        ``None`` keeps such entries until evicted.
    timer:
        Monotonic clock in seconds; injectable for expiry tests.
    """

    def __init__(
        self,
        max_size: int = 128,
        ttl: int | None = 7 * 24 * 3600,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = ttl
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=max_size,
            ttu=self._expires_at,
            timer=timer,
        )

    @staticmethod
    def _expires_at(_key: str, entry: _Entry, now: float) -> float:
        return _NO_EXPIRY if entry.ttl is None else now + entry.ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing/expired."""
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key* for *ttl* seconds (default TTL if omitted).

        A non-positive *ttl* stores nothing and drops any previous value.
        """
        effective_ttl = ttl if ttl is not None else self._default_ttl
        self._cache.pop(key, None)
        if effective_ttl is not None and effective_ttl <= 0:
            logger.debug("cache_set_skipped", key=key, ttl=effective_ttl)
            return
        self._cache[key] = _Entry(value, effective_ttl)
        logger.debug("cache_set", key=key, ttl=effective_ttl)

    async def delete(self, key: str) -> None:
        """Remove *key* from the cache (no-op if absent)."""
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
        return key in self._cache

    def get_provider_name(self) -> str:
        return "memory"
