"""Cache providers.

Key-value stores the registry service uses to persist its playlist
registry snapshot.

MemoryCacheProvider is a cachetools-backed cache - fast but gone when the
process exits.  SQLiteCacheProvider writes to a file on disk so the
snapshot survives restarts.  Both implement ICacheProvider, so swapping
needs no change to business logic.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.sqlite_cache import SQLiteCacheProvider

__all__ = ["MemoryCacheProvider", "SQLiteCacheProvider"]
