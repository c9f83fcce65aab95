"""Abstract base class for cache service providers.

Defines the contract for the key-value store that persists the playlist
registry snapshot between runs.  Implementations may use an in-memory dict,
SQLite, or any other storage backend; the registry service only ever sees
this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async to allow for network-backed stores without
    blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Retrieve the value stored under *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        Any or None
            The cached value if present and not expired; ``None`` otherwise.
        """

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key* with an optional time-to-live.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.  Implementations must accept ``str``; the
            registry service stores its snapshot as a JSON string.
        ttl:
            Time-to-live in seconds.  ``None`` means the entry does not
            expire automatically.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove the entry stored under *key*.

        This is a no-op if the key does not exist.
        """

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present in the cache and not expired."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and error messages."""
