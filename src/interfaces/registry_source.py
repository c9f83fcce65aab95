"""Abstract base class for playlist registry sources.

A registry source produces a complete snapshot of playlist records.  The
network source (Supabase) and the bundled fallback file both implement
this contract, so the registry service can try them in order without
knowing where the data comes from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.playlist import PlaylistRecord


class IRegistrySource(ABC):
    """Contract for anything that can supply a playlist registry snapshot."""

    @abstractmethod
    async def fetch_registry(self) -> list[PlaylistRecord]:
        """Return every playlist record in the registry.

        Raises
        ------
        RegistryFetchError
            If the source cannot be reached or answers with an error.
        RegistryDecodeError
            If the payload is not a list of valid playlist records.  One
            bad record fails the whole snapshot.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and error messages."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the source is configured and may be queried."""
