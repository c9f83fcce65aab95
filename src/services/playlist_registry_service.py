"""Playlist registry service: fetch, cache, and search the playlist registry.

# ─── RESOLUTION ORDER ─────────────────────────────────────────────────
#
# get_registry() returns the first of:
#
#   1. The in-memory snapshot from an earlier call in this process
#   2. The persisted RegistryCache, if younger than CACHE_TTL and written
#      with the current CACHE_SCHEMA_VERSION
#   3. A fresh network fetch (which is then persisted)
#   4. The expired persisted snapshot, if the network fails and the
#      snapshot has the current schema version
#   5. The bundled fallback registry shipped with the package
#   6. An empty list, if even the fallback cannot be read
#
# refresh_registry() skips 1 and 2.  If the network fails it returns the
# in-memory snapshot when there is one, otherwise the fallback.
#
# At most one network fetch is in flight at any time: concurrent callers
# await the same task and all observe its result or its error.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

import structlog
from pydantic import ValidationError

from src.config.search_constants import CACHE_SCHEMA_VERSION, CACHE_TTL, REGISTRY_CACHE_KEY
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.registry_source import IRegistrySource
from src.models.playlist import PlaylistRecord, PlaylistSearchResult, RegistryCache
from src.services.playlist_search_service import PlaylistSearchService
from src.utils.errors import CacheError, SermonFinderError
from src.utils.logging import get_logger


class PlaylistRegistryService:
    """Owns the current registry snapshot and answers playlist searches.

    Parameters
    ----------
    cache:
        Persistent key-value store for the registry snapshot.
    network_source:
        Primary registry source.  ``None`` (or an unavailable source) means
        the service never goes to the network.
    fallback_source:
        Source of last resort, normally the bundled JSON file.
    search_service:
        Scoring engine; defaults to :class:`PlaylistSearchService`.
    clock:
        Returns the current time; injectable for cache-expiry tests.
    """

    def __init__(
        self,
        cache: ICacheProvider,
        network_source: IRegistrySource | None,
        fallback_source: IRegistrySource | None,
        search_service: PlaylistSearchService | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._cache = cache
        self._network = network_source
        self._fallback = fallback_source
        self._search = search_service or PlaylistSearchService()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._registry: list[PlaylistRecord] | None = None
        self._inflight: asyncio.Task[list[PlaylistRecord]] | None = None
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_registry(self) -> list[PlaylistRecord]:
        """Return the registry, from memory, cache, network, or fallback."""
        if self._registry is not None:
            return self._registry

        cached = await self._load_persisted()
        if cached is not None and cached.is_valid(self._clock()):
            self._registry = list(cached.items)
            self._logger.debug("registry_cache_hit", count=len(self._registry))
            return self._registry

        try:
            items = await self._fetch_from_network()
        except SermonFinderError as exc:
            self._logger.warning("registry_fetch_failed", error=str(exc))
            if cached is not None and cached.schema_version == CACHE_SCHEMA_VERSION:
                self._registry = list(cached.items)
                self._logger.info("registry_stale_cache_used", count=len(self._registry))
                return self._registry
            return await self._load_fallback()

        self._registry = items
        await self._save_persisted(items)
        return items

    async def refresh_registry(self) -> list[PlaylistRecord]:
        """Force a network refetch, keeping the current snapshot on failure."""
        try:
            items = await self._fetch_from_network()
        except SermonFinderError as exc:
            self._logger.warning("registry_refresh_failed", error=str(exc))
            if self._registry is not None:
                return self._registry
            return await self._load_fallback()

        self._registry = items
        await self._save_persisted(items)
        return items

    async def search_playlists(self, query: str) -> PlaylistSearchResult:
        """Search the current registry for *query*."""
        registry = await self.get_registry()
        return self._search.search(query, registry)

    async def clear_cache(self) -> None:
        """Drop the in-memory snapshot and the persisted cache entry."""
        self._registry = None
        try:
            await self._cache.delete(REGISTRY_CACHE_KEY)
        except CacheError as exc:
            self._logger.warning("registry_cache_clear_failed", error=str(exc))

    # ------------------------------------------------------------------
    # Private: network (single-flight)
    # ------------------------------------------------------------------

    async def _fetch_from_network(self) -> list[PlaylistRecord]:
        if self._network is None or not self._network.is_available():
            raise SermonFinderError(
                message="No network registry source configured",
                provider_name="registry",
            )

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._network.fetch_registry())
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            self._logger.debug("registry_fetch_joined")

        # shield: one caller being cancelled must not cancel the shared fetch.
        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, task: asyncio.Task[list[PlaylistRecord]]) -> None:
        if self._inflight is task:
            self._inflight = None
        # Retrieve the exception so an abandoned failed fetch is not reported
        # as "never retrieved"; awaiting callers still receive it.
        if not task.cancelled():
            task.exception()

    # ------------------------------------------------------------------
    # Private: persisted cache
    # ------------------------------------------------------------------

    async def _load_persisted(self) -> RegistryCache | None:
        try:
            raw = await self._cache.get(REGISTRY_CACHE_KEY)
        except CacheError as exc:
            self._logger.warning("registry_cache_read_failed", error=str(exc))
            return None
        if raw is None:
            return None

        try:
            if isinstance(raw, str):
                return RegistryCache.model_validate_json(raw)
            return RegistryCache.model_validate(raw)
        except ValidationError as exc:
            self._logger.warning(
                "registry_cache_decode_failed",
                error_count=exc.error_count(),
            )
            return None

    async def _save_persisted(self, items: list[PlaylistRecord]) -> None:
        snapshot = RegistryCache(
            items=tuple(items),
            cached_at=self._clock(),
            schema_version=CACHE_SCHEMA_VERSION,
        )
        try:
            await self._cache.set(
                REGISTRY_CACHE_KEY,
                snapshot.model_dump_json(by_alias=True),
                ttl=int(CACHE_TTL.total_seconds()),
            )
        except CacheError as exc:
            self._logger.warning("registry_cache_write_failed", error=str(exc))
            return
        self._logger.debug("registry_cached", count=len(items))

    # ------------------------------------------------------------------
    # Private: fallback
    # ------------------------------------------------------------------

    async def _load_fallback(self) -> list[PlaylistRecord]:
        if self._fallback is None:
            self._logger.warning("registry_fallback_missing")
            return []
        try:
            items = await self._fallback.fetch_registry()
        except SermonFinderError as exc:
            self._logger.error("registry_fallback_failed", error=str(exc))
            return []

        self._registry = items
        return items
