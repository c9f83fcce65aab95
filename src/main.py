"""sermonFinder composition root.

Wires the registry sources, the cache backend, and the search services
together via constructor injection.  The CLI and any embedding host
application build their :class:`PlaylistRegistryService` through
:func:`build_registry_service` rather than constructing providers directly.
"""

from __future__ import annotations

import httpx

from src.config.search_constants import CACHE_TTL
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.sqlite_cache import SQLiteCacheProvider
from src.providers.registry.bundled_registry_source import BundledRegistrySource
from src.providers.registry.supabase_registry_source import SupabaseRegistrySource
from src.services.playlist_registry_service import PlaylistRegistryService
from src.services.playlist_search_service import PlaylistSearchService
from src.utils.errors import ConfigurationError

_CACHE_BACKENDS = ("memory", "sqlite")


def _build_cache(app_settings: Settings) -> ICacheProvider:
    """Select the registry cache backend named by ``REGISTRY_CACHE_BACKEND``."""
    backend = app_settings.registry_cache_backend.lower()
    ttl_seconds = int(CACHE_TTL.total_seconds())
    if backend == "memory":
        return MemoryCacheProvider(ttl=ttl_seconds)
    if backend == "sqlite":
        return SQLiteCacheProvider(
            db_path=app_settings.registry_cache_db_path,
            table_name="registry_cache",
            default_ttl=ttl_seconds,
        )
    raise ConfigurationError(
        message=f"Unknown registry cache backend '{backend}' (expected one of {_CACHE_BACKENDS})",
        provider_name="cache",
    )


def build_registry_service(
    app_settings: Settings | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> PlaylistRegistryService:
    """Construct a :class:`PlaylistRegistryService` from settings.

    Parameters
    ----------
    app_settings:
        Application settings.  Read from the environment if not provided.
    http_client:
        Shared HTTP client for the Supabase source.  Only used when the
        Supabase URL and key are configured; the caller owns its lifetime.

    Returns
    -------
    PlaylistRegistryService
        Ready to serve ``get_registry`` / ``search_playlists``.
    """
    s = app_settings or Settings()

    network_source = None
    if s.has_network_source():
        if http_client is None:
            raise ConfigurationError(
                message="An httpx.AsyncClient is required when Supabase is configured",
                provider_name="supabase",
            )
        network_source = SupabaseRegistrySource(
            http_client=http_client,
            supabase_url=s.supabase_url,
            anon_key=s.supabase_anon_key,
            table=s.registry_table,
            timeout=s.registry_request_timeout,
        )

    return PlaylistRegistryService(
        cache=_build_cache(s),
        network_source=network_source,
        fallback_source=BundledRegistrySource(path=s.fallback_registry_path),
        search_service=PlaylistSearchService(),
    )
