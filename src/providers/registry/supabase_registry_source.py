"""Supabase (PostgREST) registry source implementing IRegistrySource.

Fetches the whole ``playlist_registry`` table in one request::

    GET {supabase_url}/rest/v1/playlist_registry?select=*
    apikey: <anon key>
    Authorization: Bearer <anon key>

The ``httpx.AsyncClient`` is injected for testability and connection
pooling.  HTTP and transport failures become
:class:`~src.utils.errors.RegistryFetchError`; malformed bodies become
:class:`~src.utils.errors.RegistryDecodeError`.
"""

from __future__ import annotations

import httpx

from src.interfaces.registry_source import IRegistrySource
from src.models.playlist import PlaylistRecord
from src.providers.registry.payload import decode_registry_payload
from src.utils.errors import ConfigurationError, RegistryDecodeError, RegistryFetchError
from src.utils.logging import get_logger


class SupabaseRegistrySource(IRegistrySource):
    """Reads the playlist registry table from Supabase's REST API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    supabase_url:
        Project URL, e.g. ``https://abc123.supabase.co``.
    anon_key:
        Public anon key, sent as both ``apikey`` and bearer token.
    table:
        Registry table name.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        supabase_url: str,
        anon_key: str,
        table: str = "playlist_registry",
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._base_url = supabase_url.rstrip("/")
        self._anon_key = anon_key
        self._table = table
        self._timeout = timeout
        self._logger = get_logger(__name__)

    async def fetch_registry(self) -> list[PlaylistRecord]:
        """Fetch and decode every row of the registry table."""
        if not self.is_available():
            raise ConfigurationError(
                message="SUPABASE_URL and SUPABASE_ANON_KEY must both be set",
                provider_name=self.get_provider_name(),
            )

        url = f"{self._base_url}/rest/v1/{self._table}"
        try:
            response = await self._http.get(
                url,
                params={"select": "*"},
                headers={
                    "apikey": self._anon_key,
                    "Authorization": f"Bearer {self._anon_key}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise RegistryFetchError(
                message=f"Registry request returned HTTP {exc.response.status_code}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise RegistryFetchError(
                message=f"Registry request failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RegistryDecodeError(
                message="Registry response body is not valid JSON",
                provider_name=self.get_provider_name(),
            ) from exc

        items = decode_registry_payload(payload, self.get_provider_name())
        self._logger.info("registry_fetched", source=self.get_provider_name(), count=len(items))
        return items

    def get_provider_name(self) -> str:
        return "supabase"

    def is_available(self) -> bool:
        return bool(self._base_url and self._anon_key)
