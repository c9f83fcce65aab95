"""Bundled fallback registry read from a JSON file shipped with the package.

Last resort when neither the network nor a persisted cache can supply a
registry: search keeps working offline against the snapshot that shipped
with this release.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from src.interfaces.registry_source import IRegistrySource
from src.models.playlist import PlaylistRecord
from src.providers.registry.payload import decode_registry_payload
from src.utils.errors import RegistryDecodeError, RegistryFetchError
from src.utils.logging import get_logger

DEFAULT_FALLBACK_PATH = Path(__file__).resolve().parent.parent.parent / "data" / "playlist_registry_fallback.json"


class BundledRegistrySource(IRegistrySource):
    """Reads a registry snapshot from a local JSON array file."""

    def __init__(self, path: str | Path = DEFAULT_FALLBACK_PATH) -> None:
        self._path = Path(path)
        self._logger = get_logger(__name__)

    async def fetch_registry(self) -> list[PlaylistRecord]:
        """Load and decode the fallback file."""
        try:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
        except OSError as exc:
            raise RegistryFetchError(
                message=f"Fallback registry not readable at {self._path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise RegistryDecodeError(
                message=f"Fallback registry at {self._path} is not valid JSON: {exc.msg}",
                provider_name=self.get_provider_name(),
            ) from exc

        items = decode_registry_payload(payload, self.get_provider_name())
        self._logger.info("registry_fallback_loaded", path=str(self._path), count=len(items))
        return items

    def get_provider_name(self) -> str:
        return "bundled"

    def is_available(self) -> bool:
        return self._path.is_file()
