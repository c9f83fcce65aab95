"""Shared decoding of raw registry payloads into PlaylistRecord lists."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from src.models.playlist import PlaylistRecord
from src.utils.errors import RegistryDecodeError

_REGISTRY_ADAPTER: TypeAdapter[list[PlaylistRecord]] = TypeAdapter(list[PlaylistRecord])


def decode_registry_payload(payload: Any, provider_name: str) -> list[PlaylistRecord]:
    """Validate a decoded JSON payload as a list of playlist records.

    The whole payload is rejected if any record is invalid, so a caller
    either gets a complete snapshot or falls back to another source.

    Raises:
        RegistryDecodeError: If *payload* is not a list of valid records.
    """
    if not isinstance(payload, list):
        raise RegistryDecodeError(
            message=f"Expected a JSON array of playlists, got {type(payload).__name__}",
            provider_name=provider_name,
        )
    try:
        return _REGISTRY_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise RegistryDecodeError(
            message=f"Invalid playlist record in registry payload: {exc.error_count()} error(s)",
            provider_name=provider_name,
        ) from exc
