"""sermonFinder domain models - re-exports all public model classes.

Other parts of the codebase import directly from ``src.models``
(e.g. ``from src.models import PlaylistRecord``) rather than from the
individual submodule.

    - playlist.py - Registry records, search results, and the persisted
                    registry cache snapshot
"""

from __future__ import annotations

from src.models.playlist import (
    PlaylistContentType,
    PlaylistKind,
    PlaylistRecord,
    PlaylistSearchResult,
    RegistryCache,
    ScoredPlaylist,
)

__all__ = [
    "PlaylistContentType",
    "PlaylistKind",
    "PlaylistRecord",
    "PlaylistSearchResult",
    "RegistryCache",
    "ScoredPlaylist",
]
