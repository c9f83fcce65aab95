"""Playlist registry domain models.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Models (bottom of the dependency graph - no imports from upper layers
# other than the fixed search constants).
#
# A PlaylistRecord is one entry of the playlist registry: a named bucket of
# YouTube content (a year of sermons, a conference, a podcast).  Records are
# decoded from the Supabase ``playlist_registry`` table or from the bundled
# fallback JSON, and are read-only for the lifetime of a search.
#
# Key design decisions:
#   - **Immutable state**: all models use ``frozen=True``.  A refreshed
#     registry replaces the previous snapshot wholesale.
#   - **Identity by id**: two records with the same ``id`` are the same
#     playlist even if their metadata differs between snapshots.
#   - **Wire names are snake_case** (``youtube_playlist_id``,
#     ``content_type``, ``series_id``, ``short_code``).  camelCase keys are
#     also accepted on input because older fallback files used them.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.config.search_constants import CACHE_SCHEMA_VERSION, CACHE_TTL


class PlaylistKind(str, Enum):
    """Organizational role of a playlist.  Not used in scoring."""

    YEAR_BUCKET = "year_bucket"  # e.g. "Predicaciones 2025"
    EVENT = "event"              # e.g. "Conferencia de Jóvenes 2025"
    CATEGORY = "category"        # e.g. "Anuncios", "Música"
    SERIES = "series"            # multi-year series with stable identity
    PODCAST = "podcast"


class PlaylistContentType(str, Enum):
    """What kind of content a playlist holds."""

    SERMON = "sermon"
    ANNOUNCEMENT = "announcement"
    MUSIC = "music"
    SKIT = "skit"
    PODCAST = "podcast"
    OTHER = "other"


class PlaylistRecord(BaseModel):
    """A playlist entry in the registry.

    Single source of truth for YouTube playlist metadata.  ``aliases`` and
    ``short_code`` exist purely to make the playlist findable: ``short_code``
    combined with ``year`` yields shorthands such as ``"yc25"``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(description="Unique identifier within a registry snapshot.")
    youtube_playlist_id: str = Field(
        validation_alias=AliasChoices("youtube_playlist_id", "youtubePlaylistId"),
        description="External playlist id used to fetch content items.",
    )
    title: str = Field(description="Display title (English/Spanish mixed).")
    kind: PlaylistKind
    content_type: PlaylistContentType = Field(
        validation_alias=AliasChoices("content_type", "contentType"),
    )
    series_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("series_id", "seriesId"),
        description="Stable id linking multi-year series, e.g. 'youth-conference'.",
    )
    year: int | None = Field(default=None, description="Primary year of the playlist.")
    slug: str = Field(default="", description="URL-safe identifier, also searchable.")
    tags: tuple[str, ...] = Field(default=())
    aliases: tuple[str, ...] = Field(default=(), description="Author-provided search strings.")
    short_code: str | None = Field(
        default=None,
        validation_alias=AliasChoices("short_code", "shortCode"),
        description="Short abbreviation, e.g. 'yc'.",
    )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PlaylistRecord):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


class ScoredPlaylist(BaseModel):
    """A playlist with its search relevance score."""

    model_config = ConfigDict(frozen=True)

    playlist: PlaylistRecord
    score: int = Field(ge=0)


class PlaylistSearchResult(BaseModel):
    """Result of searching the playlist registry.

    ``playlists`` is ordered by descending relevance.  Scores are not
    exposed; they only exist to produce the ordering.
    """

    model_config = ConfigDict(frozen=True)

    playlists: tuple[PlaylistRecord, ...] = Field(default=())

    @property
    def playlist_ids(self) -> list[str]:
        """YouTube playlist ids in ranking order, for fetching content."""
        return [p.youtube_playlist_id for p in self.playlists]

    @property
    def has_matches(self) -> bool:
        """Whether any playlist matched.

        Lets callers tell "registry loaded, nothing matched" apart from
        "no registry available".
        """
        return len(self.playlists) > 0


class RegistryCache(BaseModel):
    """Persisted registry snapshot with the metadata used to invalidate it.

    Serialized (``by_alias=True``) as ``{items, cachedAt, schemaVersion}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    items: tuple[PlaylistRecord, ...] = Field(default=())
    cached_at: datetime = Field(alias="cachedAt")
    schema_version: int = Field(alias="schemaVersion")

    def is_valid(self, now: datetime | None = None) -> bool:
        """Return True if the snapshot is younger than the TTL and current-schema."""
        now = now or datetime.now(timezone.utc)
        age = _as_utc(now) - _as_utc(self.cached_at)
        is_not_expired = age < CACHE_TTL
        is_correct_version = self.schema_version == CACHE_SCHEMA_VERSION
        return is_not_expired and is_correct_version


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so aware and naive values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
