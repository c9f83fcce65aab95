"""Fixed search and registry-cache constants.

# ─── PURPOSE ──────────────────────────────────────────────────────────
#
# These values are part of the ranking contract, not deployment knobs:
# changing a score weight changes which playlist a query such as "yc25"
# resolves to first.  They are plain module constants and are not read
# from ``Settings``.
#
# Bump CACHE_SCHEMA_VERSION whenever PlaylistRecord or the bundled
# fallback registry changes shape; every persisted RegistryCache with an
# older version is then treated as invalid and refetched.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import timedelta

# === Registry cache ===
CACHE_TTL: timedelta = timedelta(days=7)
CACHE_SCHEMA_VERSION: int = 1
REGISTRY_CACHE_KEY: str = "PlaylistRegistry.data"

# === Scoring ===
MINIMUM_PLAYLIST_SCORE: int = 1
EXACT_MATCH_SCORE: int = 100
CONTAINS_MATCH_SCORE: int = 50
ALL_TOKENS_MATCH_SCORE: int = 75
PARTIAL_TOKEN_MATCH_SCORE: int = 25  # per matching token
YEAR_MATCH_BOOST: int = 80

# === Search session ===
SEARCH_DEBOUNCE_SECONDS: float = 0.5
MAX_PLAYLIST_RESULTS: int = 100  # content items fetched for matched playlists

# Series whose Spanish display names are not derivable from the series id.
YOUTH_CONFERENCE_SERIES_ID: str = "youth-conference"
YOUTH_CONFERENCE_SPANISH_ALIASES: tuple[str, ...] = ("jovenes", "conferencia de jovenes")
