"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# This class uses pydantic-settings to read configuration from TWO
# sources (in priority order):
#
#   1. **Environment variables** - e.g., SUPABASE_ANON_KEY=eyJhbGci...
#      (highest priority - always wins)
#   2. **.env file** - key=value lines in the project root .env file
#      (lower priority - used for local development)
#
# Field name `supabase_url` maps to env var `SUPABASE_URL`.
#
# Only the registry collaborator is configurable here.  Scoring weights
# and the cache TTL/schema version live in search_constants.py because
# they are part of the ranking contract.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_BUNDLED_FALLBACK = Path(__file__).resolve().parent.parent / "data" / "playlist_registry_fallback.json"


class Settings(BaseSettings):
    """sermonFinder application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Registry source (Supabase PostgREST) ===
    # Empty string = "not configured" → the registry service skips the
    # network source and resolves from cache or the bundled fallback.
    supabase_url: str = ""
    supabase_anon_key: str = ""
    registry_table: str = "playlist_registry"
    registry_request_timeout: float = 10.0

    # === Registry cache ===
    registry_cache_backend: str = "sqlite"  # "sqlite" or "memory"
    registry_cache_db_path: str = "data/registry_cache.db"
    fallback_registry_path: str = str(_BUNDLED_FALLBACK)

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def has_network_source(self) -> bool:
        """Return True when both the Supabase URL and anon key are configured."""
        return bool(self.supabase_url and self.supabase_anon_key)
