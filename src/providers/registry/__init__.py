"""Playlist registry sources.

SupabaseRegistrySource fetches the live registry table over HTTP;
BundledRegistrySource reads the JSON snapshot shipped in ``src/data``.
The registry service tries the network first and falls back to the
bundled file.
"""

from src.providers.registry.bundled_registry_source import BundledRegistrySource
from src.providers.registry.supabase_registry_source import SupabaseRegistrySource

__all__ = ["BundledRegistrySource", "SupabaseRegistrySource"]
