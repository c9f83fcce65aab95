"""Public interface definitions for the registry collaborators.

The search core is pure, but the registry it searches comes from outside:
a network table, a bundled file, and a persistent cache.  Each is
accessed exclusively through the abstract base classes defined here, and
concrete adapters are injected at runtime (see ``src/main.py``).  Unit
tests inject fakes without touching the network or disk.

CONCRETE PROVIDER MAP:
    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IRegistrySource    →  SupabaseRegistrySource, BundledRegistrySource
    ICacheProvider     →  MemoryCacheProvider, SQLiteCacheProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.registry_source import IRegistrySource

__all__ = [
    "ICacheProvider",
    "IRegistrySource",
]
