"""Utility modules for sermonFinder.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at
  SermonFinderError; registry sources and cache backends raise their own
  subclass so the registry service can fall back without broad
  ``except Exception`` blocks.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Query/alias normalization, year token extraction
  ("yc25" -> 2025), and bilingual synonym expansion for playlist search.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    CacheError,
    ConfigurationError,
    RegistryDecodeError,
    RegistryFetchError,
    SermonFinderError,
)

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

# -- Text normalization (queries, aliases, year tokens, synonyms) ----------
from src.utils.text_normalizer import (
    YearExtractionResult,
    expand_synonyms,
    extract_year_tokens,
    normalize_text,
)

__all__ = [
    "CacheError",
    "ConfigurationError",
    "RegistryDecodeError",
    "RegistryFetchError",
    "SermonFinderError",
    "YearExtractionResult",
    "configure_logging",
    "expand_synonyms",
    "extract_year_tokens",
    "get_logger",
    "normalize_text",
]
