"""Custom exception hierarchy for sermonFinder.

All application exceptions inherit from :class:`SermonFinderError`, which
carries an optional ``provider_name`` so error handlers can identify which
registry source or cache backend (e.g. "supabase", "bundled", "sqlite")
caused the failure.

The search core itself never raises: normalization, year extraction,
synonym expansion, alias building and scoring are total over their inputs.
These exceptions belong to the collaborator layer that supplies the
registry.

    SermonFinderError  (base -- catch-all for any sermonFinder error)
    +-- RegistryFetchError    (network / HTTP failure fetching the registry)
    +-- RegistryDecodeError   (registry payload fails validation)
    +-- CacheError            (persistent cache backend failure)
    +-- ConfigurationError    (startup / missing config)

:class:`~src.services.playlist_registry_service.PlaylistRegistryService`
catches the first two and falls back to a cached or bundled registry.
"""


class SermonFinderError(Exception):
    """Base exception for all sermonFinder errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which source or backend triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[supabase] HTTP 503``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Registry source errors
# ---------------------------------------------------------------------------

class RegistryFetchError(SermonFinderError):
    """Raised when the playlist registry cannot be fetched (network, HTTP status)."""

    def __init__(
        self,
        message: str = "Playlist registry fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class RegistryDecodeError(SermonFinderError):
    """Raised when a registry payload cannot be decoded into playlist records.

    A single malformed record fails the whole payload so callers never
    rank against a partially decoded snapshot.
    """

    def __init__(
        self,
        message: str = "Playlist registry payload could not be decoded",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Cache / configuration errors
# ---------------------------------------------------------------------------

class CacheError(SermonFinderError):
    """Raised when a persistent cache backend fails to read or write."""

    def __init__(
        self,
        message: str = "Cache operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(SermonFinderError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
