"""Alias builder: every normalized string a playlist can be found under.

A playlist is matched against its title, slug, series id, tags, explicit
aliases, and auto-generated short-code shorthands.  All of them pass
through :func:`~src.utils.text_normalizer.normalize_text` so the scorer
compares like with like.
"""

from __future__ import annotations

from src.config.search_constants import (
    YOUTH_CONFERENCE_SERIES_ID,
    YOUTH_CONFERENCE_SPANISH_ALIASES,
)
from src.models.playlist import PlaylistRecord
from src.utils.text_normalizer import normalize_text


def short_code_aliases(short_code: str, year: int) -> set[str]:
    """Generate the four short-code shorthands for a playlist year.

    The two-digit form is always zero-padded, so 2005 with code "yc" gives
    ``"yc05"`` rather than ``"yc5"``; this keeps it aligned with the
    two-digit year tokens the query side extracts.

    Example: ("yc", 2025) -> {"yc25", "yc 25", "yc2025", "yc 2025"}
    """
    code = normalize_text(short_code)
    yy = f"{year % 100:02d}"
    return {
        f"{code}{yy}",
        f"{code} {yy}",
        f"{code}{year}",
        f"{code} {year}",
    }


def build_aliases(record: PlaylistRecord) -> set[str]:
    """Build the searchable alias set for a playlist record.

    Args:
        record: The playlist to index.

    Returns:
        Normalized aliases; never contains the empty string.
    """
    aliases: set[str] = set()

    for alias in record.aliases:
        normalized = normalize_text(alias)
        if normalized:
            aliases.add(normalized)

    aliases.add(normalize_text(record.title))
    aliases.add(normalize_text(record.slug))

    if record.series_id is not None:
        aliases.add(normalize_text(record.series_id))
        # Spanish names for this series are not derivable from the id.
        if record.series_id == YOUTH_CONFERENCE_SERIES_ID:
            aliases.update(YOUTH_CONFERENCE_SPANISH_ALIASES)

    for tag in record.tags:
        aliases.add(normalize_text(tag))

    if record.short_code is not None and record.year is not None:
        aliases.update(short_code_aliases(record.short_code, record.year))

    aliases.discard("")
    return aliases
