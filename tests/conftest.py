"""Shared pytest fixtures for the sermonFinder test suite."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import structlog

from src.models.playlist import PlaylistContentType, PlaylistKind, PlaylistRecord
from src.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _structlog_to_real_stderr():
    """Route log lines to the process stderr and never cache bound loggers.

    Keeps stdout clean for CLI output assertions and stops loggers from
    holding on to capture buffers that pytest closes between tests.
    """
    configure_logging(log_level="WARNING", stream=sys.__stderr__)
    structlog.configure(cache_logger_on_first_use=False)
    yield
    structlog.reset_defaults()


def make_record(
    record_id: str,
    title: str,
    *,
    year: int | None = None,
    kind: PlaylistKind = PlaylistKind.CATEGORY,
    content_type: PlaylistContentType = PlaylistContentType.SERMON,
    series_id: str | None = None,
    slug: str = "",
    tags: tuple[str, ...] = (),
    aliases: tuple[str, ...] = (),
    short_code: str | None = None,
) -> PlaylistRecord:
    """Build a PlaylistRecord with test defaults; the YouTube id derives from *record_id*."""
    return PlaylistRecord(
        id=record_id,
        youtube_playlist_id=f"PL-{record_id}",
        title=title,
        kind=kind,
        content_type=content_type,
        series_id=series_id,
        year=year,
        slug=slug,
        tags=tags,
        aliases=aliases,
        short_code=short_code,
    )


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def youth_conference_2025() -> PlaylistRecord:
    return make_record(
        "yc-2025",
        "Youth Conference 2025",
        year=2025,
        kind=PlaylistKind.EVENT,
        series_id="youth-conference",
        slug="youth-conference-2025",
        short_code="yc",
    )


@pytest.fixture
def youth_conference_2024() -> PlaylistRecord:
    return make_record(
        "yc-2024",
        "Youth Conference 2024",
        year=2024,
        kind=PlaylistKind.EVENT,
        series_id="youth-conference",
        slug="youth-conference-2024",
        short_code="yc",
    )


@pytest.fixture
def sample_registry(
    youth_conference_2025: PlaylistRecord,
    youth_conference_2024: PlaylistRecord,
) -> list[PlaylistRecord]:
    """A small mixed registry: two conference years, a sermon year, two categories."""
    return [
        make_record(
            "pred-2025",
            "Predicaciones 2025",
            year=2025,
            kind=PlaylistKind.YEAR_BUCKET,
            series_id="predicaciones",
            slug="predicaciones-2025",
            tags=("sermons",),
            short_code="pred",
        ),
        youth_conference_2024,
        make_record(
            "anuncios",
            "Anuncios",
            content_type=PlaylistContentType.ANNOUNCEMENT,
            slug="anuncios",
            aliases=("announcements",),
        ),
        youth_conference_2025,
        make_record(
            "musica",
            "Música",
            content_type=PlaylistContentType.MUSIC,
            slug="musica",
            tags=("music", "worship"),
        ),
    ]


@pytest.fixture
def registry_payload() -> list[dict[str, Any]]:
    """A raw registry payload as returned by the Supabase REST endpoint."""
    return [
        {
            "id": "yc-2025",
            "youtube_playlist_id": "PLyc2025",
            "title": "Conferencia de Jóvenes 2025",
            "kind": "event",
            "content_type": "sermon",
            "series_id": "youth-conference",
            "year": 2025,
            "slug": "youth-conference-2025",
            "tags": ["series:youth-conference"],
            "aliases": ["youth conference"],
            "short_code": "yc",
        },
        {
            "id": "anuncios",
            "youtube_playlist_id": "PLanuncios",
            "title": "Anuncios",
            "kind": "category",
            "content_type": "announcement",
            "series_id": None,
            "year": None,
            "slug": "anuncios",
            "tags": [],
            "aliases": [],
            "short_code": None,
        },
    ]
