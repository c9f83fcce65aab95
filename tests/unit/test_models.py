"""Unit tests for the playlist registry models."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from src.config.search_constants import CACHE_SCHEMA_VERSION
from src.models.playlist import (
    PlaylistContentType,
    PlaylistKind,
    PlaylistRecord,
    PlaylistSearchResult,
    RegistryCache,
    ScoredPlaylist,
)
from tests.conftest import make_record

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


# ======================================================================
# PlaylistRecord
# ======================================================================


class TestPlaylistRecord:
    def test_decodes_snake_case_wire_names(self, registry_payload: list[dict]) -> None:
        record = PlaylistRecord.model_validate(registry_payload[0])
        assert record.youtube_playlist_id == "PLyc2025"
        assert record.kind is PlaylistKind.EVENT
        assert record.content_type is PlaylistContentType.SERMON
        assert record.series_id == "youth-conference"
        assert record.short_code == "yc"
        assert record.tags == ("series:youth-conference",)

    def test_accepts_camel_case_keys(self) -> None:
        record = PlaylistRecord.model_validate(
            {
                "id": "x",
                "youtubePlaylistId": "PLx",
                "title": "X",
                "kind": "series",
                "contentType": "podcast",
                "seriesId": "x-series",
                "shortCode": "xs",
            }
        )
        assert record.youtube_playlist_id == "PLx"
        assert record.series_id == "x-series"
        assert record.short_code == "xs"

    def test_serializes_snake_case(self) -> None:
        data = make_record("x", "X", short_code="xs").model_dump(mode="json")
        assert {"youtube_playlist_id", "content_type", "series_id", "short_code"} <= data.keys()

    def test_optional_fields_default(self) -> None:
        record = PlaylistRecord.model_validate(
            {
                "id": "x",
                "youtube_playlist_id": "PLx",
                "title": "X",
                "kind": "category",
                "content_type": "other",
            }
        )
        assert record.year is None
        assert record.slug == ""
        assert record.tags == ()
        assert record.aliases == ()

    def test_rejects_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            PlaylistRecord.model_validate(
                {
                    "id": "x",
                    "youtube_playlist_id": "PLx",
                    "title": "X",
                    "kind": "mixtape",
                    "content_type": "music",
                }
            )

    def test_equality_and_hash_by_id(self) -> None:
        first = make_record("same", "Old title")
        second = make_record("same", "New title", year=2025)
        assert first == second
        assert len({first, second}) == 1

    def test_different_ids_not_equal(self) -> None:
        assert make_record("a", "Title") != make_record("b", "Title")

    def test_is_frozen(self) -> None:
        record = make_record("a", "Title")
        with pytest.raises(ValidationError):
            record.title = "Other"  # type: ignore[misc]


# ======================================================================
# ScoredPlaylist / PlaylistSearchResult
# ======================================================================


class TestSearchResultModels:
    def test_score_must_be_non_negative(self) -> None:
        with pytest.raises(ValidationError):
            ScoredPlaylist(playlist=make_record("a", "A"), score=-1)

    def test_empty_result(self) -> None:
        result = PlaylistSearchResult()
        assert result.has_matches is False
        assert result.playlist_ids == []

    def test_playlist_ids_preserve_order(self) -> None:
        result = PlaylistSearchResult(playlists=(make_record("b", "B"), make_record("a", "A")))
        assert result.has_matches is True
        assert result.playlist_ids == ["PL-b", "PL-a"]


# ======================================================================
# RegistryCache
# ======================================================================


class TestRegistryCache:
    def _snapshot(self, cached_at: datetime, version: int = CACHE_SCHEMA_VERSION) -> RegistryCache:
        return RegistryCache(
            items=(make_record("a", "A"),),
            cached_at=cached_at,
            schema_version=version,
        )

    def test_fresh_snapshot_is_valid(self) -> None:
        assert self._snapshot(NOW - timedelta(days=1)).is_valid(NOW) is True

    def test_expired_snapshot_is_invalid(self) -> None:
        assert self._snapshot(NOW - timedelta(days=7)).is_valid(NOW) is False

    def test_wrong_schema_version_is_invalid(self) -> None:
        snapshot = self._snapshot(NOW, version=CACHE_SCHEMA_VERSION + 1)
        assert snapshot.is_valid(NOW) is False

    def test_naive_timestamp_treated_as_utc(self) -> None:
        snapshot = self._snapshot(datetime(2025, 6, 1, 11, 0))
        assert snapshot.is_valid(NOW) is True

    def test_serializes_with_external_field_names(self) -> None:
        payload = self._snapshot(NOW).model_dump(by_alias=True, mode="json")
        assert set(payload) == {"items", "cachedAt", "schemaVersion"}
        assert payload["items"][0]["youtube_playlist_id"] == "PL-a"

    def test_json_round_trip_stays_valid(self) -> None:
        snapshot = self._snapshot(NOW)
        restored = RegistryCache.model_validate_json(snapshot.model_dump_json(by_alias=True))
        assert restored.items == snapshot.items
        assert restored.is_valid(NOW + timedelta(hours=1)) is True
