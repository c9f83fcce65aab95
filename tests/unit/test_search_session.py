"""Unit tests for the debounced, latest-query-wins SearchSession."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.models.playlist import PlaylistRecord
from src.services.playlist_search_service import search_playlists
from src.services.search_session import SearchOutcome, SearchSession


@pytest.fixture
def registry_service(sample_registry: list[PlaylistRecord]) -> MagicMock:
    service = MagicMock()
    service.search_playlists = AsyncMock(
        side_effect=lambda query: search_playlists(query, sample_registry)
    )
    return service


class TestSearchSession:
    @pytest.mark.asyncio
    async def test_debounce_runs_only_last_query(self, registry_service: MagicMock) -> None:
        session = SearchSession(registry_service, debounce=0.05)

        session.submit("y")
        session.submit("yc")
        session.submit("yc25")
        await session.wait()

        registry_service.search_playlists.assert_awaited_once_with("yc25")
        assert session.latest is not None
        assert session.latest.query == "yc25"
        assert session.latest.result.playlist_ids[0] == "PL-yc-2025"

    @pytest.mark.asyncio
    async def test_blank_query_publishes_empty_outcome_immediately(
        self, registry_service: MagicMock
    ) -> None:
        published: list[SearchOutcome] = []
        session = SearchSession(registry_service, debounce=0.05, on_result=published.append)

        session.submit("   ")

        assert len(published) == 1
        assert published[0].result.has_matches is False
        assert published[0].items == ()
        registry_service.search_playlists.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_blank_query_cancels_pending_search(self, registry_service: MagicMock) -> None:
        session = SearchSession(registry_service, debounce=0.05)

        session.submit("yc25")
        session.submit("")
        await asyncio.sleep(0.1)

        registry_service.search_playlists.assert_not_awaited()
        assert session.latest is not None
        assert session.latest.query == ""

    @pytest.mark.asyncio
    async def test_content_fetcher_receives_ids_and_limit(
        self, registry_service: MagicMock
    ) -> None:
        fetcher = AsyncMock(return_value=["sermon-1", "sermon-2"])
        session = SearchSession(
            registry_service, content_fetcher=fetcher, debounce=0, max_results=10
        )

        outcome = await session.search_now("yc25")

        assert outcome is not None
        fetcher.assert_awaited_once_with(outcome.result.playlist_ids, 10)
        assert outcome.items == ("sermon-1", "sermon-2")

    @pytest.mark.asyncio
    async def test_no_content_fetch_without_matches(self, registry_service: MagicMock) -> None:
        fetcher = AsyncMock(return_value=["unused"])
        session = SearchSession(registry_service, content_fetcher=fetcher, debounce=0)

        outcome = await session.search_now("bautismo")

        assert outcome is not None
        assert outcome.result.has_matches is False
        fetcher.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_newer_query_supersedes_slow_fetch(self, registry_service: MagicMock) -> None:
        gate = asyncio.Event()
        published: list[SearchOutcome] = []

        async def slow_fetch(playlist_ids: list[str], limit: int) -> list[str]:
            await gate.wait()
            return [f"items for {playlist_ids[0]}"]

        session = SearchSession(
            registry_service,
            content_fetcher=slow_fetch,
            debounce=0,
            on_result=published.append,
        )

        stale = asyncio.create_task(session.search_now("yc25"))
        await asyncio.sleep(0.01)
        session.submit("musica")
        gate.set()

        assert await stale is None
        await session.wait()
        assert [o.query for o in published] == ["musica"]
        assert session.latest is not None
        assert session.latest.items == ("items for PL-musica",)

    @pytest.mark.asyncio
    async def test_failed_content_fetch_still_publishes_newest_query(
        self, registry_service: MagicMock
    ) -> None:
        async def fetch(playlist_ids: list[str], limit: int) -> list[str]:
            if playlist_ids == ["PL-musica"]:
                raise RuntimeError("content store down")
            return ["sermon-1"]

        session = SearchSession(registry_service, content_fetcher=fetch, debounce=0)

        session.submit("yc25")
        await session.wait()
        assert session.latest is not None
        assert session.latest.error is None

        session.submit("musica")
        await session.wait()

        assert session.latest.query == "musica"
        assert session.latest.result.playlist_ids == ["PL-musica"]
        assert session.latest.items == ()
        assert session.latest.error == "content store down"

    @pytest.mark.asyncio
    async def test_search_now_reports_fetch_failure(self, registry_service: MagicMock) -> None:
        fetcher = AsyncMock(side_effect=ConnectionError())
        session = SearchSession(registry_service, content_fetcher=fetcher, debounce=0)

        outcome = await session.search_now("yc25")

        assert outcome is not None
        assert outcome.result.has_matches is True
        assert outcome.error == "ConnectionError"

    @pytest.mark.asyncio
    async def test_cancel_pending_drops_scheduled_query(
        self, registry_service: MagicMock
    ) -> None:
        session = SearchSession(registry_service, debounce=0.05)

        session.submit("yc25")
        session.cancel_pending()
        await asyncio.sleep(0.1)

        assert session.latest is None
        registry_service.search_playlists.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wait_without_task_returns(self, registry_service: MagicMock) -> None:
        await SearchSession(registry_service).wait()
