"""Debounced, latest-query-wins search session.

A typing user produces a stream of queries.  :class:`SearchSession` turns
that stream into results the way a search box expects:

1. **Debounce** -- a query is only run after ``debounce`` seconds pass
   without a newer one.
2. **Cancel superseded work** -- submitting a query cancels the task of
   the previous one, including its downstream content fetch.
3. **Latest wins** -- every submission gets a generation number; a result
   is only published if its generation is still the newest, so a slow
   fetch for an old query can never overwrite a newer query's results.
4. **Failures still publish** -- if the content fetch raises, the newest
   query is published with its ranked playlists, no items, and ``error``
   set, so the caller never keeps showing a previous query's results.

Ranking itself is synchronous and cheap; what gets cancelled is the wait
and the content fetch that follows it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.config.search_constants import MAX_PLAYLIST_RESULTS, SEARCH_DEBOUNCE_SECONDS
from src.models.playlist import PlaylistSearchResult
from src.services.playlist_registry_service import PlaylistRegistryService
from src.utils.logging import get_logger

# (playlist_ids, limit) -> content items, e.g. sermons in those playlists.
ContentFetcher = Callable[[Sequence[str], int], Awaitable[list[Any]]]
ResultListener = Callable[["SearchOutcome"], None]


class SearchOutcome(BaseModel):
    """The published result of one query."""

    model_config = ConfigDict(frozen=True)

    query: str
    result: PlaylistSearchResult = Field(default_factory=PlaylistSearchResult)
    items: tuple[Any, ...] = Field(default=())
    error: str | None = Field(
        default=None,
        description="Set when the content fetch failed; playlists are still ranked.",
    )


class SearchSession:
    """Runs searches for a stream of queries, publishing only the newest.

    Parameters
    ----------
    registry_service:
        Supplies the registry and performs the ranking.
    content_fetcher:
        Optional coroutine fetching content for matched playlist ids.
    debounce:
        Quiet period in seconds before a submitted query runs.
    max_results:
        Limit passed to *content_fetcher*.
    on_result:
        Optional callback invoked with each published outcome.
    """

    def __init__(
        self,
        registry_service: PlaylistRegistryService,
        content_fetcher: ContentFetcher | None = None,
        debounce: float = SEARCH_DEBOUNCE_SECONDS,
        max_results: int = MAX_PLAYLIST_RESULTS,
        on_result: ResultListener | None = None,
    ) -> None:
        self._registry = registry_service
        self._fetch_content = content_fetcher
        self._debounce = debounce
        self._max_results = max_results
        self._on_result = on_result
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._latest: SearchOutcome | None = None
        self._logger = get_logger(__name__)

    @property
    def latest(self) -> SearchOutcome | None:
        """The most recently published outcome, if any."""
        return self._latest

    def submit(self, query: str) -> None:
        """Schedule *query*, superseding any pending or running query.

        Must be called from within a running event loop.
        """
        self._generation += 1
        generation = self._generation
        self.cancel_pending()

        if not query.strip():
            self._publish(SearchOutcome(query=query), generation)
            return

        self._task = asyncio.create_task(self._run(query, generation, self._debounce))

    async def search_now(self, query: str) -> SearchOutcome | None:
        """Run *query* immediately (no debounce) and wait for it.

        Returns ``None`` if a newer query was submitted meanwhile.
        """
        self._generation += 1
        generation = self._generation
        self.cancel_pending()
        self._task = asyncio.create_task(self._run(query, generation, 0.0))
        await self.wait()
        if generation != self._generation:
            return None
        return self._latest

    async def wait(self) -> None:
        """Wait for the current task to finish or be cancelled."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def cancel_pending(self) -> None:
        """Cancel the in-flight task, if any."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _run(self, query: str, generation: int, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)

        result = await self._registry.search_playlists(query)

        items: list[Any] = []
        error: str | None = None
        if result.has_matches and self._fetch_content is not None:
            try:
                items = await self._fetch_content(result.playlist_ids, self._max_results)
            except Exception as exc:
                self._logger.warning(
                    "search_content_fetch_failed",
                    query=query,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                error = str(exc) or type(exc).__name__

        self._publish(
            SearchOutcome(query=query, result=result, items=tuple(items), error=error),
            generation,
        )

    def _publish(self, outcome: SearchOutcome, generation: int) -> None:
        if generation != self._generation:
            self._logger.debug("search_result_discarded", query=outcome.query)
            return
        self._latest = outcome
        self._logger.debug(
            "search_result_published",
            query=outcome.query,
            playlists=len(outcome.result.playlists),
            items=len(outcome.items),
        )
        if self._on_result is not None:
            self._on_result(outcome)
