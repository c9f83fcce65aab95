"""Playlist search: score every registry record against a query and rank.

# ─── HOW SCORING WORKS ────────────────────────────────────────────────
#
# The query is normalized, stripped of year tokens, and expanded into
# bilingual variants.  Each playlist is then scored against its alias set
# (see alias_builder.py) by four additive rules:
#
#   1. Exact alias match      +100 per alias equal to any variant
#   2. Substring containment  +50 for EVERY (alias, variant) pair where the
#                             alias contains the variant.  This stacks: a
#                             playlist with many tags mentioning "youth"
#                             outscores one with a single tag.
#   3. Token coverage         +75 if every search token occurs somewhere in
#                             the joined alias text, otherwise +25 per token
#                             that does
#   4. Year boost             +80 if the playlist year was named in the query
#
# Playlists scoring below MINIMUM_PLAYLIST_SCORE are dropped.  The rest are
# ordered by score, then year (newest first, yearless last), then title,
# then id, so the output never depends on registry order.
#
# Everything here is a pure function of (query, registry).  No I/O, no
# shared state: safe to call from any number of concurrent tasks.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from src.config.search_constants import (
    ALL_TOKENS_MATCH_SCORE,
    CONTAINS_MATCH_SCORE,
    EXACT_MATCH_SCORE,
    MINIMUM_PLAYLIST_SCORE,
    PARTIAL_TOKEN_MATCH_SCORE,
    YEAR_MATCH_BOOST,
)
from src.models.playlist import PlaylistRecord, PlaylistSearchResult, ScoredPlaylist
from src.services.alias_builder import build_aliases
from src.utils.text_normalizer import expand_synonyms, extract_year_tokens, normalize_text

logger = structlog.get_logger(logger_name=__name__)


class QueryPlan:
    """The query-side inputs to scoring, derived once per search."""

    __slots__ = ("years", "core", "variants", "tokens")

    def __init__(self, query: str) -> None:
        extraction = extract_year_tokens(normalize_text(query))
        self.years: frozenset[int] = frozenset(extraction.years)
        self.core: str = extraction.normalized

        variants = expand_synonyms(self.core)
        variants.add(self.core)
        self.variants: frozenset[str] = frozenset(variants)

        tokens: set[str] = set()
        for variant in self.variants:
            tokens.update(t for t in variant.split(" ") if t)
            # Multi-word variants also count as a single token so that an
            # alias containing the whole phrase is credited for it.
            if variant:
                tokens.add(variant)
        self.tokens: frozenset[str] = frozenset(tokens)


def score_playlist(record: PlaylistRecord, plan: QueryPlan) -> int:
    """Score one playlist against a prepared query.

    Args:
        record: Playlist to score.
        plan: Query plan from :class:`QueryPlan`.

    Returns:
        Non-negative relevance score.
    """
    aliases = sorted(build_aliases(record))
    score = 0

    for alias in aliases:
        if alias in plan.variants:
            score += EXACT_MATCH_SCORE
        for variant in plan.variants:
            if variant and variant in alias:
                score += CONTAINS_MATCH_SCORE

    alias_text = " ".join(aliases)
    matching_tokens = [token for token in plan.tokens if token in alias_text]
    if plan.tokens and len(matching_tokens) == len(plan.tokens):
        score += ALL_TOKENS_MATCH_SCORE
    elif matching_tokens:
        score += PARTIAL_TOKEN_MATCH_SCORE * len(matching_tokens)

    if plan.years and record.year is not None and record.year in plan.years:
        score += YEAR_MATCH_BOOST

    return score


def _ranking_key(scored: ScoredPlaylist) -> tuple:
    playlist = scored.playlist
    has_year = playlist.year is not None
    return (
        -scored.score,
        not has_year,
        -(playlist.year or 0),
        playlist.title.casefold(),
        playlist.id,
    )


def rank(scored: Iterable[ScoredPlaylist]) -> list[ScoredPlaylist]:
    """Order scored playlists: score desc, year desc (yearless last), title, id."""
    return sorted(scored, key=_ranking_key)


def search_playlists(query: str, registry: Sequence[PlaylistRecord]) -> PlaylistSearchResult:
    """Resolve a free-text query against a registry snapshot.

    Args:
        query: Raw user input, e.g. ``"yc25"`` or ``"Jóvenes 2025"``.
        registry: Playlist records to rank.

    Returns:
        Matching playlists, most relevant first.  Empty when the query is
        blank or nothing scores above the minimum.
    """
    if not query.strip():
        return PlaylistSearchResult()

    plan = QueryPlan(query)
    candidates: list[ScoredPlaylist] = []
    for record in registry:
        score = score_playlist(record, plan)
        if score >= MINIMUM_PLAYLIST_SCORE:
            candidates.append(ScoredPlaylist(playlist=record, score=score))

    ranked = rank(candidates)
    logger.debug(
        "playlist_search_complete",
        query=query,
        core=plan.core,
        years=sorted(plan.years),
        registry_size=len(registry),
        match_count=len(ranked),
    )
    return PlaylistSearchResult(playlists=tuple(s.playlist for s in ranked))


class PlaylistSearchService:
    """Stateless facade over :func:`search_playlists`.

    Exists so callers that receive their collaborators by injection (the
    registry service, the search session) can be handed a search engine
    object and have it replaced in tests.
    """

    def search(self, query: str, registry: Sequence[PlaylistRecord]) -> PlaylistSearchResult:
        """Rank *registry* against *query*.  See :func:`search_playlists`."""
        return search_playlists(query, registry)

    def score(self, query: str, registry: Sequence[PlaylistRecord]) -> list[ScoredPlaylist]:
        """Return ranked candidates with their scores, for diagnostics."""
        if not query.strip():
            return []
        plan = QueryPlan(query)
        scored = (ScoredPlaylist(playlist=r, score=score_playlist(r, plan)) for r in registry)
        return rank(s for s in scored if s.score >= MINIMUM_PLAYLIST_SCORE)
