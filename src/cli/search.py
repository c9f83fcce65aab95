# =============================================================================
# src/cli/search.py - CLI Search Command
# =============================================================================
#
# Runs one playlist search from the command line, outside any host app.
# Useful for checking how a query ranks against the live registry, the
# persisted cache, or a local registry file while tuning aliases.
#
# Typical usage:
#   python -m src.cli.search yc25                          # Registry service
#   python -m src.cli.search "Jóvenes 2025" --json         # Machine-readable
#   python -m src.cli.search conf --registry reg.json      # Local file only
#   python -m src.cli.search conf --scores                 # Show scores
#   python -m src.cli.search --refresh                     # Refetch registry
#   python -m src.cli.search --show-config                 # Resolved config
#
# Log output goes to stderr so stdout carries only results.
# =============================================================================

"""Standalone CLI for searching the playlist registry.

Usage::

    python -m src.cli.search yc25
    python -m src.cli.search "conferencia 2025" --json
    python -m src.cli.search youth --registry registry.json --scores
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import httpx

from src.config.loader import load_config
from src.config.settings import Settings
from src.models.playlist import PlaylistRecord, ScoredPlaylist
from src.providers.registry.bundled_registry_source import BundledRegistrySource
from src.services.playlist_search_service import PlaylistSearchService
from src.utils.errors import SermonFinderError
from src.utils.logging import configure_logging


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def _format_text_output(query: str, scored: list[ScoredPlaylist], show_scores: bool) -> str:
    """Format ranked playlists as a numbered, human-readable list."""
    if not scored:
        return f'No playlists match "{query}".'

    lines = [f'{len(scored)} playlist(s) match "{query}":', ""]
    for rank, entry in enumerate(scored, start=1):
        playlist = entry.playlist
        year = f" ({playlist.year})" if playlist.year is not None else ""
        score = f"  [score {entry.score}]" if show_scores else ""
        lines.append(f"{rank:>3}. {playlist.title}{year}  |  {playlist.youtube_playlist_id}{score}")
    return "\n".join(lines)


def _format_json_output(query: str, scored: list[ScoredPlaylist], show_scores: bool) -> str:
    """Format ranked playlists as a JSON document."""
    playlists = []
    for entry in scored:
        data = entry.playlist.model_dump(mode="json")
        if show_scores:
            data["score"] = entry.score
        playlists.append(data)
    return json.dumps(
        {
            "query": query,
            "playlist_ids": [e.playlist.youtube_playlist_id for e in scored],
            "playlists": playlists,
        },
        indent=2,
        ensure_ascii=False,
    )


# ---------------------------------------------------------------------------
# Registry loading
# ---------------------------------------------------------------------------


async def _load_registry(
    registry_file: str | None,
    refresh: bool,
    app_settings: Settings,
) -> list[PlaylistRecord]:
    """Load playlists from a local file or through the registry service."""
    if registry_file:
        return await BundledRegistrySource(path=registry_file).fetch_registry()

    # Deferred so file-only runs never build the registry service.
    from src.main import build_registry_service

    async with httpx.AsyncClient() as http_client:
        service = build_registry_service(app_settings, http_client=http_client)
        if refresh:
            return await service.refresh_registry()
        return await service.get_registry()


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    if args.show_config:
        print(json.dumps(load_config(args.config, settings=app_settings), indent=2, default=str))
        return 0

    try:
        registry = await _load_registry(args.registry, args.refresh, app_settings)
    except SermonFinderError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if not args.query:
        print(f"Registry loaded: {len(registry)} playlist(s).")
        return 0

    scored = PlaylistSearchService().score(args.query, registry)
    if args.json_output:
        print(_format_json_output(args.query, scored, args.scores))
    else:
        print(_format_text_output(args.query, scored, args.scores))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the search CLI."""
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.search",
        description="Search the playlist registry and print ranked playlists.",
    )
    parser.add_argument("query", nargs="?", default="", help="Free-text query, e.g. 'yc25'.")
    parser.add_argument(
        "--registry",
        metavar="FILE",
        help="Search a local registry JSON file instead of the registry service.",
    )
    parser.add_argument("--json", dest="json_output", action="store_true", help="Emit JSON.")
    parser.add_argument("--scores", action="store_true", help="Include relevance scores.")
    parser.add_argument(
        "--refresh",
        action="store_true",
        help="Force a network refetch of the registry before searching.",
    )
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Print the resolved configuration and exit.",
    )
    parser.add_argument(
        "--config",
        default="config/config.yaml",
        help="YAML config file merged under environment settings.",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the search tool."""
    args = _build_parser().parse_args(argv)
    app_settings = Settings()

    # JSON mode keeps logs at WARNING so stderr stays quiet for scripts.
    level = args.log_level or ("WARNING" if args.json_output else app_settings.log_level)
    configure_logging(log_level=level, stream=sys.stderr)

    if args.registry and not Path(args.registry).is_file():
        print(f"Error: registry file not found: {args.registry}", file=sys.stderr)
        sys.exit(1)

    sys.exit(asyncio.run(_run(args, app_settings)))


if __name__ == "__main__":
    main()
