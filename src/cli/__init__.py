# =============================================================================
# src/cli/__init__.py - CLI Module Overview
# =============================================================================
#
# Command-line tools for developers and operators working on the playlist
# registry outside a host application.
#
#   SEARCH (search.py)
#      Ranks the registry against a query and prints the playlists,
#      optionally with scores or as JSON.  Can search a local registry
#      file, force a registry refresh, or print the resolved config.
#
# Architecture Notes:
#   - argparse for argument parsing, as elsewhere in the project.
#   - The registry service factory is imported
#     lazily; file-only searches never build it.
# =============================================================================

"""CLI tools for sermonFinder.

- ``python -m src.cli.search`` - search the playlist registry.
"""
