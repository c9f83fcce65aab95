# =============================================================================
# src/cli/__main__.py - Package Entry Point
# =============================================================================
#
# Enables running the CLI package itself as a module:
#     python -m src.cli yc25
#
# Delegates to the search CLI, the only command in this package.
# =============================================================================

"""Allow ``python -m src.cli`` execution."""

from src.cli.search import main

main()
