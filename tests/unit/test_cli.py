"""Unit tests for the search CLI (src.cli.search)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.cli.search import _build_parser, _format_text_output, main
from src.config.settings import Settings
from src.models.playlist import ScoredPlaylist
from tests.conftest import make_record


# ======================================================================
# Shared helpers
# ======================================================================


def _settings(**overrides) -> Settings:
    """Build a Settings instance with no network source and an in-memory cache."""
    defaults = {
        "supabase_url": "",
        "supabase_anon_key": "",
        "registry_cache_backend": "memory",
        "app_env": "test",
        "log_level": "WARNING",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _run_main(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


@pytest.fixture(autouse=True)
def _quiet_cli_logging():
    # The real configure_logging would rebind structlog to capsys buffers;
    # the mock records the arguments the CLI passes.
    with patch("src.cli.search.configure_logging") as configure, patch(
        "src.cli.search.Settings", side_effect=lambda: _settings()
    ):
        yield configure


@pytest.fixture
def registry_file(tmp_path: Path, registry_payload: list[dict[str, Any]]) -> Path:
    path = tmp_path / "registry.json"
    path.write_text(json.dumps(registry_payload, ensure_ascii=False), encoding="utf-8")
    return path


# ======================================================================
# Argument parsing
# ======================================================================


class TestParser:
    def test_defaults(self) -> None:
        args = _build_parser().parse_args(["yc25"])
        assert args.query == "yc25"
        assert args.registry is None
        assert args.json_output is False
        assert args.refresh is False
        assert args.scores is False

    def test_query_is_optional(self) -> None:
        assert _build_parser().parse_args(["--refresh"]).query == ""


# ======================================================================
# Output formatting
# ======================================================================


class TestFormatting:
    def test_text_output_numbers_results(self) -> None:
        scored = [
            ScoredPlaylist(playlist=make_record("a", "Alpha", year=2025), score=155),
            ScoredPlaylist(playlist=make_record("b", "Beta"), score=75),
        ]
        text = _format_text_output("q", scored, show_scores=True)
        assert "1. Alpha (2025)  |  PL-a  [score 155]" in text
        assert "2. Beta  |  PL-b  [score 75]" in text

    def test_text_output_no_matches(self) -> None:
        assert _format_text_output("zzz", [], show_scores=False) == 'No playlists match "zzz".'


# ======================================================================
# main()
# ======================================================================


class TestMain:
    def test_search_local_registry_file(
        self, registry_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run_main(["yc25", "--registry", str(registry_file)]) == 0
        out = capsys.readouterr().out
        assert "Conferencia de Jóvenes 2025 (2025)" in out
        assert "PLyc2025" in out

    def test_json_output(self, registry_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run_main(["jovenes", "--registry", str(registry_file), "--json", "--scores"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["query"] == "jovenes"
        assert payload["playlist_ids"] == ["PLyc2025"]
        assert payload["playlists"][0]["score"] > 0

    def test_json_mode_lowers_log_level(
        self, registry_file: Path, _quiet_cli_logging: MagicMock
    ) -> None:
        _run_main(["yc25", "--registry", str(registry_file), "--json"])
        assert _quiet_cli_logging.call_args.kwargs["log_level"] == "WARNING"

    def test_missing_registry_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run_main(["yc25", "--registry", str(tmp_path / "nope.json")]) == 1
        assert "registry file not found" in capsys.readouterr().err

    def test_malformed_registry_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert _run_main(["yc25", "--registry", str(path)]) == 1
        assert capsys.readouterr().err.startswith("Error: [bundled]")

    def test_no_query_reports_registry_size(
        self, registry_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run_main(["--registry", str(registry_file)]) == 0
        assert "Registry loaded: 2 playlist(s)." in capsys.readouterr().out

    def test_show_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config_path = tmp_path / "config.yaml"
        config_path.write_text("app:\n  name: sermonFinder\n", encoding="utf-8")
        assert _run_main(["--show-config", "--config", str(config_path)]) == 0
        config = json.loads(capsys.readouterr().out)
        assert config["app"]["name"] == "sermonFinder"
        assert config["cache"]["backend"] == "memory"
        assert config["registry"]["network_enabled"] is False

    def test_uses_registry_service_without_file(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        service = MagicMock()
        service.get_registry = AsyncMock(return_value=[make_record("musica", "Música")])
        service.refresh_registry = AsyncMock()
        with patch("src.main.build_registry_service", return_value=service):
            assert _run_main(["musica"]) == 0

        service.get_registry.assert_awaited_once()
        service.refresh_registry.assert_not_awaited()
        assert "Música" in capsys.readouterr().out

    def test_refresh_flag_forces_refetch(self) -> None:
        service = MagicMock()
        service.get_registry = AsyncMock()
        service.refresh_registry = AsyncMock(return_value=[])
        with patch("src.main.build_registry_service", return_value=service):
            assert _run_main(["--refresh"]) == 0

        service.refresh_registry.assert_awaited_once()
        service.get_registry.assert_not_awaited()
