"""Tests for the command line entry point."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from gamepage.main import ApplicationContext, main, parse_arguments
from gamepage.services.config import API_KEY_ENV, API_USERNAME_ENV
from gamepage.services.errors import ConfigurationError, DataSourceError, get_error_service
from gamepage.services.repository import CatalogRepository
from gamepage.services.web_api import WebApiRepository


CATALOG = {
    "games": [
        {"ID": 42, "Title": "Pokemon Red", "ConsoleID": 4, "ConsoleName": "Game Boy", "ForumTopicID": 7},
        {"ID": 99, "Title": "Pokemon Red [Subset - Bonus]", "ConsoleID": 4, "ConsoleName": "Game Boy"},
    ],
    "hashes": {"42": [{"Hash": "abc123", "Name": "Pokemon Red (USA)", "Labels": "nointro"}]},
    "hubs": {"42": [{"Title": "[Genre - RPG]", "gameIDAlt": 5}]},
    "alts": {"42": [{"gameIDAlt": 43, "Title": "Pokemon Blue", "ConsoleName": "Game Boy", "Points": 400}]},
    "recent_players": {"42": [{"User": "Scott", "Date": "2024-01-01", "Activity": "Catching them all"}]},
}


@pytest.fixture(autouse=True)
def no_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(API_USERNAME_ENV, raising=False)
    monkeypatch.delenv(API_KEY_ENV, raising=False)


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(CATALOG), encoding="utf-8")
    return path


def run(capsys: pytest.CaptureFixture[str], *argv: str) -> tuple[int, str, str]:
    """Run the CLI and return its exit code, stdout and stderr."""
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    captured = capsys.readouterr()
    return exc_info.value.code, captured.out, captured.err


class TestParseArguments:
    def test_defaults(self) -> None:
        args = parse_arguments(["progress", "10", "0", "10"])

        assert args.command == "progress"
        assert args.log_level == "WARNING"
        assert args.config is None
        assert args.catalog is None
        assert args.log_dir is None

    def test_global_options(self, tmp_path: Path) -> None:
        args = parse_arguments(
            ["--catalog", str(tmp_path / "c.json"), "--log-level", "DEBUG", "metadata", "Genre", "RPG", "1",
             "--alt-label", "Subgenre", "--alt-label", "Theme"]
        )

        assert args.catalog == tmp_path / "c.json"
        assert args.log_level == "DEBUG"
        assert args.alt_labels == ["Subgenre", "Theme"]

    def test_command_required(self) -> None:
        with pytest.raises(SystemExit):
            parse_arguments([])


class TestCommandsWithoutGameData:
    def test_title(self, capsys: pytest.CaptureFixture[str], config_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "title", "~Hack~ Tom & Jerry")

        assert code == 0
        assert out == "Tom &amp; Jerry <span class='tag'><span>Hack</span></span>\n"

    def test_title_without_tags(self, capsys: pytest.CaptureFixture[str], config_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "title", "~Hack~ Game [Subset - Bonus]", "--no-tags")

        assert code == 0
        assert out == "Game\n"

    def test_progress(self, capsys: pytest.CaptureFixture[str], config_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "progress", "10", "0", "10")

        assert code == 0
        soup = BeautifulSoup(out, "html.parser")
        assert soup.find("div", class_="progressbar-label").get_text() == "Mastered"


class TestCatalogCommands:
    def test_breadcrumb(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(
            capsys, "--config", str(config_path), "--catalog", str(catalog_path), "breadcrumb", "99", "--no-link-last"
        )

        assert code == 0
        assert " &raquo; <a href='/game/42'>Pokemon Red</a> &raquo; <b><span class='tag'>" in out

    def test_card(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "--catalog", str(catalog_path), "card", "42")

        assert code == 0
        assert "<b>Pokemon Red</b><br>Game Boy" in out

    def test_card_for_unknown_game(
        self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path
    ) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "--catalog", str(catalog_path), "card", "1")

        assert code == 0
        assert out == "\n"

    def test_hashes(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "--catalog", str(catalog_path), "hashes", "42")

        assert code == 0
        soup = BeautifulSoup(out, "html.parser")
        assert soup.find("span", class_="font-bold").get_text() == "1"
        assert "[nointro]" in out
        assert soup.find("a", string="official forum topic")["href"] == "/viewtopic.php?t=7"

    def test_metadata(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(
            capsys, "--config", str(config_path), "--catalog", str(catalog_path), "metadata", "Genre", "Action", "42"
        )

        assert code == 0
        assert out == "<tr><td>Genre</td><td><b>Action, <a href='/game/5'>RPG</a></b></td></tr>\n"

    def test_alts(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(
            capsys, "--config", str(config_path), "--catalog", str(catalog_path), "alts", "42", "--header", "Similar"
        )

        assert code == 0
        assert "<h2 class='text-h3'>Similar</h2>" in out
        assert "400 points" in out

    def test_players(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, _ = run(capsys, "--config", str(config_path), "--catalog", str(catalog_path), "players", "42")

        assert code == 0
        assert "Catching them all" in out
        assert "/user/Scott" in out


class TestCommandErrors:
    def test_unknown_game(self, capsys: pytest.CaptureFixture[str], config_path: Path, catalog_path: Path) -> None:
        code, out, err = run(capsys, "--config", str(config_path), "--catalog", str(catalog_path), "breadcrumb", "1")

        assert code == 1
        assert out == ""
        assert "Game not found." in err

    def test_missing_catalog(self, capsys: pytest.CaptureFixture[str], config_path: Path, tmp_path: Path) -> None:
        code, _, err = run(
            capsys, "--config", str(config_path), "--catalog", str(tmp_path / "missing.json"), "card", "42"
        )

        assert code == 1
        assert "Could not read the game catalog file." in err
        assert "Suggested actions:" in err

    def test_missing_credentials(self, capsys: pytest.CaptureFixture[str], config_path: Path) -> None:
        code, _, err = run(capsys, "--config", str(config_path), "card", "42")

        assert code == 1
        assert "Web API credentials are missing." in err

    def test_catalog_only_command_with_web_api(
        self, capsys: pytest.CaptureFixture[str], config_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(API_USERNAME_ENV, "scott")
        monkeypatch.setenv(API_KEY_ENV, "secret")

        code, _, err = run(capsys, "--config", str(config_path), "players", "42")

        assert code == 1
        assert "This command needs a game catalog." in err

    def test_exit_log_counts_errors(
        self, capsys: pytest.CaptureFixture[str], config_path: Path, tmp_path: Path
    ) -> None:
        get_error_service().clear_history()

        with patch("gamepage.main.log") as mock_logger:
            code, _, _ = run(
                capsys, "--config", str(config_path), "--catalog", str(tmp_path / "missing.json"), "card", "42"
            )

        assert code == 1
        mock_logger.debug.assert_called_with("Exiting", exit_code=1, errors={"data_source": 1})
        get_error_service().clear_history()


class TestApplicationContext:
    def test_catalog_overrides_config(self, config_path: Path, catalog_path: Path) -> None:
        context = ApplicationContext(config_path=config_path, catalog_path=catalog_path)

        assert context.config.catalog_path == catalog_path
        assert isinstance(context.repository, CatalogRepository)
        assert context.repository is context.repository

    def test_web_api_with_credentials(self, config_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(API_USERNAME_ENV, "scott")
        monkeypatch.setenv(API_KEY_ENV, "secret")
        context = ApplicationContext(config_path=config_path)

        try:
            assert isinstance(context.repository, WebApiRepository)
            with pytest.raises(ConfigurationError):
                _ = context.catalog
        finally:
            context.cleanup()

    def test_get_game(self, config_path: Path, catalog_path: Path) -> None:
        context = ApplicationContext(config_path=config_path, catalog_path=catalog_path)

        assert context.get_game(42).title == "Pokemon Red"
        with pytest.raises(DataSourceError, match="Game not found."):
            context.get_game(1)
