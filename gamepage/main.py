"""Command line entry point for the game page renderer.

This module provides:
- Command-line argument parsing
- Application initialization and dependency injection
- Rendering of page fragments to stdout (logs go to stderr)
"""

import argparse
import html
import sys
from dataclasses import replace
from pathlib import Path

import structlog

from gamepage import __version__
from gamepage.models import AppConfig, GameRecord
from gamepage.render import (
    BreadcrumbBuilder,
    GameCardRenderer,
    LinkedHashesRenderer,
    render_game_alts,
    render_game_progress,
    render_game_title,
    render_metadata_table_row,
    render_recent_game_players,
)
from gamepage.services.cache import ArrayCacheStore
from gamepage.services.config import ConfigurationService
from gamepage.services.errors import AppError, ConfigurationError, DataSourceError, get_error_service
from gamepage.services.http_client import HttpClientService
from gamepage.services.logging import setup_logging
from gamepage.services.repository import CatalogRepository
from gamepage.services.urls import UrlBuilder
from gamepage.services.web_api import WebApiRepository

log = structlog.stdlib.get_logger()


class ApplicationContext:
    """Container for application services.

    Services are created lazily so commands that need no game data (title,
    progress) never touch the network or the catalog file.
    """

    def __init__(
        self,
        config_path: Path | None = None,
        catalog_path: Path | None = None,
    ) -> None:
        self._config_path: Path | None = config_path
        self._catalog_path: Path | None = catalog_path

        self._config_service: ConfigurationService | None = None
        self._config: AppConfig | None = None
        self._http_client: HttpClientService | None = None
        self._repository: CatalogRepository | WebApiRepository | None = None
        self._urls: UrlBuilder | None = None
        self._cache: ArrayCacheStore = ArrayCacheStore()

    @property
    def config_service(self) -> ConfigurationService:
        if self._config_service is None:
            self._config_service = ConfigurationService(config_path=self._config_path)
        return self._config_service

    @property
    def config(self) -> AppConfig:
        if self._config is None:
            config = self.config_service.load_config()
            if self._catalog_path is not None:
                config = replace(config, catalog_path=self._catalog_path)
            self._config = config
        return self._config

    @property
    def urls(self) -> UrlBuilder:
        if self._urls is None:
            self._urls = UrlBuilder(
                site_url=self.config.site_url,
                media_base_url=self.config.media_base_url,
            )
        return self._urls

    @property
    def http_client(self) -> HttpClientService:
        if self._http_client is None:
            self._http_client = HttpClientService(
                timeout=self.config.timeout,
                rate_limit_delay=self.config.request_delay,
            )
        return self._http_client

    @property
    def repository(self) -> CatalogRepository | WebApiRepository:
        """Game data source: the catalog file when configured, the web API otherwise."""
        if self._repository is None:
            if self.config.catalog_path is not None:
                self._repository = CatalogRepository.from_file(self.config.catalog_path)
            else:
                if not self.config.api_username or not self.config.api_key:
                    raise ConfigurationError(
                        "Web API credentials are missing.",
                        setting="api_key",
                        expected="api_username and api_key, or a --catalog file",
                    )
                self._repository = WebApiRepository(self.http_client, self.config, self._cache)
        return self._repository

    @property
    def catalog(self) -> CatalogRepository:
        """The catalog data source, for data only a catalog carries (hubs, alts, players)."""
        repository = self.repository
        if not isinstance(repository, CatalogRepository):
            raise ConfigurationError(
                "This command needs a game catalog.",
                setting="catalog_path",
                expected="--catalog path/to/catalog.json",
            )
        return repository

    @property
    def breadcrumbs(self) -> BreadcrumbBuilder:
        return BreadcrumbBuilder(self.repository, self.urls)

    @property
    def card_renderer(self) -> GameCardRenderer:
        return GameCardRenderer(self.repository, self._cache, self.urls)

    @property
    def hashes_renderer(self) -> LinkedHashesRenderer:
        return LinkedHashesRenderer(self.breadcrumbs, self.urls, self.config.label_image_dir)

    def get_game(self, game_id: int) -> GameRecord:
        """Fetch a game or fail with a DataSourceError."""
        game = self.card_renderer.get_card_data(game_id)
        if game is None:
            raise DataSourceError("Game not found.", game_id=game_id)
        return game

    def cleanup(self) -> None:
        if self._http_client is not None:
            self._http_client.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gamepage",
        description="Render game page fragments (titles, breadcrumbs, progress, hashes) as HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gamepage title "~Hack~ Super Game [Subset - Bonus]"
  gamepage progress 10 0 10
  gamepage --catalog catalog.json breadcrumb 42
  gamepage --catalog catalog.json metadata Genre "Action, Platformer" 42
        """
    )

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/gamepage/config.json)"
    )
    _ = parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="JSON game catalog to read instead of the web API"
    )
    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the logging level (default: WARNING)"
    )
    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: stderr only)"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    title = commands.add_parser("title", help="Render a game title")
    _ = title.add_argument("text")
    _ = title.add_argument("--no-tags", action="store_true", help="Drop tag markers instead of rendering them")

    progress = commands.add_parser("progress", help="Render a progress bar")
    _ = progress.add_argument("total", type=int)
    _ = progress.add_argument("casual", type=int)
    _ = progress.add_argument("hardcore", type=int)

    breadcrumb = commands.add_parser("breadcrumb", help="Render a game breadcrumb")
    _ = breadcrumb.add_argument("game_id", type=int)
    _ = breadcrumb.add_argument("--no-link-last", action="store_true", help="Leave the last crumb unlinked")

    card = commands.add_parser("card", help="Render a game tooltip card")
    _ = card.add_argument("game_id", type=int)

    hashes = commands.add_parser("hashes", help="Render the supported game files list")
    _ = hashes.add_argument("game_id", type=int)

    metadata = commands.add_parser("metadata", help="Render a metadata row merged with the game's hubs")
    _ = metadata.add_argument("label")
    _ = metadata.add_argument("values", help="Comma separated values")
    _ = metadata.add_argument("game_id", type=int)
    _ = metadata.add_argument("--alt-label", action="append", default=[], dest="alt_labels")

    alts = commands.add_parser("alts", help="Render the similar games table")
    _ = alts.add_argument("game_id", type=int)
    _ = alts.add_argument("--header", default=None)

    players = commands.add_parser("players", help="Render the recent players table")
    _ = players.add_argument("game_id", type=int)

    return parser


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run_command(args: argparse.Namespace, context: ApplicationContext) -> str:
    """Render the fragment a command asks for.

    Raises:
        AppError: If game data cannot be loaded
    """
    command: str = args.command
    log.debug("Running command", command=command)

    if command == "title":
        return render_game_title(html.escape(args.text), tags=not args.no_tags)
    if command == "progress":
        return render_game_progress(args.total, args.casual, args.hardcore)
    if command == "breadcrumb":
        game = context.get_game(args.game_id)
        return context.breadcrumbs.render(game, link_last_crumb=not args.no_link_last)
    if command == "card":
        return context.card_renderer.render(args.game_id)
    if command == "hashes":
        game = context.get_game(args.game_id)
        return context.hashes_renderer.render(game, context.repository.get_by_game_id(game.id))
    if command == "metadata":
        hubs = context.catalog.get_hubs(args.game_id)
        return render_metadata_table_row(args.label, args.values, hubs, args.alt_labels, context.urls)
    if command == "alts":
        return render_game_alts(context.catalog.get_alts(args.game_id), args.header, context.urls)
    if command == "players":
        return render_recent_game_players(context.catalog.get_recent_players(args.game_id), context.urls)

    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    _ = setup_logging(log_level=args.log_level, log_dir=args.log_dir)

    context = ApplicationContext(config_path=args.config, catalog_path=args.catalog)

    try:
        output = run_command(args, context)
        print(output)
        exit_code = 0

    except AppError as e:
        error_service = get_error_service()
        friendly = error_service.handle_error(e, operation=args.command, component="cli")
        print(error_service.create_user_message(friendly), file=sys.stderr)
        exit_code = 1

    except KeyboardInterrupt:
        log.info("Interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    except Exception as e:
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        exit_code = 1

    finally:
        context.cleanup()

    counts = get_error_service().get_error_count_by_category()
    errors = {category.value: count for category, count in counts.items()}
    log.debug("Exiting", exit_code=exit_code, errors=errors)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
