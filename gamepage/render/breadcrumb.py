"""Game navigation breadcrumbs.

Format: ``All Games » (console) » (game title)``, followed by
``» Subset - (name)`` when the game is a subset of a base game.
"""

import html

import structlog

from ..models import GameRecord
from ..services.errors import AppError, handle_error
from ..services.repository import GameLookupService
from ..services.urls import UrlBuilder
from .title import render_game_title, split_subset, strip_title_tags

log = structlog.stdlib.get_logger()

SEPARATOR = " &raquo; "


def next_crumb(text: str, href: str = "") -> str:
    """Next crumb, as a link when ``href`` is set and bold text otherwise."""
    if href:
        return f"{SEPARATOR}<a href='{href}'>{text}</a>"
    return f"{SEPARATOR}<b>{text}</b>"


class BreadcrumbBuilder:
    """Renders the navigation path of a game page."""

    def __init__(self, lookup: GameLookupService, urls: UrlBuilder | None = None) -> None:
        self.lookup = lookup
        self.urls = urls or UrlBuilder()

    def render(self, game: GameRecord, link_last_crumb: bool = True) -> str:
        """Render the breadcrumb for a game.

        Only the final crumb can be unlinked: the base game crumb stays a
        link whenever a subset crumb follows it. A base game whose id cannot
        be resolved is rendered as bold text.

        Args:
            game: Game being displayed
            link_last_crumb: Whether the final crumb links to its game page

        Returns:
            Breadcrumb markup
        """
        crumbs = f"<a href='{self.urls.all_games()}'>All Games</a>"
        crumbs += next_crumb(html.escape(game.console_name), self.urls.game_list(game.console_id))

        main_id, rendered_main, subset_id, rendered_subset = self._split(game)

        base_href = ""
        if (link_last_crumb or subset_id) and main_id:
            base_href = self.urls.game(main_id)
        crumbs += next_crumb(rendered_main, base_href)

        if subset_id:
            crumbs += next_crumb(rendered_subset or "", self.urls.game(subset_id) if link_last_crumb else "")

        return crumbs

    def _split(self, game: GameRecord) -> tuple[int | None, str, int | None, str | None]:
        """Separate ids and rendered titles for the main game and its subset (if any)."""
        main_id: int | None = game.id
        main_title = game.title
        subset_id: int | None = None
        rendered_subset: str | None = None

        main, subset = split_subset(game.title)
        if subset is not None:
            main_title = main
            main_id = self._find_id(main_title, game.console_id)
            subset_id = game.id
            rendered_subset = render_game_title(html.escape(subset))

        rendered_main = render_game_title(html.escape(main_title), tags=False)

        stripped = strip_title_tags(main_title)
        if stripped != main_title:
            # A same-console derived game can share its base game's plain
            # title; keep the tags visible to tell them apart
            base_id = self._find_id(stripped, game.console_id)
            if base_id and base_id != main_id:
                rendered_main = render_game_title(html.escape(main_title))

        return main_id, rendered_main, subset_id, rendered_subset

    def _find_id(self, title: str, console_id: int) -> int | None:
        try:
            game_id = self.lookup.find_id_by_title(title, console_id)
        except AppError as e:
            handle_error(
                e,
                operation="find_id_by_title",
                component="breadcrumb",
                context={"title": title, "console_id": console_id},
            )
            return None

        if game_id is None:
            log.debug("No game found for title", title=title, console_id=console_id)
        return game_id


def render_game_breadcrumb(
    game: GameRecord,
    lookup: GameLookupService,
    link_last_crumb: bool = True,
    urls: UrlBuilder | None = None,
) -> str:
    return BreadcrumbBuilder(lookup, urls).render(game, link_last_crumb=link_last_crumb)
