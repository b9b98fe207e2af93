"""Supported game files page: the hashes registered for a game."""

import html
from collections.abc import Sequence
from pathlib import Path

import structlog

from ..models import GameRecord, HashRecord
from ..services.urls import UrlBuilder
from .avatar import game_avatar, user_avatar
from .breadcrumb import BreadcrumbBuilder

log = structlog.stdlib.get_logger()

LABEL_IMAGE_PATH = "assets/images/labels/{label}.png"

HASH_EXPLANATION = (
    "<p class='embedded p-4'><b>Game file hashes are used to confirm if two copies of a game file are identical. "
    "We use it to ensure the player is using the same ROM as the achievement developer, or a compatible one."
    "<br/><br/>RetroAchievements only hashes portions of larger game files to minimize load times, and strips "
    "headers on smaller ones. Details on how the hash is generated for each system can be found "
    "<a href='https://docs.retroachievements.org/Game-Identification/'>here</a>."
    "</b></p>"
)


class LinkedHashesRenderer:
    """Renders the list of supported game file hashes of a game.

    Named hashes are listed one by one with their labels; unnamed hashes are
    grouped under a single entry.
    """

    def __init__(
        self,
        breadcrumbs: BreadcrumbBuilder,
        urls: UrlBuilder | None = None,
        label_image_dir: Path | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            breadcrumbs: Builder for the page navigation path
            urls: URL builder for links and assets
            label_image_dir: Directory holding ``{label}.png`` label images;
                labels without an image render as ``[label]``
        """
        self.breadcrumbs = breadcrumbs
        self.urls = urls or breadcrumbs.urls
        self.label_image_dir = label_image_dir

    def render(self, game: GameRecord, hashes: Sequence[HashRecord]) -> str:
        log.debug("Rendering linked hashes", game_id=game.id, hashes=len(hashes))

        page = "<div class='navpath'>"
        page += self.breadcrumbs.render(game)
        page += " &raquo; <b>Supported Game Files</b>"
        page += "</div>"
        page += "<h3>List of Supported Game Files</h3>"
        page += game_avatar(game, icon_size=64, urls=self.urls)
        page += "<br><br>"
        page += HASH_EXPLANATION
        page += (
            "<p class='mt-4 mb-1'>There are currently "
            f"<span class='font-bold'>{len(hashes)}</span>"
            " supported game file hashes registered for this game.</p>"
        )

        page += "<ul>"
        named = [game_hash for game_hash in hashes if game_hash.name]
        unnamed = [game_hash for game_hash in hashes if not game_hash.name]

        for game_hash in named:
            page += self._render_named_hash(game_hash)

        if unnamed:
            page += '<li><p class="embedded p-4"><b>Unlabeled Game File Hashes</b><br/>'
            for game_hash in unnamed:
                page += f"<code> {html.escape(game_hash.hash)}</code>"
                page += self._render_linked_by(game_hash)
                page += "<br/>"
            page += "</p></li>"

        page += "</ul>"
        page += "<br>"

        if game.forum_topic_id and game.forum_topic_id > 0:
            page += (
                "Additional information for these hashes may be listed on the "
                f"<a href='{self.urls.forum_topic(game.forum_topic_id)}'>official forum topic</a>.<br/>"
            )

        return page

    def _render_named_hash(self, game_hash: HashRecord) -> str:
        item = f"<li><p class='embedded p-4'><b>{html.escape(game_hash.name or '')}</b>"
        for label in game_hash.labels:
            item += self.render_label(label)
        item += f"<br/><code> {html.escape(game_hash.hash)}</code>"
        item += self._render_linked_by(game_hash)
        item += "</p></li>"
        return item

    def _render_linked_by(self, game_hash: HashRecord) -> str:
        if not game_hash.linked_user_name:
            return ""
        return " linked by " + user_avatar(game_hash.linked_user_name, icon=False, urls=self.urls)

    def render_label(self, label: str) -> str:
        """Render a hash label as its image when one exists, else as ``[label]``."""
        if self.label_image_dir is not None and (self.label_image_dir / f"{label}.png").is_file():
            src = self.urls.asset(LABEL_IMAGE_PATH.format(label=label))
            return f' <img class="inline-image" src="{src}">'
        return f" [{html.escape(label)}]"
