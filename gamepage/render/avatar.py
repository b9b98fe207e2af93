"""Avatars (icon and/or label links) and game tooltip cards."""

import html

import structlog

from ..models import GameRecord
from ..services.cache import ArrayCacheStore, CacheStore
from ..services.errors import AppError, handle_error
from ..services.repository import GameCardDataService
from ..services.urls import UrlBuilder
from .title import render_game_title

log = structlog.stdlib.get_logger()

CARD_ERROR_TEXT = "Error"


def avatar(
    resource: str,
    id: int | str,
    label: str | None = None,
    link: str | None = None,
    tooltip: bool | str = True,
    icon_url: str | None = None,
    icon_size: int = 32,
    icon_class: str = "badgeimg",
    context: str | None = None,
    sanitize: bool = True,
    alt_text: str | None = None,
) -> str:
    """Render a linked avatar: an icon, a label, or both.

    A string tooltip is embedded as pre-rendered markup. ``True`` leaves the
    tooltip to be loaded by the page from the resource and id.

    Args:
        resource: Resource kind (``game``, ``user``)
        id: Resource id
        label: Label markup, escaped here when ``sanitize`` is set
        link: Link target
        tooltip: Pre-rendered tooltip, True for a dynamic one, False for none
        icon_url: Icon image URL
        icon_size: Icon width and height in pixels
        icon_class: CSS class of the icon
        context: Extra tooltip context passed to the page
        sanitize: Escape ``label`` and ``alt_text``
        alt_text: Icon alt text

    Returns:
        Avatar markup
    """
    if sanitize:
        label = html.escape(label) if label else label
        alt_text = html.escape(alt_text) if alt_text else alt_text

    attributes = []
    if link:
        attributes.append(f"href='{link}'")
    if isinstance(tooltip, str) and tooltip:
        attributes.append(f"data-tooltip=\"{html.escape(tooltip, quote=True)}\"")
    elif tooltip is True:
        attributes.append(f"data-tooltip-resource='{resource}' data-tooltip-id='{id}'")
        if context:
            attributes.append(f"data-tooltip-context='{html.escape(context)}'")

    content = ""
    if icon_url:
        content += (
            f"<img loading='lazy' width='{icon_size}' height='{icon_size}' "
            f"src='{icon_url}' alt='{alt_text or ''}' class='{icon_class}'>"
        )
    if label:
        content += f"<span>{label}</span>" if icon_url else label

    tag = "a" if link else "span"
    opening = " ".join([tag, *attributes])
    return f"<span class='inline whitespace-nowrap'><{opening}>{content}</{tag}></span>"


def render_game_card(
    game: GameRecord,
    mastery: str | None = None,
    urls: UrlBuilder | None = None,
) -> str:
    """Render the tooltip card of a game."""
    urls = urls or UrlBuilder()
    game_name = render_game_title(html.escape(game.title))
    console_name = html.escape(game.console_name)

    card = "<div class='tooltip-body flex items-start' style='max-width: 400px'>"
    card += f"<img style='margin-right:5px' src='{urls.media_asset(game.icon_path)}' width='64' height='64' />"
    card += "<div>"
    card += f"<b>{game_name}</b><br>"
    card += console_name
    if mastery:
        card += f"<div>{mastery}</div>"
    card += "</div>"
    card += "</div>"
    return card


class GameCardRenderer:
    """Renders game cards, reading card data through a cache by game id."""

    def __init__(
        self,
        card_data: GameCardDataService,
        cache: CacheStore | None = None,
        urls: UrlBuilder | None = None,
    ) -> None:
        self.card_data = card_data
        self.cache: CacheStore = cache if cache is not None else ArrayCacheStore()
        self.urls = urls or UrlBuilder()

    def render(self, game: GameRecord | int | None, mastery: str | None = None) -> str:
        """Render a card from a record or an id.

        Returns ``"Error"`` without an id and an empty string when the game
        cannot be found.
        """
        game_id = game.id if isinstance(game, GameRecord) else game
        if not game_id:
            return CARD_ERROR_TEXT

        record = game if isinstance(game, GameRecord) else self.get_card_data(game_id)
        if record is None:
            log.debug("No card data for game", game_id=game_id)
            return ""

        return render_game_card(record, mastery=mastery, urls=self.urls)

    def get_card_data(self, game_id: int) -> GameRecord | None:
        return self.cache.remember_forever(
            f"game:{game_id}:card-data",
            lambda: self._fetch(game_id),
        )

    def _fetch(self, game_id: int) -> GameRecord | None:
        try:
            return self.card_data.get_by_id(game_id)
        except AppError as e:
            handle_error(e, operation="get_by_id", component="game_card", context={"game_id": game_id})
            return None


def game_avatar(
    game: GameRecord | int,
    label: bool | str | None = None,
    icon: bool | str | None = None,
    icon_size: int = 32,
    icon_class: str = "badgeimg",
    tooltip: bool | str = True,
    context: str | None = None,
    urls: UrlBuilder | None = None,
) -> str:
    """Render a game avatar.

    For a full record the label defaults to the rendered title followed by
    the console name, the icon to the game icon and the tooltip to the game
    card. ``False`` switches the label, icon or tooltip off.
    """
    urls = urls or UrlBuilder()
    title = None

    if isinstance(game, GameRecord):
        game_id = game.id

        if label is not False:
            title = game.title
            if game.console_name:
                title += f" ({game.console_name})"
            title = html.escape(title)
            label = render_game_title(title)

        if icon is None:
            icon = urls.media_asset(game.icon_path)

        if not isinstance(tooltip, str):
            tooltip = render_game_card(game, urls=urls) if tooltip is not False else False
    else:
        game_id = game

    return avatar(
        resource="game",
        id=game_id,
        label=label if isinstance(label, str) and (label or not icon) else None,
        link=urls.game(game_id),
        tooltip=tooltip,
        icon_url=icon if isinstance(icon, str) and (icon or not label) else None,
        icon_size=icon_size,
        icon_class=icon_class,
        context=context,
        sanitize=title is None,
        alt_text=title if title is not None else (label if isinstance(label, str) else None),
    )


def user_avatar(
    user_name: str,
    label: bool = True,
    icon: bool = True,
    icon_size: int = 32,
    urls: UrlBuilder | None = None,
) -> str:
    urls = urls or UrlBuilder()
    return avatar(
        resource="user",
        id=html.escape(user_name, quote=True),
        label=user_name if label else None,
        link=urls.user(user_name),
        tooltip=True,
        icon_url=urls.user_avatar_image(user_name) if icon else None,
        icon_size=icon_size,
        alt_text=user_name,
    )
