"""Game forum link and recent players components."""

import html
from collections.abc import Callable, Sequence

from ..models import Permissions, PlayerActivity
from ..services.urls import UrlBuilder
from .avatar import user_avatar

FORUM_ICON = "<span class='icon icon-md ml-1 mr-3'>💬</span>"


def render_link_to_game_forum(
    game_title: str,
    game_id: int,
    forum_topic_id: int | None,
    permissions: Permissions = Permissions.UNREGISTERED,
    topic_exists: Callable[[int], bool] | None = None,
    csrf_field: str = "",
    urls: UrlBuilder | None = None,
) -> str:
    """Render the official forum topic button.

    Without an existing topic, developers get a form to create one and
    everybody else gets nothing.

    Args:
        game_title: Game title, used in the confirmation prompt
        game_id: Game id posted by the create form
        forum_topic_id: Official topic id, if any
        permissions: Permissions of the viewing user
        topic_exists: Checks that a topic id still resolves; assumed true when omitted
        csrf_field: Hidden CSRF input markup supplied by the web framework
        urls: URL builder
    """
    urls = urls or UrlBuilder()

    if forum_topic_id and (topic_exists is None or topic_exists(forum_topic_id)):
        return (
            f"<a class='btn py-2 mb-2 block' href='{urls.forum_topic(forum_topic_id)}'>"
            f"{FORUM_ICON}Official Forum Topic</a>"
        )

    if permissions < Permissions.DEVELOPER:
        return ""

    title = html.escape(game_title, quote=True)
    return (
        f"<form action='{urls.create_forum_topic()}' method='post' "
        f"onsubmit='return confirm(\"Are you sure you want to create the official forum topic for {title}?\")'>"
        f"{csrf_field}"
        f"<input type='hidden' name='game' value='{game_id}'>"
        f"<button class='btn btn-link py-2 mb-2 w-full'>{FORUM_ICON}Create Forum Topic</button>"
        "</form>"
    )


def render_recent_game_players(
    recent_players: Sequence[PlayerActivity],
    urls: UrlBuilder | None = None,
) -> str:
    urls = urls or UrlBuilder()

    component = "<div class='component'>Recent Players:"
    component += "<table class='table-highlight'><tbody>"
    component += "<tr><th></th><th>User</th><th>When</th><th class='w-full'>Activity</th></tr>"
    for player in recent_players:
        component += "<tr>"
        component += f"<td>{user_avatar(player.user_name, label=False, urls=urls)}</td>"
        component += f"<td>{user_avatar(player.user_name, icon=False, urls=urls)}</td>"
        component += f"<td class='whitespace-nowrap'>{html.escape(player.date)}</td>"
        component += f"<td>{html.escape(player.activity)}</td>"
        component += "</tr>"
    component += "</tbody></table>"
    component += "</div>"
    return component
