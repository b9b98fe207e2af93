"""Similar games table."""

from collections.abc import Sequence

from ..models import GameAlt, GameRecord
from ..services.urls import UrlBuilder
from .avatar import game_avatar


def render_game_alts(
    game_alts: Sequence[GameAlt],
    header_text: str | None = None,
    urls: UrlBuilder | None = None,
) -> str:
    """Render the related games component.

    Hub entries have no console or points; their title spans both columns.
    """
    urls = urls or UrlBuilder()

    component = "<div class='component gamealts'>"
    if header_text:
        component += f"<h2 class='text-h3'>{header_text}</h2>"
    component += "<table class='table-highlight'><tbody>"

    for alt in game_alts:
        is_fully_featured = not alt.is_hub
        game = GameRecord(
            id=alt.id,
            title=alt.title,
            console_id=0,
            console_name=(alt.console_name or "") if is_fully_featured else "",
            icon_path=alt.icon_path,
        )

        component += "<tr>"
        component += f"<td>{game_avatar(game, label=False, urls=urls)}</td>"

        colspan = "" if is_fully_featured else 'colspan="2"'
        component += f"<td style='width: 100%' {colspan}>"
        component += game_avatar(game, icon=False, urls=urls)
        component += "</td>"

        if is_fully_featured:
            component += (
                "<td>"
                f"<span class='whitespace-nowrap'>{alt.points} points</span>"
                f"<span class='TrueRatio'> ({alt.total_true_points})</span>"
                "</td>"
            )

        component += "</tr>"

    component += "</tbody></table>"
    component += "</div>"
    return component
