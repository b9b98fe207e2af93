"""HTML fragment renderers for game pages."""

from .alts import render_game_alts
from .avatar import GameCardRenderer, avatar, game_avatar, render_game_card, user_avatar
from .breadcrumb import BreadcrumbBuilder, render_game_breadcrumb
from .forum import render_link_to_game_forum, render_recent_game_players
from .hashes import LinkedHashesRenderer
from .metadata import merge_attribute, parse_attribute_list, render_metadata_table_row
from .progress import compute_progress, render_completion_icon, render_game_progress
from .title import render_game_title, split_subset, strip_title_tags

__all__ = [
    "BreadcrumbBuilder",
    "GameCardRenderer",
    "LinkedHashesRenderer",
    "avatar",
    "compute_progress",
    "game_avatar",
    "merge_attribute",
    "parse_attribute_list",
    "render_completion_icon",
    "render_game_alts",
    "render_game_breadcrumb",
    "render_game_card",
    "render_game_progress",
    "render_game_title",
    "render_link_to_game_forum",
    "render_metadata_table_row",
    "render_recent_game_players",
    "split_subset",
    "strip_title_tags",
    "user_avatar",
]
