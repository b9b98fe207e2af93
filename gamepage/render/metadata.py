"""Game metadata rows (genre, developer, publisher, hacks, ...).

A metadata field is a comma separated string typed in by developers. Hubs
cross-reference the same values (``[Genre - Platformer]``) and link to a hub
page, so matching values are turned into links and hub-only values are
appended.
"""

import html
from collections.abc import Iterable, Sequence

from ..models import HubRecord, MetadataValue
from ..services.urls import UrlBuilder

HACKS_PREFIX = "Hacks - "
HACK_PREFIX = "Hack - "


def parse_attribute_list(raw: str | None) -> list[str]:
    """Split a comma separated field into trimmed values, keeping their order."""
    if not raw:
        return []
    return [value.strip() for value in raw.split(",")]


def _find_unlinked(values: list[MetadataValue], text: str) -> int | None:
    for index, value in enumerate(values):
        if not value.linked and value.text == text:
            return index
    return None


def _hub_values(candidate: str, hub_title: str) -> list[str] | None:
    """Values a hub title can match for a label, in matching order.

    Returns None when the hub belongs to another category. The last value is
    the display text.
    """
    if candidate.startswith("Hack"):
        # Hack hubs are titled "[Hacks - XXX]" and display as "Hack - XXX"
        if not hub_title.startswith((f"[{candidate} - ", f"[{candidate}s - ")):
            return None
        value = hub_title[1:-1]
        normalized = HACK_PREFIX + value[len(HACKS_PREFIX):] if value.startswith(HACKS_PREFIX) else value
        return [value, normalized]

    prefix = f"[{candidate} - "
    if not hub_title.startswith(prefix):
        return None
    return [hub_title[len(prefix):-1]]


def merge_attribute(
    label: str,
    raw_values: Sequence[str],
    hubs: Iterable[HubRecord],
    alt_labels: Sequence[str] = (),
    urls: UrlBuilder | None = None,
) -> list[MetadataValue]:
    """Merge hub links into a metadata value list.

    The label and then each alternative label are processed in order. A hub
    value equal to a not yet linked entry replaces that entry in place; any
    other hub value is appended as a new link.

    Args:
        label: Metadata label, also the hub category (``Genre``)
        raw_values: Values parsed from the metadata field
        hubs: Hubs the game belongs to
        alt_labels: Further hub categories merged into the same row
        urls: URL builder for hub links

    Returns:
        Merged values; plain ones escape on render, linked ones are ready markup
    """
    urls = urls or UrlBuilder()
    hubs = list(hubs)
    values = [MetadataValue(text) for text in raw_values]

    for candidate in (label, *alt_labels):
        for hub in hubs:
            forms = _hub_values(candidate, hub.title)
            if forms is None:
                continue

            index = None
            for form in forms:
                index = _find_unlinked(values, form)
                if index is not None:
                    break

            link = MetadataValue(forms[-1], href=urls.game(hub.linked_game_id))
            if index is not None:
                values[index] = link
            else:
                values.append(link)

    return values


def render_metadata_table_row(
    label: str,
    raw_value: str | None,
    hubs: Iterable[HubRecord] | None = None,
    alt_labels: Sequence[str] = (),
    urls: UrlBuilder | None = None,
) -> str:
    """Render a ``<tr>`` for a metadata field, or nothing when it has no values."""
    values = merge_attribute(label, parse_attribute_list(raw_value), hubs or [], alt_labels, urls)
    if not values:
        return ""

    joined = ", ".join(value.html for value in values)
    return f"<tr><td>{html.escape(label)}</td><td><b>{joined}</b></td></tr>"
