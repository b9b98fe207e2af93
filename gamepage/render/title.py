"""Game title rendering.

Titles carry curation markers: any number of ``~Category~`` tags
(``~Hack~ Super Mario``) and at most one ``[Subset - Name]`` marker. They are
pulled out of the text and, optionally, appended as styled tag spans.

The output is raw markup. Nothing here escapes: callers escape the outer
title first, and tag text comes from curated game data.
"""

import re

TAG_PATTERN = re.compile(r"~([^~]+)~")
SUBSET_PATTERN = re.compile(r"\[Subset - (.+)\]")
SUBSET_SPLIT_PATTERN = re.compile(r"(.+)(\[Subset - .+\])")


def tag_span(category: str) -> str:
    return f"<span class='tag'><span>{category}</span></span>"


def subset_span(name: str) -> str:
    return (
        "<span class='tag'>"
        "<span class='tag-label'>Subset</span>"
        "<span class='tag-arrow'></span>"
        f"<span>{name}</span>"
        "</span>"
    )


def _pull(html: str, text: str, append: str) -> str:
    """Drop the first occurrence of ``text`` and append ``append``."""
    return (html.replace(text, "", 1) + append).strip()


def render_game_title(title: str | None = None, tags: bool = True) -> str:
    """Render a game title, moving its tag and subset markers to the end.

    Both marker scans read the input title; removals apply to the working
    copy, one occurrence per match. Unbalanced markers are left as they are.

    Args:
        title: Raw title, already escaped by the caller
        tags: Append tag spans when True, drop the markers when False

    Returns:
        Title markup
    """
    title = title or ""
    html = title

    for match in TAG_PATTERN.finditer(title):
        html = _pull(html, match.group(0), f" {tag_span(match.group(1))}" if tags else "")

    subset = SUBSET_PATTERN.search(title)
    if subset:
        html = _pull(html, subset.group(0), f" {subset_span(subset.group(1))}" if tags else "")

    return html


def strip_title_tags(title: str) -> str:
    """Plain title text without any markers."""
    return render_game_title(title, tags=False)


def split_subset(title: str) -> tuple[str, str | None]:
    """Split a title into its main part and its ``[Subset - Name]`` marker.

    >>> split_subset("Pokemon Red [Subset - Bonus]")
    ('Pokemon Red', '[Subset - Bonus]')
    >>> split_subset("Pokemon Red")
    ('Pokemon Red', None)
    """
    match = SUBSET_SPLIT_PATTERN.search(title)
    if not match:
        return title, None
    return match.group(1).strip(), match.group(2)
