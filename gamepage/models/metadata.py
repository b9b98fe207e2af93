"""Metadata row data models."""

import html
from dataclasses import dataclass


@dataclass(frozen=True)
class MetadataValue:
    """One value of a metadata row (genre, developer, hack, ...).

    Values merged from a hub carry the hub's target ``href`` and render as a
    link. Plain values render escaped.
    """
    text: str
    href: str | None = None

    @property
    def linked(self) -> bool:
        return self.href is not None

    @property
    def html(self) -> str:
        if self.href is None:
            return html.escape(self.text)
        return f"<a href='{self.href}'>{html.escape(self.text)}</a>"
