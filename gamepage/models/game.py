"""Game-related data models."""

from dataclasses import dataclass
from typing import Any


def _first(row: dict[str, Any], *keys: str) -> Any:
    """Return the first non-None value among the given key aliases."""
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class GameRecord:
    """Core game data structure."""
    id: int
    title: str
    console_id: int
    console_name: str
    icon_path: str | None = None
    forum_topic_id: int | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GameRecord":
        """Build a record from a database row or API payload.

        Rows arrive with several naming conventions (``GameID``/``ID``,
        ``GameTitle``/``Title``, ``Console``/``ConsoleName``,
        ``GameIcon``/``ImageIcon``). They are resolved here once so the
        renderers only ever see one shape.

        Raises:
            KeyError: If the row carries no game id
        """
        game_id = _optional_int(_first(row, "GameID", "ID", "id"))
        if game_id is None:
            raise KeyError("GameID")

        return cls(
            id=game_id,
            title=str(_first(row, "GameTitle", "Title", "title") or ""),
            console_id=_optional_int(_first(row, "ConsoleID", "console_id")) or 0,
            console_name=str(_first(row, "Console", "ConsoleName", "console_name") or ""),
            icon_path=_first(row, "GameIcon", "ImageIcon", "icon_path"),
            forum_topic_id=_optional_int(_first(row, "ForumTopicID", "forum_topic_id")),
        )


@dataclass(frozen=True)
class HashRecord:
    """A supported game file hash."""
    hash: str
    name: str | None = None
    labels: tuple[str, ...] = ()
    linked_user_name: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "HashRecord":
        raw_labels = _first(row, "Labels", "labels")
        if isinstance(raw_labels, str):
            labels = tuple(label for label in raw_labels.split(",") if label)
        elif raw_labels:
            labels = tuple(str(label) for label in raw_labels if label)
        else:
            labels = ()

        return cls(
            hash=str(_first(row, "Hash", "MD5", "hash") or ""),
            name=_first(row, "Name", "name") or None,
            labels=labels,
            linked_user_name=_first(row, "User", "linked_user_name") or None,
        )


@dataclass(frozen=True)
class HubRecord:
    """Cross-reference hub, titled ``[Category - Value]``."""
    title: str
    linked_game_id: int

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "HubRecord":
        return cls(
            title=str(_first(row, "Title", "title") or ""),
            linked_game_id=int(_first(row, "gameIDAlt", "GameID", "linked_game_id")),
        )


@dataclass(frozen=True)
class GameAlt:
    """A related game (or hub) shown in the similar games table."""
    id: int
    title: str
    icon_path: str | None
    console_name: str | None
    points: int = 0
    total_true_points: int = 0

    @property
    def is_hub(self) -> bool:
        return self.console_name == "Hubs"

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GameAlt":
        return cls(
            id=int(_first(row, "gameIDAlt", "GameID", "ID", "id")),
            title=str(_first(row, "Title", "title") or ""),
            icon_path=_first(row, "ImageIcon", "icon_path"),
            console_name=_first(row, "ConsoleName", "console_name"),
            points=_optional_int(_first(row, "Points", "points")) or 0,
            total_true_points=_optional_int(_first(row, "TotalTruePoints", "total_true_points")) or 0,
        )


@dataclass(frozen=True)
class PlayerActivity:
    """Recent activity of a player on a game."""
    user_name: str
    date: str
    activity: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "PlayerActivity":
        return cls(
            user_name=str(_first(row, "User", "user_name") or ""),
            date=str(_first(row, "Date", "date") or ""),
            activity=str(_first(row, "Activity", "activity") or ""),
        )
