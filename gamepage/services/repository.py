"""Game data lookups used by the renderers.

The renderers only depend on the small protocols below. Two data sources
implement all of them: ``CatalogRepository`` (in-memory or a JSON catalog
file) and ``WebApiRepository`` (the site's public JSON web API, see
``web_api``).
"""

import json
from pathlib import Path
from typing import Any, Protocol

import structlog

from ..models import GameAlt, GameRecord, HashRecord, HubRecord, PlayerActivity
from .errors import DataSourceError

log = structlog.stdlib.get_logger()


class GameLookupService(Protocol):
    def find_id_by_title(self, title: str, console_id: int) -> int | None:
        """Exact-title lookup scoped to one console."""
        ...


class GameCardDataService(Protocol):
    def get_by_id(self, game_id: int) -> GameRecord | None: ...


class HashListService(Protocol):
    def get_by_game_id(self, game_id: int) -> list[HashRecord]: ...


class CatalogRepository:
    """Game data held in memory, optionally loaded from a JSON catalog file.

    Catalog layout::

        {
          "games": [{"ID": 1, "Title": "...", "ConsoleID": 7, "ConsoleName": "NES", ...}],
          "hashes": {"1": [{"Hash": "...", "Name": "...", "Labels": "nointro", "User": "..."}]},
          "hubs": {"1": [{"Title": "[Genre - Platformer]", "gameIDAlt": 5}]},
          "alts": {"1": [{"gameIDAlt": 2, "Title": "...", "ConsoleName": "NES", ...}]},
          "recent_players": {"1": [{"User": "...", "Date": "...", "Activity": "..."}]}
        }
    """

    def __init__(
        self,
        games: list[GameRecord] | None = None,
        hashes: dict[int, list[HashRecord]] | None = None,
        hubs: dict[int, list[HubRecord]] | None = None,
        alts: dict[int, list[GameAlt]] | None = None,
        recent_players: dict[int, list[PlayerActivity]] | None = None,
        source: str = "memory",
    ) -> None:
        self.source = source
        self._games: dict[int, GameRecord] = {}
        self._titles: dict[tuple[str, int], int] = {}
        for game in games or []:
            self.add_game(game)
        self._hashes: dict[int, list[HashRecord]] = dict(hashes or {})
        self._hubs: dict[int, list[HubRecord]] = dict(hubs or {})
        self._alts: dict[int, list[GameAlt]] = dict(alts or {})
        self._recent_players: dict[int, list[PlayerActivity]] = dict(recent_players or {})

    @classmethod
    def from_file(cls, path: Path) -> "CatalogRepository":
        """Load a JSON catalog file.

        Raises:
            DataSourceError: If the file is missing, unreadable or malformed
        """
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DataSourceError(
                "Could not read the game catalog file.",
                source=str(path),
                original_error=e,
            ) from e

        try:
            repository = cls.from_dict(data, source=str(path))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DataSourceError(
                "The game catalog file is malformed.",
                source=str(path),
                original_error=e,
            ) from e

        log.info("Game catalog loaded", path=str(path), games=len(repository))
        return repository

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "memory") -> "CatalogRepository":
        def _keyed(name: str, factory: Any) -> dict[int, list[Any]]:
            return {
                int(game_id): [factory(row) for row in rows]
                for game_id, rows in (data.get(name) or {}).items()
            }

        return cls(
            games=[GameRecord.from_row(row) for row in data.get("games") or []],
            hashes=_keyed("hashes", HashRecord.from_row),
            hubs=_keyed("hubs", HubRecord.from_row),
            alts=_keyed("alts", GameAlt.from_row),
            recent_players=_keyed("recent_players", PlayerActivity.from_row),
            source=source,
        )

    def add_game(self, game: GameRecord) -> None:
        self._games[game.id] = game
        # First game registered under a title owns it
        self._titles.setdefault((game.title, game.console_id), game.id)

    def find_id_by_title(self, title: str, console_id: int) -> int | None:
        return self._titles.get((title, console_id))

    def get_by_id(self, game_id: int) -> GameRecord | None:
        return self._games.get(game_id)

    def get_by_game_id(self, game_id: int) -> list[HashRecord]:
        return list(self._hashes.get(game_id, []))

    def get_hubs(self, game_id: int) -> list[HubRecord]:
        return list(self._hubs.get(game_id, []))

    def get_alts(self, game_id: int) -> list[GameAlt]:
        return list(self._alts.get(game_id, []))

    def get_recent_players(self, game_id: int) -> list[PlayerActivity]:
        return list(self._recent_players.get(game_id, []))

    def __len__(self) -> int:
        return len(self._games)
