"""Game data lookups backed by the site's public JSON web API."""

from typing import Any

import httpx
import structlog

from ..models import AppConfig, GameRecord, HashRecord
from .cache import ArrayCacheStore, CacheStore
from .errors import DataSourceError, NetworkError
from .http_client import HttpClientService

log = structlog.stdlib.get_logger()


class WebApiRepository:
    """Reads game card data, hashes and per-console title indexes over HTTP.

    Every call is authenticated with the ``z`` (username) and ``y`` (API key)
    query parameters. Title lookups load the console's whole game list once
    and keep it in the cache store.
    """

    def __init__(
        self,
        http_client: HttpClientService,
        config: AppConfig,
        cache: CacheStore | None = None,
    ) -> None:
        self.http_client = http_client
        self.api_base_url = config.api_base_url.rstrip("/")
        self._username = config.api_username or ""
        self._api_key = config.api_key or ""
        self.cache: CacheStore = cache if cache is not None else ArrayCacheStore()

    def _call(self, endpoint: str, **params: Any) -> Any:
        url = f"{self.api_base_url}/{endpoint}"
        query = {"z": self._username, "y": self._api_key}
        query.update({key: str(value) for key, value in params.items()})

        try:
            return self.http_client.get_json(url, params=query)
        except httpx.HTTPStatusError as e:
            raise NetworkError(
                f"The web API rejected the {endpoint} request.",
                original_error=e,
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise NetworkError(
                f"Could not reach the web API for {endpoint}.",
                original_error=e,
                url=url,
            ) from e
        except ValueError as e:
            raise DataSourceError(
                f"The web API returned an unreadable {endpoint} response.",
                source=url,
                original_error=e,
            ) from e

    def _malformed(self, endpoint: str, error: Exception, game_id: int | None = None) -> DataSourceError:
        return DataSourceError(
            f"The web API returned a malformed {endpoint} response.",
            source=f"{self.api_base_url}/{endpoint}",
            game_id=game_id,
            original_error=error,
        )

    def get_by_id(self, game_id: int) -> GameRecord | None:
        data = self._call("API_GetGame.php", i=game_id)
        if not isinstance(data, dict) or not data.get("Title"):
            log.info("Game not found", game_id=game_id)
            return None
        # The payload does not echo the id back
        return GameRecord.from_row({**data, "ID": game_id})

    def get_by_game_id(self, game_id: int) -> list[HashRecord]:
        data = self._call("API_GetGameHashes.php", i=game_id)
        results = data.get("Results") if isinstance(data, dict) else None
        try:
            return [HashRecord.from_row(row) for row in results or []]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise self._malformed("API_GetGameHashes.php", e, game_id=game_id) from e

    def find_id_by_title(self, title: str, console_id: int) -> int | None:
        index = self.cache.remember_forever(
            f"console:{console_id}:title-index",
            lambda: self._load_title_index(console_id),
        )
        return index.get(title)

    def _load_title_index(self, console_id: int) -> dict[str, int]:
        data = self._call("API_GetGameList.php", i=console_id)
        index: dict[str, int] = {}
        try:
            for row in data if isinstance(data, list) else []:
                title = row.get("Title")
                game_id = row.get("ID")
                if title is None or game_id is None:
                    continue
                index.setdefault(title, int(game_id))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise self._malformed("API_GetGameList.php", e) from e
        log.debug("Console title index loaded", console_id=console_id, titles=len(index))
        return index
