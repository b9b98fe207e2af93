"""Cache stores for read-through lookups."""

from collections.abc import Callable
from typing import Any, Protocol, TypeVar

import structlog

log = structlog.stdlib.get_logger()

T = TypeVar("T")


class CacheStore(Protocol):
    """Key/value store used to memoize lookups."""

    def remember_forever(self, key: str, resolver: Callable[[], T]) -> T: ...

    def forget(self, key: str) -> bool: ...

    def flush(self) -> None: ...


class ArrayCacheStore:
    """In-memory store living as long as the object (one request or process).

    Empty results (``None``, ``[]``, ``{}``) are not stored, so a later call
    retries the lookup.
    """

    def __init__(self) -> None:
        self._items: dict[str, Any] = {}
        self.hits: int = 0
        self.misses: int = 0

    def remember_forever(self, key: str, resolver: Callable[[], T]) -> T:
        if key in self._items:
            self.hits += 1
            return self._items[key]

        self.misses += 1
        value = resolver()
        if value:
            self._items[key] = value
        log.debug("Cache miss", key=key, stored=bool(value))
        return value

    def forget(self, key: str) -> bool:
        return self._items.pop(key, None) is not None

    def flush(self) -> None:
        self._items.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
