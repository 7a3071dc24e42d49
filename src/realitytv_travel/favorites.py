"""Wishlist of favorited location ids, persisted through a key-value storage.

The stored value is a JSON array of ids under a single key. Anything else
found under that key (corrupt JSON, a foreign shape from an older schema)
reads as an empty wishlist.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from . import config
from .errors import MalformedPersisted

logger = logging.getLogger(__name__)

ADDED_MESSAGE = "Added to wishlist"
REMOVED_MESSAGE = "Removed from wishlist"


class KeyValueStorage(ABC):
    """The slice of browser local storage the wishlist needs."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        pass


class MemoryStorage(KeyValueStorage):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """String values kept in one JSON object on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.debug("Ignoring unreadable storage file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


@dataclass(frozen=True)
class FavoriteChange:
    location_id: str
    favorite: bool
    count: int
    message: str


def decode_ids(raw: str | None) -> list[str]:
    """Parse the persisted value, raising ``MalformedPersisted`` on any shape problem."""
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedPersisted(f"not JSON: {exc}") from exc
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise MalformedPersisted(f"expected a list of ids, got {type(data).__name__}")
    return data


class FavoritesStore:
    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = config.FAVORITES_KEY,
    ) -> None:
        self.storage = storage
        self.key = key
        self._listeners: list[Callable[[FavoriteChange], None]] = []

    def subscribe(self, listener: Callable[[FavoriteChange], None]) -> None:
        """Register a callback for badge-count and notification updates."""
        self._listeners.append(listener)

    def _load(self) -> list[str]:
        try:
            ids = decode_ids(self.storage.get(self.key))
        except MalformedPersisted as exc:
            logger.debug("Resetting wishlist stored under %s: %s", self.key, exc)
            return []
        # keep first occurrence order, drop duplicates
        return list(dict.fromkeys(ids))

    def get(self) -> set[str]:
        return set(self._load())

    def is_favorite(self, location_id: str) -> bool:
        return location_id in self._load()

    def count(self) -> int:
        return len(self._load())

    def toggle(self, location_id: str) -> FavoriteChange:
        ids = self._load()
        if location_id in ids:
            ids.remove(location_id)
            favorite = False
        else:
            ids.append(location_id)
            favorite = True
        self.storage.set(self.key, json.dumps(ids))

        change = FavoriteChange(
            location_id=location_id,
            favorite=favorite,
            count=len(ids),
            message=ADDED_MESSAGE if favorite else REMOVED_MESSAGE,
        )
        for listener in self._listeners:
            listener(change)
        return change

    def clear(self) -> None:
        self.storage.remove(self.key)
