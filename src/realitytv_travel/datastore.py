"""Load the shows and locations collections with bounded retry.

``DataStore.load`` never raises for transport or decode problems: after
``MAX_ATTEMPTS`` tries it returns a failed ``LoadResult`` and the caller
renders an error state. ``AppState`` owns the per-collection lifecycle
(empty -> loading -> loaded | failed) for one page view.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import requests
from pydantic import BaseModel, ValidationError

from . import config
from .errors import DecodeFailure, NotFound, TransportFailure
from .models import Location, Show

logger = logging.getLogger(__name__)

_RECORD_ITEMS = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "name"],
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "name": {"type": "string"},
        },
    },
}

SHOWS_SCHEMA = {
    "type": "object",
    "required": ["shows"],
    "properties": {"shows": _RECORD_ITEMS},
}

LOCATIONS_SCHEMA = {
    "type": "object",
    "required": ["locations"],
    "properties": {"locations": _RECORD_ITEMS},
}


@dataclass(frozen=True)
class _CollectionSpec:
    key: str
    model: type[BaseModel]
    schema: dict[str, Any]


COLLECTIONS: dict[str, _CollectionSpec] = {
    config.SHOWS_FILE: _CollectionSpec("shows", Show, SHOWS_SCHEMA),
    config.LOCATIONS_FILE: _CollectionSpec("locations", Location, LOCATIONS_SCHEMA),
}


class Transport(ABC):
    """Fetches the raw bytes of a named data file."""

    @abstractmethod
    def fetch(self, name: str) -> bytes:
        """Return the file contents or raise ``TransportFailure``."""


class FileTransport(Transport):
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def fetch(self, name: str) -> bytes:
        path = self.root / name
        try:
            return path.read_bytes()
        except OSError as exc:
            raise TransportFailure(f"cannot read {path}: {exc}") from exc


class HttpTransport(Transport):
    def __init__(
        self,
        base_url: str,
        *,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = config.HTTP_TIMEOUT if timeout is None else timeout

    def fetch(self, name: str) -> bytes:
        url = f"{self.base_url}/{name}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportFailure(f"GET {url} failed: {exc}") from exc
        if not response.ok:
            raise TransportFailure(f"GET {url} returned {response.status_code}")
        return response.content


def make_transport(source: str | Path) -> Transport:
    """Pick an HTTP transport for URLs and a file transport otherwise."""
    text = str(source)
    if text.startswith(("http://", "https://")):
        return HttpTransport(text)
    return FileTransport(text)


@dataclass(frozen=True)
class LoadResult:
    name: str
    records: list[Any] | None
    error_stage: str | None = None
    error_detail: str | None = None
    attempts_used: int = 0

    @property
    def ok(self) -> bool:
        return self.records is not None


def decode_collection(name: str, raw: bytes) -> list[Any]:
    """Parse and validate the raw contents of a collection file."""
    spec = COLLECTIONS.get(name)
    if spec is None:
        raise DecodeFailure(f"unknown collection {name!r}")
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise DecodeFailure(f"{name} is not valid JSON: {exc}") from exc
    try:
        jsonschema.validate(instance=payload, schema=spec.schema)
    except jsonschema.ValidationError as exc:
        raise DecodeFailure(f"{name} failed schema validation: {exc.message}") from exc
    records = []
    for item in payload[spec.key]:
        try:
            records.append(spec.model.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping invalid record %r in %s: %s", item.get("id"), name, exc)
    return records


class DataStore:
    """Fetch-and-cache front for the data directory."""

    def __init__(
        self,
        transport: Transport,
        *,
        max_attempts: int | None = None,
        backoff_unit: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.transport = transport
        if max_attempts is None:
            max_attempts = config.MAX_ATTEMPTS
        self.max_attempts = max(1, max_attempts)
        self.backoff_unit = config.BACKOFF_UNIT if backoff_unit is None else backoff_unit
        self._sleep = sleep
        self._cache: dict[str, list[Any]] = {}

    def load(self, name: str) -> LoadResult:
        cached = self._cache.get(name)
        if cached is not None:
            logger.debug("Using cached %s (%d records)", name, len(cached))
            return LoadResult(name=name, records=cached)

        if name not in COLLECTIONS:
            logger.error("Refusing to load unknown collection %s", name)
            return LoadResult(
                name=name,
                records=None,
                error_stage="decode",
                error_detail=f"unknown collection {name!r}",
            )

        stage = "transport"
        detail = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                records = decode_collection(name, self.transport.fetch(name))
            except TransportFailure as exc:
                stage, detail = "transport", str(exc)
            except DecodeFailure as exc:
                stage, detail = "decode", str(exc)
            else:
                self._cache[name] = records
                logger.info("Loaded %s: %d records", name, len(records))
                return LoadResult(name=name, records=records, attempts_used=attempt)

            logger.warning(
                "Loading %s failed (attempt %d/%d): %s",
                name,
                attempt,
                self.max_attempts,
                detail,
            )
            if attempt < self.max_attempts:
                self._sleep(attempt * self.backoff_unit)

        logger.error("Giving up on %s after %d attempts", name, self.max_attempts)
        return LoadResult(
            name=name,
            records=None,
            error_stage=stage,
            error_detail=detail,
            attempts_used=self.max_attempts,
        )

    def invalidate(self, name: str) -> None:
        self._cache.pop(name, None)


STATUS_EMPTY = "empty"
STATUS_LOADING = "loading"
STATUS_LOADED = "loaded"
STATUS_FAILED = "failed"


@dataclass
class CollectionState:
    name: str
    status: str = STATUS_EMPTY
    records: list[Any] = field(default_factory=list)
    error: str | None = None

    @property
    def loaded(self) -> bool:
        return self.status == STATUS_LOADED

    @property
    def failed(self) -> bool:
        return self.status == STATUS_FAILED


class AppState:
    """Per-page-view application state holding both collections."""

    def __init__(self, store: DataStore) -> None:
        self.store = store
        self.shows = CollectionState(config.SHOWS_FILE)
        self.locations = CollectionState(config.LOCATIONS_FILE)

    def _ensure(self, state: CollectionState) -> CollectionState:
        if state.status != STATUS_EMPTY:
            return state
        state.status = STATUS_LOADING
        result = self.store.load(state.name)
        if result.ok:
            state.records = list(result.records or [])
            state.error = None
            state.status = STATUS_LOADED
        else:
            state.records = []
            state.error = result.error_detail
            state.status = STATUS_FAILED
        return state

    def ensure_shows(self) -> CollectionState:
        return self._ensure(self.shows)

    def ensure_locations(self) -> CollectionState:
        return self._ensure(self.locations)

    def retry(self, name: str) -> CollectionState:
        """Reset a failed collection and load it again."""
        state = self.shows if name == config.SHOWS_FILE else self.locations
        if state.status == STATUS_FAILED:
            state.status = STATUS_EMPTY
            self.store.invalidate(name)
        return self._ensure(state)

    @property
    def all_shows(self) -> list[Show]:
        return self.shows.records

    @property
    def all_locations(self) -> list[Location]:
        return self.locations.records

    def show_by_id(self, show_id: str | None) -> Show | None:
        for show in self.shows.records:
            if show.id == show_id:
                return show
        return None

    def location_by_id(self, location_id: str | None) -> Location | None:
        for location in self.locations.records:
            if location.id == location_id:
                return location
        return None

    def require_show(self, show_id: str | None) -> Show:
        show = self.show_by_id(show_id)
        if show is None:
            raise NotFound("show", show_id)
        return show

    def require_location(self, location_id: str | None) -> Location:
        location = self.location_by_id(location_id)
        if location is None:
            raise NotFound("location", location_id)
        return location
