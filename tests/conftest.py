from __future__ import annotations

import copy
import json
import sys
from pathlib import Path

import pytest

SRC_PATH = Path(__file__).resolve().parents[1] / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))

from realitytv_travel.datastore import AppState, DataStore, Transport  # noqa: E402
from realitytv_travel.errors import TransportFailure  # noqa: E402
from realitytv_travel.models import Location, Show  # noqa: E402

SHOWS_DATA = {
    "shows": [
        {
            "id": "the-bachelor",
            "name": "The Bachelor",
            "network": "ABC",
            "seasons": 28,
            "status": "active",
            "description": "One bachelor and a mansion full of contestants.",
            "tagline": "Will you accept this rose?",
            "viewerRating": 4.2,
            "bestSeasons": [14, 23],
            "faqs": [{"question": "Can you visit?", "answer": "Yes, for events."}],
            "destinations": ["bachelor-mansion", "playa-escondida-resort"],
        },
        {
            "id": "bachelor-in-paradise",
            "name": "Bachelor in Paradise",
            "network": "ABC",
            "seasons": 9,
            "status": "active",
            "description": "Former contestants head to the beach.",
            "viewerRating": 3.8,
            "destinations": ["playa-escondida-resort"],
        },
        {
            "id": "love-is-blind",
            "name": "Love Is Blind",
            "network": "Netflix",
            "seasons": 7,
            "status": "active",
            "description": "Singles date in pods.",
            "viewerRating": 4.0,
            "destinations": ["el-dorado-maroma"],
        },
        {
            "id": "too-hot-to-handle",
            "name": "Too Hot to Handle",
            "network": "Netflix",
            "seasons": 6,
            "status": "ended",
            "description": "No touching allowed.",
            "destinations": [],
        },
    ]
}

LOCATIONS_DATA = {
    "locations": [
        {
            "id": "bachelor-mansion",
            "name": "Villa de la Vina",
            "city": "Agoura Hills",
            "country": "USA",
            "region": "North America",
            "category": "mansion",
            "address": "Agoura Hills, California",
            "priceRange": {"min": 5000, "currency": "USD", "unit": "night"},
            "bookable": True,
            "bookingUrl": "https://example.com/book",
            "amenities": ["pool", "home-theater"],
            "highlights": ["Staircase", "Driveway", "Fire pit"],
            "shows": ["the-bachelor"],
            "featuredSeasons": [{"show": "the-bachelor", "seasons": [1, 2]}],
        },
        {
            "id": "playa-escondida-resort",
            "name": "Playa Escondida",
            "city": "Sayulita",
            "country": "Mexico",
            "region": "Mexico",
            "category": "resort",
            "address": "Sayulita, Nayarit",
            "tagline": "Hidden beach resort",
            "priceRange": {"min": 400, "currency": "USD", "unit": "night"},
            "bookable": True,
            "shows": ["bachelor-in-paradise", "the-bachelor", "love-is-blind"],
        },
        {
            "id": "el-dorado-maroma",
            "name": "El Dorado Maroma",
            "city": "Playa del Carmen",
            "country": "Mexico",
            "region": "Caribbean",
            "category": "resort",
            "address": "Riviera Maya",
            "tagline": "Adults-only RESORT on the beach",
            "priceRange": {"min": 650, "currency": "USD", "unit": "night"},
            "shows": ["love-is-blind"],
        },
        {
            "id": "turks-caicos-villa",
            "name": "Grace Bay Villa",
            "city": "Providenciales",
            "country": "Turks and Caicos",
            "region": "Caribbean",
            "category": "villa",
            "address": "Grace Bay",
            "shows": ["ghost-show-id"],
        },
        {
            "id": "nassau-resort-club",
            "name": "Nassau Resort Club",
            "city": "Nassau",
            "country": "Bahamas",
            "region": "Caribbean",
            "category": "resort",
            "address": "Cable Beach",
            "priceRange": {"min": 300, "currency": "USD", "unit": "night"},
            "shows": [],
        },
    ]
}


class DictTransport(Transport):
    """Serves payloads from memory and counts fetches per name."""

    def __init__(self, payloads: dict[str, object]) -> None:
        self.payloads = payloads
        self.calls: dict[str, int] = {}

    def fetch(self, name: str) -> bytes:
        self.calls[name] = self.calls.get(name, 0) + 1
        payload = self.payloads.get(name)
        if payload is None:
            raise TransportFailure(f"{name} returned 404")
        if isinstance(payload, bytes):
            return payload
        return json.dumps(payload).encode("utf-8")


@pytest.fixture
def shows_data() -> dict:
    return copy.deepcopy(SHOWS_DATA)


@pytest.fixture
def locations_data() -> dict:
    return copy.deepcopy(LOCATIONS_DATA)


@pytest.fixture
def shows(shows_data) -> list[Show]:
    return [Show.model_validate(item) for item in shows_data["shows"]]


@pytest.fixture
def locations(locations_data) -> list[Location]:
    return [Location.model_validate(item) for item in locations_data["locations"]]


@pytest.fixture
def transport(shows_data, locations_data) -> DictTransport:
    return DictTransport({"shows.json": shows_data, "locations.json": locations_data})


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def app_state(transport, sleeps) -> AppState:
    return AppState(DataStore(transport, sleep=sleeps.append))
