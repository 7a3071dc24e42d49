"""Presentation lookup tables keyed by record ids and enum-like fields.

Each table carries its own default so a missing key never breaks
rendering. ``check_tables`` compares the tables with a loaded snapshot and
logs keys that drifted apart from the data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from .models import Location, Show

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Lookup(Generic[T]):
    name: str
    entries: Mapping[str, T]
    default: T

    def get(self, key: str | None) -> T:
        if key is None:
            return self.default
        return self.entries.get(key, self.default)

    def missing(self, keys: Iterable[str]) -> list[str]:
        """Keys present in the data but absent from the table."""
        return sorted({key for key in keys if key and key not in self.entries})


@dataclass(frozen=True)
class ColorScheme:
    start: str
    end: str
    text: str = "#ffffff"

    @property
    def style(self) -> str:
        return (
            f"background: linear-gradient(135deg, {self.start} 0%, {self.end} 100%);"
            f" color: {self.text};"
        )


DEFAULT_SCHEME = ColorScheme("#6366f1", "#8b5cf6")

SHOW_EMOJI: Lookup[str] = Lookup(
    "show emoji",
    {
        "the-bachelor": "🌹",
        "the-bachelorette": "🌹",
        "love-is-blind": "💍",
        "too-hot-to-handle": "🔥",
        "love-island-usa": "🏝️",
        "bachelor-in-paradise": "🌴",
        "below-deck": "⛵",
        "survivor": "🔥",
    },
    "📺",
)

LOCATION_EMOJI: Lookup[str] = Lookup(
    "location emoji",
    {
        "bachelor-mansion": "🏰",
        "playa-escondida-resort": "🏖️",
        "emerald-pavilion": "🌴",
        "casa-amor-villa": "🏡",
        "turks-caicos-villa": "🏝️",
    },
    "📍",
)

NETWORK_SCHEMES: Lookup[ColorScheme] = Lookup(
    "network color",
    {
        "ABC": ColorScheme("#e11d48", "#be123c"),
        "Netflix": ColorScheme("#dc2626", "#111827"),
        "Peacock": ColorScheme("#0ea5e9", "#6366f1"),
        "Bravo": ColorScheme("#7c3aed", "#4c1d95"),
        "CBS": ColorScheme("#2563eb", "#1e3a8a"),
    },
    DEFAULT_SCHEME,
)

CATEGORY_SCHEMES: Lookup[ColorScheme] = Lookup(
    "category color",
    {
        "mansion": ColorScheme("#f59e0b", "#b45309"),
        "resort": ColorScheme("#06b6d4", "#0e7490"),
        "villa": ColorScheme("#10b981", "#047857"),
        "hotel": ColorScheme("#8b5cf6", "#5b21b6"),
        "restaurant": ColorScheme("#f97316", "#c2410c"),
    },
    DEFAULT_SCHEME,
)

AMENITY_EMOJI: Lookup[str] = Lookup(
    "amenity emoji",
    {
        "pool": "🏊",
        "infinity-pool": "🏊",
        "spa": "💆",
        "beach-access": "🏖️",
        "restaurant": "🍽️",
        "bar": "🍹",
        "chef-available": "👨‍🍳",
        "private-chef": "👨‍🍳",
        "butler-service": "🎩",
        "gym": "💪",
        "yoga": "🧘",
        "surf-lessons": "🏄",
        "home-theater": "🎬",
        "wine-cellar": "🍷",
        "event-space": "🎉",
        "10-acres": "🌳",
        "mountain-views": "⛰️",
    },
    "✨",
)

TRENDING_SHOWS = frozenset({"love-island-usa", "love-is-blind"})
NEW_SHOWS = frozenset({"too-hot-to-handle"})
TRENDING_LOCATIONS = frozenset({"playa-escondida-resort", "bachelor-mansion"})
NEW_LOCATIONS = frozenset({"emerald-pavilion"})


def show_badges(show_id: str) -> list[str]:
    badges = []
    if show_id in TRENDING_SHOWS:
        badges.append("trending")
    if show_id in NEW_SHOWS:
        badges.append("new")
    return badges


def location_badges(location_id: str) -> list[str]:
    badges = []
    if location_id in TRENDING_LOCATIONS:
        badges.append("trending")
    if location_id in NEW_LOCATIONS:
        badges.append("new")
    return badges


def check_tables(shows: Sequence[Show], locations: Sequence[Location]) -> list[str]:
    """Return (and log) drift between the lookup tables and a loaded snapshot."""
    show_ids = [show.id for show in shows]
    location_ids = [loc.id for loc in locations]
    problems: list[str] = []

    for table, keys in (
        (SHOW_EMOJI, show_ids),
        (LOCATION_EMOJI, location_ids),
        (NETWORK_SCHEMES, [show.network for show in shows]),
        (CATEGORY_SCHEMES, [loc.category for loc in locations]),
        (AMENITY_EMOJI, [tag for loc in locations for tag in loc.amenities]),
    ):
        missing = table.missing(keys)
        if missing:
            problems.append(f"{table.name}: no entry for {', '.join(missing)}")

    for label, ids, known in (
        ("trending shows", TRENDING_SHOWS, show_ids),
        ("new shows", NEW_SHOWS, show_ids),
        ("trending locations", TRENDING_LOCATIONS, location_ids),
        ("new locations", NEW_LOCATIONS, location_ids),
    ):
        stale = sorted(ids - set(known))
        if stale:
            problems.append(f"{label}: unknown ids {', '.join(stale)}")

    for problem in problems:
        logger.warning("Presentation drift - %s", problem)
    return problems
