"""Grid cards for shows and locations.

Each card goes through a frozen view model before reaching its template,
so the mapping from record to markup stays pure: the same record (and the
same resolved show list) always yields the same bytes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from . import config
from .crossref import CrossReference
from .formatting import format_amount, pluralize, truncate
from .models import Location, Show
from .presentation import (
    CATEGORY_SCHEMES,
    LOCATION_EMOJI,
    NETWORK_SCHEMES,
    SHOW_EMOJI,
    location_badges,
    show_badges,
)
from .rendering import render


def show_href(show_id: str) -> str:
    return f"show.html?id={show_id}"


def location_href(location_id: str) -> str:
    return f"location.html?id={location_id}"


@dataclass(frozen=True)
class ShowCard:
    id: str
    href: str
    name: str
    network: str
    emoji: str
    scheme_style: str
    badges: tuple[str, ...]
    meta: str
    description: str
    image: str | None


@dataclass(frozen=True)
class LocationCard:
    id: str
    href: str
    name: str
    place: str
    emoji: str
    scheme_style: str
    badges: tuple[str, ...]
    bookable: bool
    show_names: tuple[str, ...]
    show_limit: int
    highlights: tuple[str, ...]
    highlight_limit: int
    description: str
    price_amount: str
    price_unit: str
    favorite: bool
    image: str | None


def show_card(show: Show) -> ShowCard:
    meta = (
        f"{pluralize(show.seasons, 'Season')} • "
        f"{pluralize(len(show.destinations), 'Location')}"
    )
    return ShowCard(
        id=show.id,
        href=show_href(show.id),
        name=show.name,
        network=show.network,
        emoji=SHOW_EMOJI.get(show.id),
        scheme_style=NETWORK_SCHEMES.get(show.network).style,
        badges=tuple(show_badges(show.id)),
        meta=meta,
        description=truncate(show.description, config.DESCRIPTION_LIMIT),
        image=show.image,
    )


def location_card(
    location: Location,
    shows: Sequence[Show] | None,
    *,
    favorite: bool = False,
) -> LocationCard:
    names = CrossReference(shows or (), ()).show_names_for(location)
    price = location.price_range
    return LocationCard(
        id=location.id,
        href=location_href(location.id),
        name=location.name,
        place=", ".join(part for part in (location.city, location.country) if part),
        emoji=LOCATION_EMOJI.get(location.id),
        scheme_style=CATEGORY_SCHEMES.get(location.category).style,
        badges=tuple(location_badges(location.id)),
        bookable=location.bookable,
        show_names=tuple(names),
        show_limit=config.CARD_SHOW_LIMIT,
        highlights=tuple(location.highlights),
        highlight_limit=config.CARD_HIGHLIGHT_LIMIT,
        description=truncate(
            location.description or location.tagline, config.DESCRIPTION_LIMIT
        ),
        price_amount=format_amount(price.min, price.currency) if price else "",
        price_unit=price.unit if price else "",
        favorite=favorite,
        image=location.image,
    )


def render_show_card(show: Show) -> str:
    return render("show_card.html", card=show_card(show))


def render_location_card(
    location: Location,
    shows: Sequence[Show] | None,
    *,
    favorite: bool = False,
) -> str:
    return render(
        "location_card.html", card=location_card(location, shows, favorite=favorite)
    )
