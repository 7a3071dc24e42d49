"""Search, filter and sort for the listing pages.

Every input change replaces the immutable ``ListingState`` and recomputes
the visible subset from the full collection, so the outcome depends only
on the latest state. All matches render at once with no pagination. That
is fine for the low hundreds of records these collections hold.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace

from . import states
from .cards import location_card, show_card
from .crossref import CrossReference
from .favorites import FavoritesStore
from .models import Location, Show
from .rendering import render

logger = logging.getLogger(__name__)

ALL = "all"

SORT_NAME = "name"
SORT_PRICE_LOW = "price-low"
SORT_PRICE_HIGH = "price-high"
SORT_RATING = "rating"

LOCATION_SORT_KEYS = (SORT_NAME, SORT_PRICE_LOW, SORT_PRICE_HIGH, SORT_RATING)
SHOW_SORT_KEYS = (SORT_NAME, SORT_RATING)

LOCATION_FILTERS = ("category", "region")
SHOW_FILTERS = ("network", "status")


@dataclass(frozen=True)
class ListingState:
    query: str = ""
    filters: dict[str, str] = field(default_factory=dict)
    sort_key: str = SORT_NAME

    def filter_value(self, name: str) -> str:
        return self.filters.get(name, ALL)


@dataclass(frozen=True)
class GridView:
    css_class: str
    element_id: str
    card_template: str
    cards: tuple


def _contains(haystacks: Sequence[str | None], needle: str) -> bool:
    return any(needle in (text or "").lower() for text in haystacks)


class _Listing:
    sort_keys: tuple[str, ...] = (SORT_NAME,)
    filter_names: tuple[str, ...] = ()

    def __init__(self, on_render: Callable[[str], None] | None = None) -> None:
        self.state = ListingState()
        self.on_render = on_render

    def _update(self, state: ListingState) -> str:
        self.state = state
        markup = self.render()
        if self.on_render is not None:
            self.on_render(markup)
        return markup

    def set_query(self, query: str) -> str:
        return self._update(replace(self.state, query=query.strip()))

    def set_filter(self, name: str, value: str | None) -> str:
        if name not in self.filter_names:
            raise ValueError(f"unknown filter {name!r}")
        filters = dict(self.state.filters)
        filters[name] = value or ALL
        return self._update(replace(self.state, filters=filters))

    def set_sort(self, sort_key: str) -> str:
        if sort_key not in self.sort_keys:
            raise ValueError(f"unknown sort key {sort_key!r}")
        return self._update(replace(self.state, sort_key=sort_key))

    def render(self) -> str:
        raise NotImplementedError


class LocationListing(_Listing):
    sort_keys = LOCATION_SORT_KEYS
    filter_names = LOCATION_FILTERS

    def __init__(
        self,
        locations: Sequence[Location],
        shows: Sequence[Show],
        *,
        favorites: FavoritesStore | None = None,
        on_render: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(on_render)
        self.locations = list(locations)
        self.shows = list(shows)
        self.favorites = favorites
        self.xref = CrossReference(self.shows, self.locations)

    def category_options(self) -> list[str]:
        return sorted({loc.category for loc in self.locations if loc.category})

    def region_options(self) -> list[str]:
        return sorted({loc.region for loc in self.locations if loc.region})

    def _matches(self, location: Location, needle: str) -> bool:
        fields = [location.name, location.city, location.country, location.tagline]
        fields.extend(self.xref.show_names_for(location))
        return _contains(fields, needle)

    def results(self) -> list[Location]:
        state = self.state
        items = self.locations
        for name in self.filter_names:
            wanted = state.filter_value(name)
            if wanted != ALL:
                items = [loc for loc in items if getattr(loc, name) == wanted]
        needle = state.query.lower()
        if needle:
            items = [loc for loc in items if self._matches(loc, needle)]

        if state.sort_key == SORT_PRICE_LOW:
            return sorted(items, key=lambda loc: loc.min_price)
        if state.sort_key == SORT_PRICE_HIGH:
            return sorted(items, key=lambda loc: loc.min_price, reverse=True)
        if state.sort_key == SORT_RATING:
            return sorted(items, key=lambda loc: -self.xref.mean_show_rating(loc))
        return sorted(items, key=lambda loc: loc.name.lower())

    def render(self) -> str:
        items = self.results()
        logger.debug("Location listing %s -> %d results", self.state, len(items))
        if not items:
            return states.no_results(self.state.query)
        favorite_ids = self.favorites.get() if self.favorites else set()
        grid = GridView(
            css_class="locations-grid",
            element_id="all-locations-grid",
            card_template="location_card.html",
            cards=tuple(
                location_card(loc, self.shows, favorite=loc.id in favorite_ids)
                for loc in items
            ),
        )
        return render("grid.html", grid=grid)


class ShowListing(_Listing):
    sort_keys = SHOW_SORT_KEYS
    filter_names = SHOW_FILTERS

    def __init__(
        self,
        shows: Sequence[Show],
        *,
        on_render: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(on_render)
        self.shows = list(shows)

    def network_options(self) -> list[str]:
        return sorted({show.network for show in self.shows if show.network})

    def results(self) -> list[Show]:
        state = self.state
        items = self.shows
        for name in self.filter_names:
            wanted = state.filter_value(name)
            if wanted != ALL:
                items = [show for show in items if getattr(show, name) == wanted]
        needle = state.query.lower()
        if needle:
            items = [
                show
                for show in items
                if _contains([show.name, show.network, show.tagline], needle)
            ]
        if state.sort_key == SORT_RATING:
            return sorted(items, key=lambda show: -(show.viewer_rating or 0.0))
        return sorted(items, key=lambda show: show.name.lower())

    def render(self) -> str:
        items = self.results()
        if not items:
            return states.no_results(self.state.query)
        grid = GridView(
            css_class="shows-grid",
            element_id="all-shows-grid",
            card_template="show_card.html",
            cards=tuple(show_card(show) for show in items),
        )
        return render("grid.html", grid=grid)
