"""Page controllers: load what a page needs and render each region.

A region whose collection failed to load renders its own "unable to load"
state; other regions on the same page still render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import parse_qs

from . import config, states
from .cards import location_card, show_card
from .datastore import AppState
from .detail import render_location_detail, render_show_detail
from .errors import NotFound
from .favorites import FavoriteChange, FavoritesStore, MemoryStorage
from .listing import GridView, LocationListing, ShowListing
from .presentation import check_tables
from .rendering import render

logger = logging.getLogger(__name__)

SITE_NAME = "RealityTVTravel"

STATUS_OK = "ok"
STATUS_LOAD_FAILED = "load-failed"
STATUS_NOT_FOUND = "not-found"

RETRY_TARGETS = {"shows": config.SHOWS_FILE, "locations": config.LOCATIONS_FILE}


@dataclass(frozen=True)
class Region:
    element_id: str
    body: str
    heading: str | None = None
    status: str = STATUS_OK


@dataclass(frozen=True)
class Page:
    title: str
    body: str
    status: str = STATUS_OK


def query_id(query_string: str | None) -> str | None:
    """Return the ``id`` parameter of a detail-page query string."""
    if not query_string:
        return None
    values = parse_qs(query_string.lstrip("?")).get("id")
    if not values or not values[0].strip():
        return None
    return values[0].strip()


def _page_from_regions(title: str, regions: list[Region]) -> Page:
    body = render("regions.html", regions=regions)
    failed = all(region.status != STATUS_OK for region in regions)
    return Page(title=title, body=body, status=STATUS_LOAD_FAILED if failed else STATUS_OK)


class Site:
    def __init__(self, state: AppState, favorites: FavoritesStore | None = None) -> None:
        self.state = state
        self.favorites = favorites or FavoritesStore(MemoryStorage())

    def check_presentation(self) -> list[str]:
        self.state.ensure_shows()
        self.state.ensure_locations()
        return check_tables(self.state.all_shows, self.state.all_locations)

    def shows_region(self, element_id: str = "shows-grid") -> Region:
        shows = self.state.ensure_shows()
        if shows.failed:
            return Region(element_id, states.load_failed("shows"), "Shows", STATUS_LOAD_FAILED)
        if not shows.records:
            return Region(element_id, states.empty("No shows yet."), "Shows")
        grid = GridView(
            css_class="shows-grid",
            element_id=f"{element_id}-cards",
            card_template="show_card.html",
            cards=tuple(show_card(show) for show in shows.records),
        )
        return Region(element_id, render("grid.html", grid=grid), "Shows")

    def locations_region(self, element_id: str = "locations-grid") -> Region:
        locations = self.state.ensure_locations()
        if locations.failed:
            return Region(
                element_id, states.load_failed("locations"), "Locations", STATUS_LOAD_FAILED
            )
        if not locations.records:
            return Region(element_id, states.empty("No locations yet."), "Locations")
        # show names fall back to raw ids when shows are unavailable
        shows = self.state.ensure_shows().records
        favorite_ids = self.favorites.get()
        grid = GridView(
            css_class="locations-grid",
            element_id=f"{element_id}-cards",
            card_template="location_card.html",
            cards=tuple(
                location_card(loc, shows, favorite=loc.id in favorite_ids)
                for loc in locations.records
            ),
        )
        return Region(element_id, render("grid.html", grid=grid), "Locations")

    def home(self) -> Page:
        return _page_from_regions(
            f"{SITE_NAME} | Visit Reality TV Filming Locations",
            [self.shows_region(), self.locations_region()],
        )

    def show_listing(self) -> ShowListing | None:
        shows = self.state.ensure_shows()
        if shows.failed:
            return None
        return ShowListing(shows.records)

    def location_listing(self) -> LocationListing | None:
        locations = self.state.ensure_locations()
        if locations.failed:
            return None
        shows = self.state.ensure_shows()
        return LocationListing(locations.records, shows.records, favorites=self.favorites)

    def shows_page(self) -> Page:
        title = f"All Shows | {SITE_NAME}"
        listing = self.show_listing()
        if listing is None:
            return Page(title, states.load_failed("shows"), STATUS_LOAD_FAILED)
        return Page(title, listing.render())

    def locations_page(self) -> Page:
        title = f"All Locations | {SITE_NAME}"
        listing = self.location_listing()
        if listing is None:
            return Page(title, states.load_failed("locations"), STATUS_LOAD_FAILED)
        return Page(title, listing.render())

    def show_page(self, query_string: str | None) -> Page:
        shows = self.state.ensure_shows()
        if shows.failed:
            return Page(
                f"Shows | {SITE_NAME}", states.load_failed("shows"), STATUS_LOAD_FAILED
            )
        try:
            show = self.state.require_show(query_id(query_string))
        except NotFound as exc:
            logger.info("%s", exc)
            return Page(
                f"Show not found | {SITE_NAME}",
                states.not_found("Show", "shows.html"),
                STATUS_NOT_FOUND,
            )
        locations = self.state.ensure_locations()
        body = render_show_detail(
            show,
            shows.records,
            locations.records,
            favorites=self.favorites.get(),
            locations_failed=locations.failed,
        )
        return Page(f"{show.name} Filming Locations | {SITE_NAME}", body)

    def location_page(self, query_string: str | None) -> Page:
        locations = self.state.ensure_locations()
        if locations.failed:
            return Page(
                f"Locations | {SITE_NAME}",
                states.load_failed("locations"),
                STATUS_LOAD_FAILED,
            )
        try:
            location = self.state.require_location(query_id(query_string))
        except NotFound as exc:
            logger.info("%s", exc)
            return Page(
                f"Location not found | {SITE_NAME}",
                states.not_found("Location", "locations.html"),
                STATUS_NOT_FOUND,
            )
        shows = self.state.ensure_shows()
        body = render_location_detail(
            location,
            shows.records,
            locations.records,
            favorites=self.favorites.get(),
        )
        return Page(f"{location.name} | {SITE_NAME}", body)

    def wishlist_page(self) -> Page:
        title = f"My Wishlist | {SITE_NAME}"
        locations = self.state.ensure_locations()
        if locations.failed:
            return Page(title, states.load_failed("locations"), STATUS_LOAD_FAILED)
        favorite_ids = self.favorites.get()
        saved = [loc for loc in locations.records if loc.id in favorite_ids]
        if not saved:
            return Page(title, states.empty("Your wishlist is empty."))
        shows = self.state.ensure_shows().records
        grid = GridView(
            css_class="locations-grid",
            element_id="wishlist-grid",
            card_template="location_card.html",
            cards=tuple(location_card(loc, shows, favorite=True) for loc in saved),
        )
        return Page(title, render("grid.html", grid=grid))

    def retry(self, collection: str) -> None:
        """Handle the Retry action of an "unable to load" state.

        ``collection`` is the ``data-collection`` value of the action
        ("shows" or "locations") or the data file name.
        """
        name = RETRY_TARGETS.get(collection, collection)
        if name not in RETRY_TARGETS.values():
            raise ValueError(f"unknown collection {collection!r}")
        self.state.retry(name)

    def toggle_favorite(self, location_id: str) -> FavoriteChange:
        return self.favorites.toggle(location_id)

    def wishlist_badge(self) -> str:
        return render("wishlist_badge.html", count=self.favorites.count())


def render_notification(change: FavoriteChange) -> str:
    return render("notification.html", change=change)
