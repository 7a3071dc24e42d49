"""Detail-page bodies for a single show or location."""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass
from typing import TypeVar
from urllib.parse import parse_qs, urlparse

from . import config
from .cards import LocationCard, ShowCard, location_card, show_card
from .crossref import CrossReference
from .formatting import (
    format_amount,
    humanize_tag,
    join_seasons,
    pluralize,
    rating_stars,
    status_label,
)
from .models import Faq, Location, NearbyAttraction, Show, Video
from .presentation import AMENITY_EMOJI, LOCATION_EMOJI, SHOW_EMOJI
from .rendering import render

NO_LOCATIONS_MESSAGE = "No bookable locations available yet"
LOCATIONS_FAILED_MESSAGE = "Unable to load locations. Please try again."

R = TypeVar("R", Show, Location)

_VIDEO_ID = re.compile(r"[A-Za-z0-9_-]{6,}")


def select_similar(
    item: R,
    pool: Sequence[R],
    tiers: Sequence[Callable[[R], bool]],
    limit: int | None = None,
) -> list[R]:
    """Pick up to ``limit`` records, filling from each tier in turn.

    Later tiers only backfill what earlier ones left open; the final pass
    accepts any record. ``item`` and duplicates never appear.
    """
    if limit is None:
        limit = config.SIMILAR_LIMIT
    picked: list[R] = []
    seen = {item.id}
    for tier in (*tiers, lambda _candidate: True):
        for candidate in pool:
            if len(picked) >= limit:
                return picked
            if candidate.id in seen or not tier(candidate):
                continue
            picked.append(candidate)
            seen.add(candidate.id)
    return picked


@dataclass(frozen=True)
class ShowDetail:
    id: str
    name: str
    emoji: str
    section_href: str
    section_label: str
    network: str
    seasons_label: str
    locations_label: str
    status_label: str
    stars: str
    rating: str
    tagline: str | None
    description: str
    year_started: int | None
    best_seasons: str
    travel_tips: tuple[str, ...]
    faqs: tuple[Faq, ...]
    locations: tuple[LocationCard, ...]
    empty_locations_message: str
    similar: tuple[ShowCard, ...]


@dataclass(frozen=True)
class Amenity:
    emoji: str
    label: str


@dataclass(frozen=True)
class FeaturedSeasonView:
    show_name: str
    seasons: str


@dataclass(frozen=True)
class VideoView:
    url: str
    title: str
    video_id: str | None

    @property
    def thumbnail(self) -> str:
        return f"https://i.ytimg.com/vi/{self.video_id}/hqdefault.jpg"


_YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "youtu.be"}


def youtube_id(video: Video) -> str | None:
    """Video id for a YouTube link, or None for anything else."""
    parts = urlparse(video.url)
    host = parts.netloc.lower()
    if host not in _YOUTUBE_HOSTS and video.type.lower() != "youtube":
        return None
    if host == "youtu.be":
        candidate = parts.path.strip("/")
    elif parts.path.startswith(("/embed/", "/shorts/")):
        candidate = parts.path.split("/")[2]
    else:
        candidate = parse_qs(parts.query).get("v", [""])[0]
    return candidate if _VIDEO_ID.fullmatch(candidate) else None


@dataclass(frozen=True)
class LocationDetail:
    id: str
    name: str
    emoji: str
    section_href: str
    section_label: str
    place: str
    show_names: tuple[str, ...]
    address: str
    description: str
    tagline: str | None
    price_amount: str
    price_unit: str
    bookable: bool
    booking_url: str | None
    booking_platform: str | None
    favorite: bool
    amenities: tuple[Amenity, ...]
    featured_seasons: tuple[FeaturedSeasonView, ...]
    highlights: tuple[str, ...]
    best_time_to_visit: str | None
    nearby_attractions: tuple[NearbyAttraction, ...]
    videos: tuple[VideoView, ...]
    coordinates: str
    faqs: tuple[Faq, ...]
    shows: tuple[ShowCard, ...]
    similar: tuple[LocationCard, ...]


def show_detail(
    show: Show,
    all_shows: Sequence[Show],
    all_locations: Sequence[Location],
    *,
    favorites: Collection[str] = (),
    locations_failed: bool = False,
) -> ShowDetail:
    xref = CrossReference(all_shows, all_locations)
    related = xref.locations_for_show(show.id)
    similar = select_similar(
        show,
        all_shows,
        [lambda other: bool(show.network) and other.network == show.network],
    )
    rating = show.viewer_rating or 0.0
    return ShowDetail(
        id=show.id,
        name=show.name,
        emoji=SHOW_EMOJI.get(show.id),
        section_href="shows.html",
        section_label="Shows",
        network=show.network,
        seasons_label=pluralize(show.seasons, "Season"),
        locations_label=pluralize(len(show.destinations), "Location"),
        status_label=status_label(show.status),
        stars=rating_stars(rating),
        rating=f"{rating:.1f}",
        tagline=show.tagline,
        description=show.long_description or show.description,
        year_started=show.year_started,
        best_seasons=join_seasons(show.best_seasons),
        travel_tips=tuple(show.travel_tips),
        faqs=tuple(show.faqs),
        locations=tuple(
            location_card(loc, all_shows, favorite=loc.id in favorites)
            for loc in related
        ),
        empty_locations_message=(
            LOCATIONS_FAILED_MESSAGE if locations_failed else NO_LOCATIONS_MESSAGE
        ),
        similar=tuple(show_card(other) for other in similar),
    )


def location_detail(
    location: Location,
    all_shows: Sequence[Show],
    all_locations: Sequence[Location],
    *,
    favorites: Collection[str] = (),
) -> LocationDetail:
    xref = CrossReference(all_shows, all_locations)
    similar = select_similar(
        location,
        all_locations,
        [
            lambda other: other.region == location.region
            and other.category == location.category,
            lambda other: bool(location.region) and other.region == location.region,
            lambda other: bool(location.category)
            and other.category == location.category,
        ],
    )
    price = location.price_range
    coords = location.coordinates
    return LocationDetail(
        id=location.id,
        name=location.name,
        emoji=LOCATION_EMOJI.get(location.id),
        section_href="locations.html",
        section_label="Locations",
        place=", ".join(part for part in (location.city, location.country) if part),
        show_names=tuple(xref.show_names_for(location)),
        address=location.address,
        description=location.description or "",
        tagline=location.tagline,
        price_amount=format_amount(price.min, price.currency) if price else "",
        price_unit=price.unit if price else "",
        bookable=location.bookable,
        booking_url=location.booking_url,
        booking_platform=location.booking_platform,
        favorite=location.id in favorites,
        amenities=tuple(
            Amenity(AMENITY_EMOJI.get(tag), humanize_tag(tag))
            for tag in location.amenities
        ),
        featured_seasons=tuple(
            FeaturedSeasonView(xref.resolve_show_name(fs.show), join_seasons(fs.seasons))
            for fs in location.featured_seasons
        ),
        highlights=tuple(location.highlights),
        best_time_to_visit=location.best_time_to_visit,
        nearby_attractions=tuple(location.nearby_attractions),
        videos=tuple(
            VideoView(video.url, video.title or video.url, youtube_id(video))
            for video in location.videos
        ),
        coordinates=f"{coords.lat:.4f}, {coords.lng:.4f}" if coords else "",
        faqs=tuple(location.faqs),
        shows=tuple(show_card(show) for show in xref.shows_featuring_location(location.id)),
        similar=tuple(
            location_card(other, all_shows, favorite=other.id in favorites)
            for other in similar
        ),
    )


def render_show_detail(
    show: Show,
    all_shows: Sequence[Show],
    all_locations: Sequence[Location],
    *,
    favorites: Collection[str] = (),
    locations_failed: bool = False,
) -> str:
    detail = show_detail(
        show,
        all_shows,
        all_locations,
        favorites=favorites,
        locations_failed=locations_failed,
    )
    return render("show_detail.html", detail=detail, faqs=detail.faqs)


def render_location_detail(
    location: Location,
    all_shows: Sequence[Show],
    all_locations: Sequence[Location],
    *,
    favorites: Collection[str] = (),
) -> str:
    detail = location_detail(location, all_shows, all_locations, favorites=favorites)
    return render("location_detail.html", detail=detail, faqs=detail.faqs)
