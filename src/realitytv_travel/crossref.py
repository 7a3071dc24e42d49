"""Resolve the many-to-many link between shows and locations.

``Location.shows`` is the only stored side of the relation; a show's
locations are found by scanning the location collection. Collections are
small, so every call is a linear scan and nothing is cached.
"""

from __future__ import annotations

from collections.abc import Sequence

from .models import Location, Show


class CrossReference:
    def __init__(self, shows: Sequence[Show], locations: Sequence[Location]) -> None:
        self.shows = shows
        self.locations = locations

    def _location(self, location_id: str) -> Location | None:
        for location in self.locations:
            if location.id == location_id:
                return location
        return None

    def shows_featuring_location(self, location_id: str) -> list[Show]:
        """Shows linked from the location, in show-collection order."""
        location = self._location(location_id)
        if location is None:
            return []
        return [show for show in self.shows if show.id in location.shows]

    def locations_for_show(self, show_id: str) -> list[Location]:
        return [loc for loc in self.locations if show_id in loc.shows]

    def resolve_show_name(self, show_id: str) -> str:
        for show in self.shows:
            if show.id == show_id:
                return show.name
        return show_id

    def show_names_for(self, location: Location) -> list[str]:
        """Display names in the location's own order, raw id when unresolved."""
        return [self.resolve_show_name(show_id) for show_id in location.shows]

    def mean_show_rating(self, location: Location) -> float:
        ratings = [
            show.viewer_rating or 0.0
            for show in self.shows
            if show.id in location.shows
        ]
        if not ratings:
            return 0.0
        return sum(ratings) / len(ratings)
