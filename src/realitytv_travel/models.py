"""Typed records for the shows and locations collections.

Data files use camelCase keys; the models expose snake_case attributes and
accept either spelling. Unknown keys are ignored so the data files can grow
without breaking loading, and a null value falls back to the field default.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null means "not set"; the field default applies
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Faq(_Record):
    question: str
    answer: str = ""


class PriceRange(_Record):
    min: float | None = None
    max: float | None = None
    currency: str = "USD"
    unit: str = "night"


class FeaturedSeason(_Record):
    show: str
    seasons: list[int] = Field(default_factory=list)


class Coordinates(_Record):
    lat: float
    lng: float


class NearbyAttraction(_Record):
    name: str
    type: str = ""
    distance: str = ""


class Video(_Record):
    url: str
    type: str = ""
    title: str = ""


class Show(_Record):
    id: str
    name: str
    network: str = ""
    seasons: int = 0
    status: str = "active"
    description: str = ""
    long_description: str = ""
    tagline: str | None = None
    viewer_rating: float | None = None
    year_started: int | None = None
    best_seasons: list[int] = Field(default_factory=list)
    travel_tips: list[str] = Field(default_factory=list)
    faqs: list[Faq] = Field(default_factory=list)
    destinations: list[str] = Field(default_factory=list)
    image: str | None = None


class Location(_Record):
    id: str
    name: str
    city: str = ""
    country: str = ""
    region: str = ""
    category: str = ""
    address: str = ""
    description: str | None = None
    tagline: str | None = None
    price_range: PriceRange | None = None
    bookable: bool = False
    booking_url: str | None = None
    booking_platform: str | None = None
    amenities: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)
    shows: list[str] = Field(default_factory=list)
    featured_seasons: list[FeaturedSeason] = Field(default_factory=list)
    coordinates: Coordinates | None = None
    best_time_to_visit: str | None = None
    nearby_attractions: list[NearbyAttraction] = Field(default_factory=list)
    videos: list[Video] = Field(default_factory=list)
    faqs: list[Faq] = Field(default_factory=list)
    image: str | None = None

    @property
    def min_price(self) -> float:
        if self.price_range is None or self.price_range.min is None:
            return 0.0
        return self.price_range.min
