"""Failure types raised by transports and recovered by the data layer."""

from __future__ import annotations


class SiteError(Exception):
    """Base class for content pipeline failures."""


class TransportFailure(SiteError):
    """A data file could not be fetched (missing, non-2xx, connection error)."""


class DecodeFailure(SiteError):
    """A data file was fetched but is not a usable collection."""


class NotFound(SiteError):
    """An id did not resolve in a successfully loaded collection."""

    def __init__(self, kind: str, item_id: str | None) -> None:
        super().__init__(f"{kind} {item_id!r} not found")
        self.kind = kind
        self.item_id = item_id


class MalformedPersisted(SiteError):
    """A persisted value could not be decoded into the expected shape."""
