"""Small text formatters shared by the card and detail renderers."""

from __future__ import annotations

import math
import re

from . import config
from .models import PriceRange

CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "CA$",
    "AUD": "A$",
    "MXN": "MX$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
}

ELLIPSIS = "…"
STAR_FULL = "★"
STAR_HALF = "½"


def format_number(value: float | int | None) -> str:
    """Thousands-separated integer, e.g. 1000 -> "1,000"."""
    if value is None:
        return ""
    return f"{value:,.0f}"


def format_amount(amount: float | None, currency: str = "USD") -> str:
    """en-US style currency with no fraction digits."""
    code = (currency or "USD").upper()
    value = amount or 0
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{code} {value:,.0f}"
    return f"{symbol}{value:,.0f}"


def format_price(price_range: PriceRange | None) -> str:
    if price_range is None:
        return ""
    amount = format_amount(price_range.min, price_range.currency)
    return f"{amount}/{price_range.unit}"


def truncate(text: str | None, limit: int | None = None) -> str:
    if limit is None:
        limit = config.DESCRIPTION_LIMIT
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


def rating_stars(rating: float | None) -> str:
    """Filled star per whole point plus a half glyph for a fraction >= 0.5."""
    value = min(max(rating or 0.0, 0.0), 5.0)
    whole = math.floor(value)
    stars = STAR_FULL * whole
    if value - whole >= 0.5:
        stars += STAR_HALF
    return stars


def humanize_tag(tag: str) -> str:
    """"beach-access" -> "Beach Access"."""
    words = tag.replace("-", " ")
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), words)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    word = singular if count == 1 else (plural or f"{singular}s")
    return f"{count} {word}"


def status_label(status: str) -> str:
    return "Currently Airing" if status == "active" else "Completed"


def join_seasons(seasons: list[int]) -> str:
    return ", ".join(str(season) for season in seasons)
