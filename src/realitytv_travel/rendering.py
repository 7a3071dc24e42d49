"""Jinja2 environment shared by the card, detail and page renderers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .formatting import format_number

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


def _limit(items: Any, count: int) -> Any:
    if not isinstance(items, (list, tuple)):
        return items
    return items[:count]


@lru_cache(maxsize=1)
def get_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["number"] = format_number
    env.filters["limit"] = _limit
    return env


def render(template_name: str, **context: Any) -> str:
    tmpl = get_environment().get_template(template_name)
    return tmpl.render(**context).strip()
