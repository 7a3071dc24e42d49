"""Tuning constants for loading and rendering.

Every value can be overridden through the environment. Invalid overrides
are logged and the default is kept.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

ENV_DATA_DIR = "RTT_DATA_DIR"
ENV_MAX_ATTEMPTS = "RTT_MAX_ATTEMPTS"
ENV_BACKOFF_UNIT = "RTT_BACKOFF_UNIT"
ENV_HTTP_TIMEOUT = "RTT_HTTP_TIMEOUT"
ENV_DESCRIPTION_LIMIT = "RTT_DESCRIPTION_LIMIT"
ENV_SIMILAR_LIMIT = "RTT_SIMILAR_LIMIT"
ENV_CARD_HIGHLIGHT_LIMIT = "RTT_CARD_HIGHLIGHT_LIMIT"
ENV_CARD_SHOW_LIMIT = "RTT_CARD_SHOW_LIMIT"
ENV_LAZY_ROOT_MARGIN = "RTT_LAZY_ROOT_MARGIN"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Invalid %s value %r; using default %s", name, value, default)
        return default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Invalid %s value %r; using default %s", name, value, default)
        return default


DATA_DIR = os.environ.get(ENV_DATA_DIR) or "data"
SHOWS_FILE = "shows.json"
LOCATIONS_FILE = "locations.json"

MAX_ATTEMPTS = _env_int(ENV_MAX_ATTEMPTS, 3)
BACKOFF_UNIT = _env_float(ENV_BACKOFF_UNIT, 1.0)
HTTP_TIMEOUT = _env_float(ENV_HTTP_TIMEOUT, 10.0)

DESCRIPTION_LIMIT = _env_int(ENV_DESCRIPTION_LIMIT, 150)
SIMILAR_LIMIT = _env_int(ENV_SIMILAR_LIMIT, 3)
CARD_HIGHLIGHT_LIMIT = _env_int(ENV_CARD_HIGHLIGHT_LIMIT, 2)
CARD_SHOW_LIMIT = _env_int(ENV_CARD_SHOW_LIMIT, 2)

LAZY_ROOT_MARGIN = _env_int(ENV_LAZY_ROOT_MARGIN, 200)

FAVORITES_KEY = "realitytv-travel:favorites"
