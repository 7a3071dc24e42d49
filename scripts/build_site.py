#!/usr/bin/env python3
"""build_site.py – render the RealityTVTravel pages.

Reads shows.json and locations.json from a data directory (or base URL)
and writes one HTML file per page:

    _site/
      index.html
      shows.html
      locations.html
      show/<id>.html
      location/<id>.html
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from realitytv_travel import config  # noqa: E402
from realitytv_travel.datastore import AppState, DataStore, make_transport  # noqa: E402
from realitytv_travel.favorites import FavoritesStore, JsonFileStorage  # noqa: E402
from realitytv_travel.pages import STATUS_LOAD_FAILED, Page, Site  # noqa: E402
from realitytv_travel.rendering import render  # noqa: E402

logger = logging.getLogger("build_site")


def write_page(page: Page, out_path: Path) -> None:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render("layout.html", page=page) + "\n", encoding="utf-8")
    logger.info("✓ Wrote %s", out_path)


def build(site: Site, output: Path) -> int:
    """Write every page; return how many pages rendered a load failure."""
    failures = 0
    site.check_presentation()

    listing_pages = {
        "index.html": site.home(),
        "shows.html": site.shows_page(),
        "locations.html": site.locations_page(),
    }
    for name, page in listing_pages.items():
        write_page(page, output / name)
        failures += page.status == STATUS_LOAD_FAILED

    for show in site.state.all_shows:
        write_page(site.show_page(f"id={show.id}"), output / "show" / f"{show.id}.html")
    for location in site.state.all_locations:
        write_page(
            site.location_page(f"id={location.id}"),
            output / "location" / f"{location.id}.html",
        )
    return failures


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", default=config.DATA_DIR, help="directory or base URL")
    parser.add_argument("--output", default="_site", help="output directory")
    parser.add_argument(
        "--backoff-unit",
        type=float,
        default=config.BACKOFF_UNIT,
        help="seconds added to the wait after each failed fetch",
    )
    parser.add_argument(
        "--favorites",
        default=None,
        help="JSON file holding the persisted wishlist",
    )
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    store = DataStore(make_transport(args.data_dir), backoff_unit=args.backoff_unit)
    state = AppState(store)
    favorites = FavoritesStore(JsonFileStorage(args.favorites)) if args.favorites else None
    failures = build(Site(state, favorites), Path(args.output))
    if failures:
        logger.error("%d page(s) rendered without data", failures)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
