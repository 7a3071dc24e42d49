import sys
from pathlib import Path

# Ensure project root is on the import path so we can import `scripts`.
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

import scripts.build_site as build_site


def test_build_site_writes_every_page(tmp_path):
    out = tmp_path / "_site"

    code = build_site.main(["--data-dir", str(ROOT_DIR / "data"), "--output", str(out)])

    assert code == 0
    for name in ("index.html", "shows.html", "locations.html"):
        assert (out / name).is_file()
    show_page = (out / "show" / "the-bachelor.html").read_text(encoding="utf-8")
    assert "<title>The Bachelor Filming Locations | RealityTVTravel</title>" in show_page
    assert "Villa de la Vina" in show_page
    ghost = (out / "location" / "turks-caicos-villa.html").read_text(encoding="utf-8")
    assert "ghost-show-id" in ghost


def test_build_site_reports_missing_data(tmp_path):
    code = build_site.main(
        [
            "--data-dir",
            str(tmp_path / "nowhere"),
            "--output",
            str(tmp_path / "out"),
            "--backoff-unit",
            "0",
        ]
    )

    assert code == 1
    index = (tmp_path / "out" / "index.html").read_text(encoding="utf-8")
    assert "Unable to load shows" in index
    assert "Unable to load locations" in index
