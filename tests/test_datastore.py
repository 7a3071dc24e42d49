import json
from unittest.mock import MagicMock

import requests

from realitytv_travel.datastore import (
    AppState,
    DataStore,
    FileTransport,
    HttpTransport,
    make_transport,
)
from realitytv_travel.errors import TransportFailure
from realitytv_travel.models import Location, Show

from conftest import DictTransport


def _http_store(status_code=404, content=b"", sleeps=None):
    response = MagicMock(ok=200 <= status_code < 300, status_code=status_code, content=content)
    session = MagicMock()
    session.get.return_value = response
    store = DataStore(
        HttpTransport("https://example.com/_data", session=session),
        sleep=(sleeps if sleeps is not None else []).append,
    )
    return store, session


def test_404_on_every_attempt_returns_failure():
    sleeps = []
    store, session = _http_store(404, sleeps=sleeps)

    result = store.load("shows.json")

    assert not result.ok
    assert result.records is None
    assert result.error_stage == "transport"
    assert "404" in result.error_detail
    assert result.attempts_used == 3
    assert session.get.call_count == 3
    session.get.assert_called_with("https://example.com/_data/shows.json", timeout=10.0)


def test_backoff_grows_linearly_between_attempts():
    sleeps = []
    store, _ = _http_store(500, sleeps=sleeps)
    store.backoff_unit = 0.5

    store.load("locations.json")

    assert sleeps == [0.5, 1.0]


def test_connection_error_is_a_transport_failure():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("boom")
    store = DataStore(HttpTransport("https://example.com", session=session), sleep=lambda _s: None)

    result = store.load("shows.json")

    assert not result.ok
    assert result.error_stage == "transport"


def test_invalid_json_is_a_decode_failure(sleeps):
    transport = DictTransport({"shows.json": b"{not json"})
    store = DataStore(transport, sleep=sleeps.append)

    result = store.load("shows.json")

    assert not result.ok
    assert result.error_stage == "decode"
    assert transport.calls["shows.json"] == 3


def test_wrong_envelope_is_a_decode_failure(sleeps):
    transport = DictTransport({"shows.json": {"locations": []}})
    result = DataStore(transport, sleep=sleeps.append).load("shows.json")

    assert not result.ok
    assert result.error_stage == "decode"
    assert "schema" in result.error_detail


def test_recovers_when_a_later_attempt_succeeds(shows_data, sleeps):
    good = DictTransport({"shows.json": shows_data})
    transport = MagicMock()
    transport.fetch.side_effect = [
        TransportFailure("shows.json returned 503"),
        good.fetch("shows.json"),
    ]

    result = DataStore(transport, sleep=sleeps.append).load("shows.json")

    assert result.ok
    assert result.attempts_used == 2
    assert sleeps == [1.0]
    assert all(isinstance(show, Show) for show in result.records)


def test_successful_load_is_cached(transport, sleeps):
    store = DataStore(transport, sleep=sleeps.append)

    first = store.load("locations.json")
    second = store.load("locations.json")

    assert first.ok and second.ok
    assert second.records is first.records
    assert transport.calls["locations.json"] == 1
    assert all(isinstance(loc, Location) for loc in first.records)


def test_file_transport_reads_data_directory(tmp_path, shows_data):
    (tmp_path / "shows.json").write_text(json.dumps(shows_data), encoding="utf-8")
    store = DataStore(make_transport(tmp_path), sleep=lambda _s: None)

    assert isinstance(store.transport, FileTransport)
    assert store.load("shows.json").ok
    assert not store.load("locations.json").ok


def test_make_transport_picks_http_for_urls():
    assert isinstance(make_transport("https://example.com/_data"), HttpTransport)


def test_app_state_lifecycle(app_state):
    assert app_state.shows.status == "empty"

    state = app_state.ensure_shows()

    assert state.status == "loaded"
    assert app_state.show_by_id("love-is-blind").name == "Love Is Blind"
    assert app_state.show_by_id("missing") is None


def test_app_state_records_failure_and_retry(shows_data, sleeps):
    transport = DictTransport({})
    state = AppState(DataStore(transport, sleep=sleeps.append))

    assert state.ensure_shows().failed
    assert state.all_shows == []
    # failed state is sticky until an explicit retry
    state.ensure_shows()
    assert transport.calls["shows.json"] == 3

    transport.payloads["shows.json"] = shows_data
    assert state.retry("shows.json").loaded
    assert len(state.all_shows) == 4


def test_null_and_unexpected_fields_fall_back_to_defaults(shows_data, sleeps):
    shows_data["shows"][3]["description"] = None
    shows_data["shows"][3]["status"] = "hiatus"
    shows_data["shows"][0]["faqs"] = [{"question": "Where is it filmed?"}]
    store = DataStore(DictTransport({"shows.json": shows_data}), sleep=sleeps.append)

    result = store.load("shows.json")

    assert result.ok
    assert len(result.records) == 4
    assert result.records[3].description == ""
    assert result.records[3].status == "hiatus"
    assert result.records[0].faqs[0].answer == ""
    assert sleeps == []


def test_an_invalid_record_is_skipped_not_the_collection(shows_data, sleeps):
    shows_data["shows"][1]["seasons"] = "lots"
    store = DataStore(DictTransport({"shows.json": shows_data}), sleep=sleeps.append)

    result = store.load("shows.json")

    assert result.ok
    assert [show.id for show in result.records] == [
        "the-bachelor",
        "love-is-blind",
        "too-hot-to-handle",
    ]


def test_unknown_collection_is_a_failure_not_an_exception(tmp_path):
    (tmp_path / "extra.json").write_text('{"extra": []}', encoding="utf-8")
    transport = MagicMock(wraps=FileTransport(tmp_path))
    store = DataStore(transport, sleep=lambda _s: None)

    result = store.load("extra.json")

    assert not result.ok
    assert result.error_stage == "decode"
    assert "extra.json" in result.error_detail
    transport.fetch.assert_not_called()
