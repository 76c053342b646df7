import os
from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from audius_tui import api
from audius_tui.models import Track, User

BASE = api.API_ENDPOINT


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def _track(track_id, title="Song"):
    return {"id": track_id, "title": title, "duration": 200, "user": {"name": "Artist"}}


def _query(call):
    return parse_qs(urlsplit(call.request.url).query)


def test_trending_tracks(mocked):
    mocked.add(responses.GET, BASE + "/tracks/trending", json={"data": [_track("a"), _track("b", "Other")]})
    tracks = api.get_trending_tracks()
    assert [t.id for t in tracks] == ["a", "b"]
    assert tracks[1].title == "Other"
    assert tracks[0].user.name == "Artist"
    call = mocked.calls[0]
    assert _query(call) == {"app_name": ["audius-cli"]}
    assert call.request.headers["Accept"] == "application/json"


def test_underground_tracks_path(mocked):
    mocked.add(responses.GET, BASE + "/tracks/trending/underground", json={"data": [_track("u")]})
    tracks = api.get_underground_tracks()
    assert [t.id for t in tracks] == ["u"]
    assert urlsplit(mocked.calls[0].request.url).path == "/v1/tracks/trending/underground"


def test_track_by_id(mocked):
    mocked.add(responses.GET, BASE + "/tracks/t7", json={"data": _track("t7")})
    assert api.get_track_by_id("t7").id == "t7"


def test_missing_data_gives_empty_track(mocked):
    mocked.add(responses.GET, BASE + "/tracks/t7", json={})
    assert api.get_track_by_id("t7") == Track()


def test_null_data_gives_empty_list(mocked):
    mocked.add(responses.GET, BASE + "/users/u1/tracks", json={"data": None})
    assert api.get_user_tracks("u1") == []


def test_playlist_tracks(mocked):
    mocked.add(responses.GET, BASE + "/playlists/p1/tracks", json={"data": [_track("x")]})
    assert [t.id for t in api.get_playlist_tracks("p1")] == ["x"]


def test_favorite_tracks_fetches_by_ids(mocked):
    mocked.add(
        responses.GET,
        BASE + "/users/u1/favorites",
        json={"data": [{"favorite_item_id": "a", "user_id": "u1"}, {"favorite_item_id": "b", "user_id": "u1"}]},
    )
    mocked.add(responses.GET, BASE + "/tracks", json={"data": [_track("a"), _track("b")]})
    tracks = api.get_user_favorite_tracks("u1")
    assert [t.id for t in tracks] == ["a", "b"]
    assert _query(mocked.calls[1]) == {"app_name": ["audius-cli"], "id": ["a", "b"]}


def test_no_favorites_makes_one_request(mocked):
    mocked.add(responses.GET, BASE + "/users/u1/favorites", json={"data": []})
    assert api.get_user_favorite_tracks("u1") == []
    assert len(mocked.calls) == 1


def test_search_sends_query(mocked):
    mocked.add(responses.GET, BASE + "/tracks/search", json={"data": [_track("s")]})
    tracks = api.get_search_tracks("deep house")
    assert [t.id for t in tracks] == ["s"]
    assert _query(mocked.calls[0]) == {"app_name": ["audius-cli"], "query": ["deep house"]}


def test_user_by_handle(mocked):
    mocked.add(responses.GET, BASE + "/users/handle/someone", json={"data": {"id": "u5", "handle": "someone"}})
    assert api.get_user_by_handle("someone") == User(id="u5", handle="someone")


def test_invalid_json_raises_api_error(mocked):
    mocked.add(responses.GET, BASE + "/tracks/trending", body="not json")
    with pytest.raises(api.ApiError):
        api.get_trending_tracks()


def test_wrong_field_type_raises_api_error(mocked):
    mocked.add(responses.GET, BASE + "/tracks/trending", json={"data": [{"duration": "long"}]})
    with pytest.raises(api.ApiError):
        api.get_trending_tracks()


def test_data_not_a_list_raises_api_error(mocked):
    mocked.add(responses.GET, BASE + "/tracks/trending", json={"data": {"id": "a"}})
    with pytest.raises(api.ApiError):
        api.get_trending_tracks()


def test_connection_failure_raises_api_error(mocked):
    with pytest.raises(api.ApiError):
        api.get_trending_tracks()


def test_get_returns_raw_body(mocked):
    mocked.add(responses.GET, BASE + "/anything", body=b"raw-bytes")
    assert api.get("/anything") == b"raw-bytes"


def test_track_mp3_written_to_temp_file(mocked):
    mocked.add(responses.GET, BASE + "/tracks/t1/stream", body=b"ID3-audio-bytes")
    name = api.get_track_mp3("t1")
    try:
        assert os.path.basename(name).startswith("TEMP_APP_TRACK.")
        assert name.endswith(".mp3")
        with open(name, "rb") as fh:
            assert fh.read() == b"ID3-audio-bytes"
    finally:
        os.remove(name)