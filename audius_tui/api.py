"""Client for the track service's HTTP API."""

from __future__ import annotations

import json
import tempfile
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

import requests

from .models import Track, TrackFavorite, User

API_ENDPOINT = "https://discoveryprovider.audius.co/v1"
APP_NAME = "audius-cli"

_Params = Mapping[str, str] | Iterable[tuple[str, str]]
_T = TypeVar("_T", Track, TrackFavorite, User)


class ApiError(Exception):
    """A request failed or its response could not be decoded."""


def get(path: str, params: _Params | None = None) -> bytes:
    """Send a GET request to the API and return the raw response body."""
    pairs = list(params.items() if isinstance(params, Mapping) else params or ())
    query = sorted([("app_name", APP_NAME), *pairs], key=lambda pair: pair[0])
    try:
        response = requests.get(
            API_ENDPOINT + path,
            params=query,
            headers={"Accept": "application/json"},
        )
    except requests.RequestException as exc:
        raise ApiError(str(exc)) from exc
    return response.content


def _fetch_data(path: str, params: _Params | None = None) -> Any:
    body = get(path, params)
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise ApiError(f"invalid response from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ApiError(f"invalid response from {path}: expected an object")
    return payload.get("data")


def _fetch_record(path: str, kind: type[_T]) -> _T:
    data = _fetch_data(path)
    if data is None:
        return kind()
    try:
        return kind.from_dict(data)
    except ValueError as exc:
        raise ApiError(f"invalid response from {path}: {exc}") from exc


def _fetch_records(
    path: str, kind: type[_T], params: _Params | None = None
) -> list[_T]:
    data = _fetch_data(path, params)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ApiError(f"invalid response from {path}: expected a list")
    try:
        return [kind.from_dict(item) for item in data]
    except ValueError as exc:
        raise ApiError(f"invalid response from {path}: {exc}") from exc


def get_track_by_id(track_id: str) -> Track:
    return _fetch_record("/tracks/" + track_id, Track)


def get_user_tracks(user_id: str) -> list[Track]:
    return _fetch_records("/users/" + user_id + "/tracks", Track)


def get_user_favorite_tracks(user_id: str) -> list[Track]:
    """Return the tracks a user has marked as favourite."""
    favorites = _fetch_records("/users/" + user_id + "/favorites", TrackFavorite)
    if not favorites:
        return []
    return _fetch_records("/tracks", Track, [("id", fav.track_id) for fav in favorites])


def get_playlist_tracks(playlist_id: str) -> list[Track]:
    return _fetch_records("/playlists/" + playlist_id + "/tracks", Track)


def get_trending_tracks() -> list[Track]:
    return _fetch_records("/tracks/trending", Track)


def get_underground_tracks() -> list[Track]:
    return _fetch_records("/tracks/trending/underground", Track)


def get_track_mp3(track_id: str) -> str:
    """Download a track's audio to a temporary file and return its path."""
    body = get("/tracks/" + track_id + "/stream")
    with tempfile.NamedTemporaryFile(
        prefix="TEMP_APP_TRACK.", suffix=".mp3", delete=False
    ) as handle:
        handle.write(body)
        return handle.name


def get_search_tracks(query: str) -> list[Track]:
    return _fetch_records("/tracks/search", Track, [("query", query)])


def get_user_by_handle(handle: str) -> User:
    return _fetch_record("/users/handle/" + handle, User)