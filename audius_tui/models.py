"""Records returned by the track service, decoded from its JSON payloads."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import MISSING, dataclass, field, fields
from typing import Any, TypeVar

_R = TypeVar("_R")


def _check_kind(key: str, value: Any, kind: type) -> Any:
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _decode(cls: type[_R], data: Mapping[str, Any]) -> _R:
    """Build the dataclass ``cls`` from a decoded JSON object.

    Missing keys and nulls keep the field's default; values of the wrong
    type raise ValueError.
    """
    if not isinstance(data, Mapping):
        raise ValueError(
            f"{cls.__name__}: expected an object, got {type(data).__name__}"
        )
    values: dict[str, Any] = {}
    for spec in fields(cls):  # type: ignore[arg-type]
        key = spec.metadata.get("json", spec.name)
        raw = data.get(key)
        if raw is None:
            continue
        if spec.default is not MISSING:
            values[spec.name] = _check_kind(key, raw, type(spec.default))
        else:
            values[spec.name] = spec.default_factory.from_dict(raw)  # type: ignore[misc, union-attr]
    return cls(**values)


@dataclass
class User:
    """An account on the service."""

    album_count: int = 0
    artist_pick_track_id: str = ""
    bio: str = ""
    does_follow_current_user: bool = False
    erc_wallet: str = ""
    followee_count: int = 0
    follower_count: int = 0
    handle: str = ""
    id: str = ""
    is_available: bool = False
    is_deactivated: bool = False
    is_verified: bool = False
    location: str = ""
    name: str = ""
    playlist_count: int = 0
    repost_count: int = 0
    spl_wallet: str = ""
    supporter_count: int = 0
    supporting_count: int = 0
    total_audio_balance: int = 0
    track_count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        """Decode a user object."""
        return _decode(cls, data)


@dataclass
class Track:
    """A single track and the user who published it."""

    description: str = ""
    downloadable: bool = False
    duration: int = 0
    favorite_count: int = 0
    genre: str = ""
    id: str = ""
    is_streamable: bool = False
    mood: str = ""
    permalink: str = ""
    play_count: int = 0
    release_date: str = ""
    repost_count: int = 0
    title: str = ""
    track_cid: str = ""
    user: User = field(default_factory=User)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Track:
        """Decode a track object."""
        return _decode(cls, data)


@dataclass
class TrackFavorite:
    """A user's favourite mark on a track."""

    track_id: str = field(default="", metadata={"json": "favorite_item_id"})
    user_id: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TrackFavorite:
        """Decode a favourite object."""
        return _decode(cls, data)


@dataclass
class Playlist:
    """A playlist or album."""

    description: str = ""
    permalink: str = ""
    id: str = ""
    is_album: bool = False
    user: User = field(default_factory=User)
    is_image_autogenerated: bool = False
    playlist_name: str = ""
    repost_count: int = 0
    favorite_count: int = 0
    total_play_count: int = 0
    cover_art_sizes: str = ""
    is_private: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Playlist:
        """Decode a playlist object."""
        return _decode(cls, data)