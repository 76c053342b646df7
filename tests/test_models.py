import pytest

from audius_tui.models import Playlist, Track, TrackFavorite, User


def _track_payload():
    return {
        "description": "desc",
        "downloadable": True,
        "duration": 215,
        "favorite_count": 12,
        "genre": "Electronic",
        "id": "t1",
        "is_streamable": True,
        "mood": "Calm",
        "permalink": "/artist/song",
        "play_count": 900,
        "release_date": "2023-01-01",
        "repost_count": 4,
        "title": "Song",
        "track_cid": "cid",
        "user": {"id": "u1", "name": "Artist", "handle": "artist", "is_verified": True},
    }


def test_track_from_dict_reads_all_fields():
    track = Track.from_dict(_track_payload())
    assert track.title == "Song"
    assert track.duration == 215
    assert track.downloadable is True
    assert track.play_count == 900
    assert track.user.name == "Artist"
    assert track.user.handle == "artist"
    assert track.user.is_verified is True


def test_missing_keys_keep_defaults():
    track = Track.from_dict({"title": "Only"})
    assert track.title == "Only"
    assert track.duration == 0
    assert track.user == User()


def test_null_values_keep_defaults():
    track = Track.from_dict({"title": None, "user": None, "duration": None})
    assert track == Track()


def test_unknown_keys_are_ignored():
    user = User.from_dict({"name": "A", "cover_photo": {"x": "y"}})
    assert user == User(name="A")


def test_wrong_type_raises_value_error():
    with pytest.raises(ValueError):
        Track.from_dict({"duration": "215"})


def test_bool_is_not_accepted_as_int():
    with pytest.raises(ValueError):
        User.from_dict({"track_count": True})


def test_float_is_not_accepted_as_int():
    with pytest.raises(ValueError):
        Track.from_dict({"duration": 1.5})


def test_non_object_raises_value_error():
    with pytest.raises(ValueError):
        Track.from_dict(["not", "an", "object"])


def test_nested_user_must_be_object():
    with pytest.raises(ValueError):
        Track.from_dict({"user": "someone"})


def test_track_favorite_uses_favorite_item_id():
    fav = TrackFavorite.from_dict({"favorite_item_id": "t9", "user_id": "u3"})
    assert fav.track_id == "t9"
    assert fav.user_id == "u3"


def test_track_favorite_ignores_track_id_key():
    fav = TrackFavorite.from_dict({"track_id": "t9"})
    assert fav.track_id == ""


def test_playlist_from_dict():
    playlist = Playlist.from_dict(
        {
            "playlist_name": "Mix",
            "is_album": True,
            "total_play_count": 77,
            "user": {"name": "Curator"},
        }
    )
    assert playlist.playlist_name == "Mix"
    assert playlist.is_album is True
    assert playlist.total_play_count == 77
    assert playlist.user.name == "Curator"