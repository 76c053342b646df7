import re

import pytest

from audius_tui import utils
from audius_tui.api import ApiError
from audius_tui.messages import KeyMsg, PlayTracksMsg
from audius_tui.models import Track, User
from audius_tui.tracks_table import TracksResponseMsg, TracksTable, TracksTableView

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text):
    return ANSI.sub("", text)


def make_tracks(count):
    return [
        Track(id=f"t{n}", title=f"Song {n}", user=User(name=f"Artist {n}"), duration=65 + n)
        for n in range(count)
    ]


@pytest.fixture
def table():
    t = TracksTable(3, lambda track: None)
    t.update_tracks(make_tracks(5))
    t.focus()
    return t


def test_rows_show_track_details():
    t = TracksTable(5, lambda track: None)
    tracks = make_tracks(2)
    t.update_tracks(tracks)
    view = plain(t.view())
    assert "Song 0" in view and "Artist 1" in view
    assert utils.get_length_text(tracks[0].duration) in view
    assert t.tracks == tracks


def test_loading_rows():
    t = TracksTable(5, lambda track: None)
    t.set_is_loading(True)
    assert t.is_loading
    assert "loading..." in plain(t.view())


def test_column_headers_rendered():
    view = plain(TracksTable(2, lambda track: None).view())
    assert "Title" in view and "Artist" in view and "Length" in view


def test_navigation_keys(table):
    table.update(KeyMsg("down"))
    table.update(KeyMsg("j"))
    assert table.cursor == 2
    table.update(KeyMsg("k"))
    assert table.cursor == 1
    table.update(KeyMsg("G"))
    assert table.cursor == 4
    table.update(KeyMsg("g"))
    assert table.cursor == 0


def test_cursor_clamped(table):
    table.update(KeyMsg("up"))
    assert table.cursor == 0
    table.update(KeyMsg("f"))
    table.update(KeyMsg("f"))
    assert table.cursor == len(table.tracks) - 1


def test_page_moves_by_height(table):
    table.update(KeyMsg("f"))
    assert table.cursor == 3
    table.update(KeyMsg("b"))
    assert table.cursor == 0


def test_blurred_table_ignores_keys(table):
    table.blur()
    table.update(KeyMsg("down"))
    assert table.cursor == 0
    assert table.focused is False


def test_space_is_swallowed(table):
    assert table.update(KeyMsg(" ")) is None
    assert table.cursor == 0


def test_enter_plays_from_cursor(table):
    table.update(KeyMsg("down"))
    cmd = table.update(KeyMsg("enter"))
    msg = cmd()
    assert msg == PlayTracksMsg(tracks=table.tracks, queue_pos=1)


def test_enter_calls_on_select():
    selected = []
    t = TracksTable(3, lambda track: selected.append(track))
    tracks = make_tracks(2)
    t.update_tracks(tracks)
    t.focus()
    t.update(KeyMsg("enter"))
    assert selected == [tracks[0]]


def test_enter_without_tracks_does_nothing():
    t = TracksTable(3, lambda track: None)
    t.focus()
    assert t.update(KeyMsg("enter")) is None


def test_scrolling_keeps_cursor_visible(table):
    table.update(KeyMsg("G"))
    view = plain(table.view())
    assert "Song 4" in view
    assert "Song 0" not in view


def test_focus_changes_only_colours(table):
    focused = table.view()
    table.blur()
    blurred = table.view()
    assert focused != blurred
    assert plain(focused) == plain(blurred)


def test_view_fetch_command_returns_tracks():
    tracks = make_tracks(2)
    view = TracksTableView("Trending Tracks", lambda: tracks)
    msg = view.init()()
    assert msg == TracksResponseMsg(view_title="Trending Tracks", tracks=tracks)


def test_view_starts_loading():
    view = TracksTableView("Favorites", lambda: [])
    assert view.table.is_loading
    assert view.focused is False
    assert view.table.focused is True


def test_view_applies_matching_response():
    tracks = make_tracks(2)
    view = TracksTableView("Favorites", lambda: tracks)
    view.update(TracksResponseMsg("Favorites", tracks))
    assert view.table.tracks == tracks
    assert not view.table.is_loading
    assert "Song 1" in plain(view.view())


def test_view_ignores_other_titles():
    view = TracksTableView("Favorites", lambda: [])
    view.update(TracksResponseMsg("Trending Tracks", make_tracks(2)))
    assert view.table.tracks == []
    assert view.table.is_loading


def test_view_passes_keys_only_when_focused():
    tracks = make_tracks(3)
    view = TracksTableView("T", lambda: tracks)
    view.update(TracksResponseMsg("T", tracks))
    view.update(KeyMsg("down"))
    assert view.table.cursor == 0
    view.focus()
    view.update(KeyMsg("down"))
    assert view.table.cursor == 1
    msg = view.update(KeyMsg("enter"))()
    assert msg.queue_pos == 1


def test_fetch_error_becomes_log_command(tmp_path, monkeypatch):
    for name in ("XDG_CACHE_HOME", "LOCALAPPDATA", "HOME"):
        monkeypatch.setenv(name, str(tmp_path))
    data_dir = utils.get_data_path()
    (tmp_path / data_dir).mkdir(parents=True, exist_ok=True)

    def failing():
        raise ApiError("boom")

    result = TracksTableView("T", failing).fetch_tracks_cmd()()
    assert not isinstance(result, TracksResponseMsg)
    assert result() is None
    with open(f"{data_dir}/debug.log", encoding="utf-8") as handle:
        assert handle.read() == "boom\n---\n"