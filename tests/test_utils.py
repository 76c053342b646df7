import os
import re

import pytest

from audius_tui.utils import (
    error_log,
    get_data_path,
    get_duration_text,
    get_length_text,
    log,
)


@pytest.fixture
def cache_root(tmp_path, monkeypatch):
    for name in ("HOME", "XDG_CACHE_HOME", "LOCALAPPDATA"):
        monkeypatch.setenv(name, str(tmp_path))
    return tmp_path


def _parse_duration(text):
    total = 0
    for part in text.rstrip("s").split(":"):
        total = total * 60 + int(part)
    return total


def _parse_length(text):
    match = re.fullmatch(r"(?:(\d+)h )?(\d+)m (\d+)s", text)
    assert match is not None, text
    hours, minutes, secs = match.groups()
    return int(hours or 0) * 3600 + int(minutes) * 60 + int(secs)


def test_duration_pinned_values():
    assert get_duration_text(65) == "1:05"
    assert get_duration_text(3725) == "1:02:05s"


def test_length_pinned_value():
    assert get_length_text(3725) == "1h 02m 05s"


@pytest.mark.parametrize("seconds", range(0, 7300, 7))
def test_duration_round_trip(seconds):
    text = get_duration_text(seconds)
    assert _parse_duration(text) == seconds


@pytest.mark.parametrize("seconds", range(0, 7300, 7))
def test_length_round_trip(seconds):
    assert _parse_length(get_length_text(seconds)) == seconds


@pytest.mark.parametrize("seconds", [0, 9, 10, 59, 60, 599, 3599])
def test_under_an_hour_has_one_colon_and_two_digit_seconds(seconds):
    text = get_duration_text(seconds)
    minutes, secs = text.split(":")
    assert len(secs) == 2
    assert int(minutes) == seconds // 60


@pytest.mark.parametrize("seconds", [3600, 3661, 7199, 36000])
def test_hours_marked_with_trailing_s(seconds):
    text = get_duration_text(seconds)
    assert text.endswith("s")
    assert text.count(":") == 2


def test_data_path_is_inside_cache_dir(cache_root):
    path = get_data_path()
    assert os.path.basename(path) == "audius_cli_player_test"
    assert path.startswith(str(cache_root))


def test_log_appends_lines(cache_root):
    os.makedirs(get_data_path())
    log("first")
    log("second")
    with open(os.path.join(get_data_path(), "debug.log"), encoding="utf-8") as fh:
        assert fh.read() == "first\nsecond\n"


def test_error_log_prefixes_message(cache_root):
    os.makedirs(get_data_path())
    error_log("broken")
    with open(os.path.join(get_data_path(), "debug.log"), encoding="utf-8") as fh:
        assert fh.read() == "ERROR: broken\n"


def test_log_without_data_dir_raises(cache_root):
    with pytest.raises(OSError):
        log("nowhere")