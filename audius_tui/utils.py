"""Data directory, time formatting and debug logging helpers."""

from __future__ import annotations

import math
import os
import sys

_APP_DIR_NAME = "audius_cli_player_test"
_DEBUG_LOG = "debug.log"


def _user_cache_dir() -> str:
    if sys.platform == "win32":
        return os.environ.get("LOCALAPPDATA", "")
    home = os.environ.get("HOME", "")
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Caches") if home else ""
    xdg = os.environ.get("XDG_CACHE_HOME", "")
    if xdg:
        return xdg
    return os.path.join(home, ".cache") if home else ""


def get_data_path() -> str:
    """Return the directory holding the application's data files."""
    return os.path.join(_user_cache_dir(), _APP_DIR_NAME)


def _split(seconds: int) -> tuple[int, int, int]:
    hours = int(seconds / 3600)
    minutes = int(math.fmod(seconds, 3600) / 60)
    secs = int(math.fmod(seconds, 60))
    return hours, minutes, secs


def _pad(value: int) -> str:
    return ("0" if value < 10 else "") + str(value)


def get_duration_text(seconds: int) -> str:
    """Format a duration as ``m:ss`` or, from one hour on, ``h:mm:sss``."""
    hours, minutes, secs = _split(seconds)
    if hours == 0:
        return f"{minutes}:{_pad(secs)}"
    return f"{hours}:{_pad(minutes)}:{_pad(secs)}s"


def get_length_text(seconds: int) -> str:
    """Format a duration as ``Mm SSs`` or, from one hour on, ``Hh MMm SSs``."""
    hours, minutes, secs = _split(seconds)
    if hours == 0:
        return f"{minutes}m {_pad(secs)}s"
    return f"{hours}h {_pad(minutes)}m {_pad(secs)}s"


def log(message: str) -> None:
    """Append a line to the debug log in the data directory."""
    path = os.path.join(get_data_path(), _DEBUG_LOG)
    with open(path, "a", encoding="utf-8") as handle:
        handle.write(message + "\n")


def error_log(message: str) -> None:
    """Append an error line to the debug log."""
    log("ERROR: " + message)