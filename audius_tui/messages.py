"""Messages passed through the UI event loop and the commands that make them."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from .models import Track
from .utils import get_data_path

Cmd = Callable[[], Any]


@dataclass(frozen=True)
class KeyMsg:
    """A key press, named as in ``"enter"``, ``"ctrl+c"`` or ``"j"``."""

    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class MouseMsg:
    """A mouse event at a terminal cell."""

    x: int
    y: int
    button: str = "left"


@dataclass(frozen=True)
class WindowSizeMsg:
    width: int
    height: int


@dataclass(frozen=True)
class TickMsg:
    time: float


@dataclass(frozen=True)
class QuitMsg:
    """Asks the event loop to stop."""


@dataclass(frozen=True)
class PlayTrackMsg:
    track: Track


@dataclass(frozen=True)
class PlayTracksMsg:
    tracks: list[Track] = field(default_factory=list)
    queue_pos: int = 0


def play_track_cmd(track: Track) -> Cmd:
    return lambda: PlayTrackMsg(track=track)


def play_tracks_cmd(tracks: list[Track], pos: int) -> Cmd:
    return lambda: PlayTracksMsg(tracks=tracks, queue_pos=pos)


def log_cmd(text: str) -> Cmd:
    """Command that appends ``text`` and a separator to the debug log."""

    def run() -> None:
        path = os.path.join(get_data_path(), "debug.log")
        with open(path, "a", encoding="utf-8") as handle:
            handle.write(text + "\n---\n")
        return None

    return run


def batch(*args: Optional[Cmd]) -> Optional[Cmd]:
    """Combine commands into one.

    ``None`` entries are dropped. With nothing left the result is ``None``;
    with one command it is that command; otherwise the combined command
    returns a tuple of the commands for the event loop to run concurrently.
    """
    cmds = tuple(cmd for cmd in args if cmd is not None)
    if not cmds:
        return None
    if len(cmds) == 1:
        return cmds[0]
    return lambda: cmds