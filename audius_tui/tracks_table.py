"""A scrollable table of tracks and a view that fetches its contents."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

from rich.cells import cell_len, set_cell_size

from .api import ApiError
from .messages import Cmd, KeyMsg, batch, log_cmd, play_tracks_cmd
from .models import Track
from .styles import INACTIVE, WHITE, Style, border_container, render
from .utils import get_length_text

_COLUMNS: tuple[tuple[str, int], ...] = (
    ("#", 3),
    ("Title", 48),
    ("Artist", 30),
    ("Length", 11),
)
_EMPTY_ROW = ("", "", "", "")
_LOADING_ROW = ("", "loading...", "", "")

_HEADER_STYLE = Style(
    bold=True,
    border="normal",
    border_foreground="240",
    border_sides=(False, False, True, False),
)
_FOCUSED_SELECTED = Style(foreground="229", background="57", bold=True)
_BLURRED_SELECTED = Style(foreground=WHITE)
_ACTIVE_CONTAINER = border_container()
_INACTIVE_CONTAINER = Style(border="rounded", border_foreground=INACTIVE)


def _cell(value: str, width: int) -> str:
    if cell_len(value) > width:
        value = set_cell_size(value, width - 1) + "…"
    return " " + set_cell_size(value, width) + " "


class _Table:
    """Rows with a cursor and a fixed-height window onto them."""

    def __init__(
        self,
        columns: Sequence[tuple[str, int]],
        rows: Sequence[Sequence[str]],
        height: int,
    ) -> None:
        self.columns = tuple(columns)
        self.rows = [tuple(row) for row in rows]
        self.height = height
        self.cursor = 0
        self.offset = 0
        self.focused = True
        self.selected_style = _BLURRED_SELECTED

    def set_rows(self, rows: Sequence[Sequence[str]]) -> None:
        self.rows = [tuple(row) for row in rows]
        self.set_cursor(self.cursor)

    def set_cursor(self, idx: int) -> None:
        self.cursor = max(0, min(idx, len(self.rows) - 1))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.height:
            self.offset = self.cursor - self.height + 1
        self.offset = max(0, min(self.offset, len(self.rows) - self.height))

    def update(self, msg: Any) -> None:
        if not self.focused or not isinstance(msg, KeyMsg):
            return
        key = msg.key
        half = max(self.height // 2, 1)
        if key in ("up", "k"):
            self.set_cursor(self.cursor - 1)
        elif key in ("down", "j"):
            self.set_cursor(self.cursor + 1)
        elif key in ("pgup", "b"):
            self.set_cursor(self.cursor - self.height)
        elif key in ("pgdown", "f", " "):
            self.set_cursor(self.cursor + self.height)
        elif key in ("u", "ctrl+u"):
            self.set_cursor(self.cursor - half)
        elif key in ("d", "ctrl+d"):
            self.set_cursor(self.cursor + half)
        elif key in ("home", "g"):
            self.set_cursor(0)
        elif key in ("end", "G"):
            self.set_cursor(len(self.rows) - 1)

    def view(self) -> str:
        head = "".join(_cell(title, width) for title, width in self.columns)
        lines = [render(head, _HEADER_STYLE)]
        row_width = sum(width + 2 for _, width in self.columns)
        visible = self.rows[self.offset : self.offset + self.height]
        for idx, row in enumerate(visible, start=self.offset):
            text = "".join(
                _cell(value, width) for value, (_, width) in zip(row, self.columns)
            )
            lines.append(render(text, self.selected_style) if idx == self.cursor else text)
        lines.extend([" " * row_width] * (self.height - len(visible)))
        return "\n".join(lines)


class TracksTable:
    """Table listing tracks; enter plays the queue from the selected track."""

    def __init__(self, height: int, on_select: Callable[[Track], Optional[Cmd]]) -> None:
        self._table = _Table(_COLUMNS, [_EMPTY_ROW], height)
        self._on_select = on_select
        self.focused = False
        self.is_loading = False
        self.tracks: list[Track] = []

    @property
    def cursor(self) -> int:
        return self._table.cursor

    def update(self, msg: Any) -> Optional[Cmd]:
        cmds: list[Optional[Cmd]] = []
        if isinstance(msg, KeyMsg):
            if msg.key == " ":
                return None
            if msg.key == "enter" and 0 <= self.cursor < len(self.tracks):
                track = self.tracks[self.cursor]
                cmds += [self._on_select(track), play_tracks_cmd(self.tracks, self.cursor)]
        self._table.update(msg)
        return batch(*cmds)

    def view(self) -> str:
        style = _ACTIVE_CONTAINER if self.focused else _INACTIVE_CONTAINER
        return render(self._table.view(), style)

    def set_cursor(self, idx: int) -> None:
        self._table.set_cursor(idx)

    def focus(self) -> None:
        self.focused = True
        self._table.focused = True
        self._table.selected_style = _FOCUSED_SELECTED

    def blur(self) -> None:
        self.focused = False
        self._table.focused = False
        self._table.selected_style = _BLURRED_SELECTED

    def set_is_loading(self, value: bool) -> None:
        self.is_loading = value
        if value:
            self._table.set_rows([_LOADING_ROW])

    def update_tracks(self, tracks: Sequence[Track]) -> None:
        self.tracks = list(tracks)
        self._table.set_rows(
            [
                (str(number), track.title, track.user.name, get_length_text(track.duration))
                for number, track in enumerate(self.tracks, start=1)
            ]
        )


@dataclass(frozen=True)
class TracksResponseMsg:
    """Tracks fetched for the view with the given title."""

    view_title: str
    tracks: list[Track] = field(default_factory=list)


class TracksTableView:
    """A titled tracks table filled by a fetch function."""

    def __init__(self, title: str, fetch_tracks: Callable[[], Sequence[Track]]) -> None:
        self.title = title
        self._fetch_tracks = fetch_tracks
        self.table = TracksTable(13, lambda track: None)
        self.table.set_is_loading(True)
        self.table.focus()
        self.focused = False

    def init(self) -> Cmd:
        return self.fetch_tracks_cmd()

    def fetch_tracks_cmd(self) -> Cmd:
        """Command that fetches the tracks; on failure it yields a log command."""

        def run() -> Any:
            try:
                tracks = self._fetch_tracks()
            except (ApiError, OSError, ValueError) as exc:
                return log_cmd(str(exc))
            return TracksResponseMsg(view_title=self.title, tracks=list(tracks))

        return run

    def update(self, msg: Any) -> Optional[Cmd]:
        cmds: list[Optional[Cmd]] = []
        if isinstance(msg, TracksResponseMsg) and msg.view_title == self.title:
            self.table.update_tracks(msg.tracks)
            self.table.set_is_loading(False)
        if self.focused:
            cmds.append(self.table.update(msg))
        return batch(*cmds)

    def view(self) -> str:
        return self.table.view()

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False