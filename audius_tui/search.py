"""Search view: a text input above a table of matching tracks."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Optional

from . import api
from .messages import Cmd, KeyMsg, MouseMsg, batch
from .models import Track
from .styles import Style, border_container, join_vertical, render
from .tracks_table import TracksTable

_PLACEHOLDER_STYLE = Style(foreground="240")
_CURSOR_ON = "\x1b[7m"
_CURSOR_OFF = "\x1b[0m"


@dataclass(frozen=True)
class SearchResultsMsg:
    tracks: list[Track] = field(default_factory=list)


@dataclass(frozen=True)
class SearchErrorMsg:
    error: Exception


def fetch_search_results_cmd(query: str) -> Cmd:
    """Command that searches for tracks matching ``query``."""

    def run() -> SearchResultsMsg | SearchErrorMsg:
        try:
            return SearchResultsMsg(tracks=api.get_search_tracks(query))
        except api.ApiError as exc:
            return SearchErrorMsg(error=exc)

    return run


class TextInput:
    """Single-line text entry with a cursor."""

    prompt = "> "

    def __init__(self, placeholder: str = "") -> None:
        self.placeholder = placeholder
        self.value = ""
        self.position = 0
        self.focused = False

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def reset(self) -> None:
        self.value = ""
        self.position = 0

    def update(self, msg: Any) -> Optional[Cmd]:
        """Apply an editing key when focused."""
        if not self.focused or not isinstance(msg, KeyMsg):
            return None
        key, pos, value = msg.key, self.position, self.value
        if key in ("backspace", "ctrl+h"):
            if pos > 0:
                self.value = value[: pos - 1] + value[pos:]
                self.position = pos - 1
        elif key in ("delete", "ctrl+d"):
            self.value = value[:pos] + value[pos + 1 :]
        elif key in ("left", "ctrl+b"):
            self.position = max(pos - 1, 0)
        elif key in ("right", "ctrl+f"):
            self.position = min(pos + 1, len(value))
        elif key in ("home", "ctrl+a"):
            self.position = 0
        elif key in ("end", "ctrl+e"):
            self.position = len(value)
        elif key == "ctrl+u":
            self.value = value[pos:]
            self.position = 0
        elif key == "ctrl+k":
            self.value = value[:pos]
        elif len(key) == 1 and key.isprintable():
            self.value = value[:pos] + key + value[pos:]
            self.position = pos + 1
        return None

    def view(self) -> str:
        if not self.value and self.placeholder:
            text = self.placeholder
            if self.focused:
                return (
                    self.prompt
                    + _CURSOR_ON + text[0] + _CURSOR_OFF
                    + render(text[1:], _PLACEHOLDER_STYLE)
                )
            return self.prompt + render(text, _PLACEHOLDER_STYLE)
        if not self.focused:
            return self.prompt + self.value
        pos = self.position
        at = self.value[pos : pos + 1] or " "
        return (
            self.prompt
            + self.value[:pos]
            + _CURSOR_ON + at + _CURSOR_OFF
            + self.value[pos + 1 :]
        )


class _Focus(enum.Enum):
    INPUT = enum.auto()
    TABLE = enum.auto()


class SearchView:
    """Search box and results table; tab switches between them."""

    def __init__(self) -> None:
        self.input = TextInput("Search")
        self.input.focus()
        self.table = TracksTable(10, lambda track: None)
        self.focused = False
        self._focus = _Focus.INPUT

    def init(self) -> Optional[Cmd]:
        return None

    def update(self, msg: Any) -> Optional[Cmd]:
        cmds: list[Optional[Cmd]] = []
        if self.focused:
            if self._focus is _Focus.INPUT:
                cmds.append(self.input.update(msg))
            else:
                cmds.append(self.table.update(msg))

        if isinstance(msg, MouseMsg):
            if msg.button == "left":
                in_x = 1 <= msg.x <= 99
                if in_x and 2 <= msg.y <= 4:
                    self.focus_input()
                elif in_x and 5 <= msg.y <= 18:
                    self.focus_table()
        elif isinstance(msg, KeyMsg):
            if self.focused:
                if msg.key == "enter":
                    if self._focus is _Focus.INPUT:
                        cmds.append(fetch_search_results_cmd(self.input.value))
                        self.focus_table()
                        self.table.set_cursor(0)
                        self.table.set_is_loading(True)
                elif msg.key == "/":
                    if self._focus is not _Focus.INPUT:
                        self.focus_input()
                        return None
                elif msg.key == "tab":
                    if self._focus is _Focus.INPUT:
                        self.focus_table()
                    else:
                        self.focus_input()
                    return None
        elif isinstance(msg, SearchResultsMsg):
            self.table.update_tracks(msg.tracks)
            self.table.set_is_loading(False)

        return batch(*cmds)

    def view(self) -> str:
        border_color = "242" if self._focus is _Focus.TABLE else "62"
        input_style = Style(
            border=border_container().border,
            border_foreground=border_color,
            width=100,
            padding=(0, 2, 0, 2),
        )
        return join_vertical(
            "left",
            render(self.input.view(), input_style),
            self.table.view(),
        )

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    def focus_input(self) -> None:
        self._focus = _Focus.INPUT
        self.input.focus()
        self.table.blur()

    def focus_table(self) -> None:
        self._focus = _Focus.TABLE
        self.input.blur()
        self.table.focus()

    def input_focused(self) -> bool:
        return self._focus is _Focus.INPUT