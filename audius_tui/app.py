"""Top-level application: tabs of track lists, search, player and help."""

from __future__ import annotations

import argparse
import dataclasses
import enum
import os
import queue
import sys
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

from . import api
from .data import DataManager
from .keys import AppKeyMap, KeyBinding
from .messages import (
    Cmd,
    KeyMsg,
    MouseMsg,
    QuitMsg,
    WindowSizeMsg,
    batch,
    log_cmd,
)
from .models import Track
from .player import Player
from .queue_view import QueueView
from .search import SearchView, TextInput
from .styles import (
    GREY2,
    GREY3,
    PRIMARY,
    Style,
    active_header,
    header,
    join_horizontal,
    join_vertical,
    render,
)
from .tracks_table import TracksTableView
from .utils import error_log, get_data_path


class AppView(enum.Enum):
    """Which main view the application shows."""

    TRENDING = enum.auto()
    UNDERGROUND = enum.auto()
    FAVORITES = enum.auto()
    SEARCH = enum.auto()
    QUEUE = enum.auto()


# Tab header columns on the second terminal row, for mouse clicks.
_TAB_COLUMNS = (
    (11, 31, AppView.TRENDING),
    (34, 57, AppView.UNDERGROUND),
    (60, 74, AppView.FAVORITES),
    (77, 88, AppView.SEARCH),
)
_TABS = (
    (AppView.TRENDING, "(T)rending Tracks", 1),
    (AppView.UNDERGROUND, "(U)nderground Tracks", 2),
    (AppView.FAVORITES, "(F)avorites", 2),
    (AppView.SEARCH, "(S)earch", 2),
)

_HELP_KEY = Style(foreground=GREY3)
_HELP_DESC = Style(foreground=GREY2)
_HELP_SEP = Style(foreground="#3C3C3C")
_HELP_CONTAINER = Style(width=100, align="left", margin=(0, 0, 0, 2))
_TABS_CONTAINER = Style(align="center", width=100, margin=(1, 0, 0, 0))
_HANDLE_HEADER_CONTAINER = Style(align="center", margin=(1, 0, 0, 0))
_HANDLE_INPUT_BOX = Style(
    border="rounded", border_foreground=PRIMARY, width=32, padding=(0, 2, 0, 2)
)


def _quit() -> QuitMsg:
    return QuitMsg()


def _sequence(*cmds: Optional[Cmd]) -> Cmd:
    """Command whose result, a list, is run one command after another."""
    steps = [cmd for cmd in cmds if cmd is not None]
    return lambda: steps


def set_user_id_from_handle(handle: str, manager: DataManager) -> Cmd:
    """Command that looks up a user by handle and stores the user's id."""

    def run() -> Optional[Cmd]:
        try:
            user = api.get_user_by_handle(handle)
        except api.ApiError as exc:
            return log_cmd(str(exc))
        manager.set_user_id(user.id)
        return None

    return run


def get_my_favs(manager: DataManager) -> list[Track]:
    """Favourite tracks of the stored user, or none if no user is set."""
    user_id = manager.get_user_id()
    if not user_id:
        return []
    return api.get_user_favorite_tracks(user_id)


def _short_help_view(bindings: Sequence[KeyBinding]) -> str:
    parts = [
        render(binding.help_key, _HELP_KEY) + " " + render(binding.help_desc, _HELP_DESC)
        for binding in bindings
        if binding.keys
    ]
    return render(" • ", _HELP_SEP).join(parts)


def _full_help_view(groups: Sequence[Sequence[KeyBinding]]) -> str:
    columns = []
    for group in groups:
        shown = [binding for binding in group if binding.keys]
        if not shown:
            continue
        keys = render("\n".join(b.help_key for b in shown), _HELP_KEY)
        descs = render("\n".join(b.help_desc for b in shown), _HELP_DESC)
        columns.append(join_horizontal("top", keys, " ", descs))
    blocks: list[str] = []
    for column in columns:
        if blocks:
            blocks.append(render("    ", _HELP_SEP))
        blocks.append(column)
    return join_horizontal("top", *blocks) if blocks else ""


class App:
    """The whole terminal application."""

    def __init__(
        self,
        player: Optional[Player] = None,
        data_manager: Optional[DataManager] = None,
    ) -> None:
        self.data_manager = data_manager if data_manager is not None else DataManager()
        self.current_view = AppView.TRENDING
        self.player = player if player is not None else Player()
        self.trending_view = TracksTableView("Trending Tracks", api.get_trending_tracks)
        self.underground_view = TracksTableView(
            "Underground Tracks", api.get_underground_tracks
        )
        self.favorites_view = TracksTableView(
            "Favorites", lambda: get_my_favs(self.data_manager)
        )
        self.queue_view = QueueView()
        self.search_view = SearchView()
        self.key_map = AppKeyMap()
        self.show_full_help = False
        self.user_handle_input_visible = False
        self.user_handle_input = TextInput("Enter Handle")
        self.user_handle_input.focus()
        self.trending_view.focus()

    def init(self) -> Optional[Cmd]:
        try:
            os.makedirs(get_data_path(), exist_ok=True)
        except OSError:
            pass
        return batch(
            self.player.init(),
            self.trending_view.init(),
            self.underground_view.init(),
            self.favorites_view.init(),
            self.queue_view.init(),
            self.search_view.init(),
        )

    def update(self, msg: Any) -> Optional[Cmd]:
        cmds: list[Optional[Cmd]] = []
        search_input_focused = (
            self.current_view is AppView.SEARCH and self.search_view.input_focused()
        )

        if isinstance(msg, WindowSizeMsg):
            pass
        elif isinstance(msg, MouseMsg):
            if msg.button == "left" and msg.y == 1:
                for low, high, target in _TAB_COLUMNS:
                    if low <= msg.x <= high:
                        self.update_view_focus(target)
                        break
        elif isinstance(msg, KeyMsg):
            keys = self.key_map
            if keys.quit.matches(msg):
                cmds.append(_quit)

            if search_input_focused:
                cmds.append(self.search_view.update(msg))
                return batch(*cmds)

            if self.user_handle_input_visible:
                if msg.key == "enter":
                    handle = self.user_handle_input.value
                    cmds.append(
                        _sequence(
                            log_cmd("Looking up user by handle: " + handle),
                            set_user_id_from_handle(handle, self.data_manager),
                            self.favorites_view.fetch_tracks_cmd(),
                        )
                    )
                    self.user_handle_input.reset()
                    self.user_handle_input_visible = False
                    self.update_view_focus(AppView.FAVORITES)
                elif keys.toggle_user_id_input.matches(msg):
                    self.user_handle_input_visible = False
                else:
                    cmds.append(self.user_handle_input.update(msg))
                return batch(*cmds)

            if keys.help.matches(msg):
                self.show_full_help = not self.show_full_help
            elif keys.toggle_user_id_input.matches(msg):
                self.user_handle_input_visible = True
            elif keys.underground.matches(msg):
                self.update_view_focus(AppView.UNDERGROUND)
                return batch(*cmds)
            elif keys.trending.matches(msg):
                self.update_view_focus(AppView.TRENDING)
                return batch(*cmds)
            elif keys.favorites.matches(msg):
                self.update_view_focus(AppView.FAVORITES)
                return batch(*cmds)
            elif keys.search.matches(msg):
                self.update_view_focus(AppView.SEARCH)
                if msg.key == "/":
                    self.search_view.focus_input()
                return batch(*cmds)

        for component in (
            self.trending_view,
            self.underground_view,
            self.favorites_view,
            self.search_view,
            self.queue_view,
            self.player,
        ):
            cmds.append(component.update(msg))
        return batch(*cmds)

    def view(self) -> str:
        if self.user_handle_input_visible:
            title = render(
                render("User Handle Input", active_header()), _HANDLE_HEADER_CONTAINER
            )
            box = render(self.user_handle_input.view(), _HANDLE_INPUT_BOX)
            return join_vertical("left", title, box)

        main_views = {
            AppView.TRENDING: self.trending_view,
            AppView.UNDERGROUND: self.underground_view,
            AppView.FAVORITES: self.favorites_view,
            AppView.SEARCH: self.search_view,
        }
        main_view = main_views.get(self.current_view, self.trending_view)

        tabs = [
            render(
                label,
                dataclasses.replace(
                    active_header() if view is self.current_view else header(),
                    margin=(0, 0, 0, left),
                ),
            )
            for view, label, left in _TABS
        ]
        header_tabs = render(join_horizontal("center", *tabs), _TABS_CONTAINER)

        return join_vertical(
            "left",
            header_tabs,
            main_view.view(),
            self.player.view(),
            self._help_text(),
        )

    def _help_text(self) -> str:
        if self.show_full_help:
            groups = self.player.key_map.full_help() + self.key_map.full_help()
            return render(_full_help_view(groups), _HELP_CONTAINER)
        return render(_short_help_view(self.key_map.short_help()), _HELP_CONTAINER)

    def update_view_focus(self, new_view: AppView) -> None:
        """Switch to ``new_view``, focusing it and blurring the others."""
        if self.current_view is new_view:
            return
        self.current_view = new_view
        self.trending_view.blur()
        self.underground_view.blur()
        self.favorites_view.blur()
        self.search_view.blur()
        focusable = {
            AppView.TRENDING: self.trending_view,
            AppView.UNDERGROUND: self.underground_view,
            AppView.FAVORITES: self.favorites_view,
            AppView.SEARCH: self.search_view,
        }
        target = focusable.get(new_view)
        if target is not None:
            target.focus()


_SEQUENCE_NAMES = {
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_TAB": "tab",
    "KEY_HOME": "home",
    "KEY_END": "end",
    "KEY_PGUP": "pgup",
    "KEY_PGDOWN": "pgdown",
}
_CHAR_NAMES = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x1b": "esc",
}
_MOUSE_ON = "\x1b[?1003h\x1b[?1006h"
_MOUSE_OFF = "\x1b[?1003l\x1b[?1006l"


def _key_name(keystroke: Any) -> str:
    if keystroke.is_sequence and keystroke.name:
        name = _SEQUENCE_NAMES.get(keystroke.name)
        if name is not None:
            return name
        return keystroke.name.removeprefix("KEY_").lower()
    text = str(keystroke)
    if text in _CHAR_NAMES:
        return _CHAR_NAMES[text]
    if len(text) == 1 and ord(text) < 32:
        return "ctrl+" + chr(ord(text) + 96)
    return text


def _mouse_message(tail: str) -> Optional[MouseMsg]:
    """Decode an SGR mouse report such as ``[<0;12;2M``."""
    if not tail.startswith("[<") or tail[-1:] not in ("M", "m"):
        return None
    try:
        code, column, row = (int(part) for part in tail[2:-1].split(";"))
    except ValueError:
        return None
    if tail.endswith("m"):
        button = "release"
    elif code & 32:
        button = "motion"
    elif code & 3 == 0:
        button = "left"
    elif code & 3 == 1:
        button = "middle"
    else:
        button = "right"
    return MouseMsg(x=column - 1, y=row - 1, button=button)


class _Runtime:
    """Event loop: reads input, runs commands and redraws the screen."""

    def __init__(self, app: App, term: Any) -> None:
        self.app = app
        self.term = term
        self._messages: queue.Queue[Any] = queue.Queue()
        self._pool = ThreadPoolExecutor(max_workers=8)
        self._stop = threading.Event()

    def run(self) -> None:
        term = self.term
        with term.fullscreen(), term.raw(), term.hidden_cursor():
            self._write(_MOUSE_ON)
            reader = threading.Thread(target=self._read_input, daemon=True)
            reader.start()
            self._messages.put(WindowSizeMsg(width=term.width, height=term.height))
            self._dispatch(self.app.init())
            self._draw()
            try:
                while True:
                    msg = self._messages.get()
                    if isinstance(msg, QuitMsg):
                        break
                    self._dispatch(self.app.update(msg))
                    self._draw()
            finally:
                self._stop.set()
                self._write(_MOUSE_OFF)
                self._pool.shutdown(wait=False, cancel_futures=True)

    def _write(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def _draw(self) -> None:
        term = self.term
        lines = self.app.view().split("\n")
        frame = "".join(
            term.move_xy(0, row) + line + term.clear_eol
            for row, line in enumerate(lines)
        )
        self._write(frame + term.move_xy(0, len(lines)) + term.clear_eos)

    def _dispatch(self, cmd: Optional[Cmd]) -> None:
        if cmd is not None and not self._stop.is_set():
            self._pool.submit(self._execute, cmd)

    def _execute(self, cmd: Cmd) -> None:
        self._deliver(self._call(cmd))

    def _call(self, cmd: Callable[[], Any]) -> Any:
        try:
            return cmd()
        except Exception as exc:  # a failing command must not stop the loop
            try:
                error_log(str(exc))
            except OSError:
                pass
            return None

    def _deliver(self, result: Any) -> None:
        if result is None:
            return
        if isinstance(result, list):
            for step in result:
                self._deliver(self._call(step))
        elif isinstance(result, tuple):
            for cmd in result:
                self._dispatch(cmd)
        elif callable(result):
            self._deliver(self._call(result))
        else:
            self._messages.put(result)

    def _read_input(self) -> None:
        term = self.term
        while not self._stop.is_set():
            keystroke = term.inkey(timeout=0.1)
            if not keystroke:
                continue
            if str(keystroke) == "\x1b":
                tail = ""
                while len(tail) < 32:
                    extra = term.inkey(timeout=0.01)
                    if not extra:
                        break
                    tail += str(extra)
                    if tail.startswith("[<") and tail[-1] in "Mm":
                        break
                if tail:
                    mouse = _mouse_message(tail)
                    if mouse is not None:
                        self._messages.put(mouse)
                    continue
                self._messages.put(KeyMsg("esc"))
                continue
            self._messages.put(KeyMsg(_key_name(keystroke)))


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the terminal player."""
    parser = argparse.ArgumentParser(
        prog="audius-tui", description="Browse and play tracks in the terminal."
    )
    parser.parse_args(argv)
    try:
        import blessed

        _Runtime(App(), blessed.Terminal()).run()
    except Exception as exc:
        print(exc)
        return 1
    return 0