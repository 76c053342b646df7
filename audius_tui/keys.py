"""Key bindings for the application and the player, with their help text."""

from __future__ import annotations

from dataclasses import dataclass

from .messages import KeyMsg


@dataclass(frozen=True)
class KeyBinding:
    """A set of key names that trigger one action, plus its help entry."""

    keys: tuple[str, ...] = ()
    help_key: str = ""
    help_desc: str = ""

    def matches(self, key: KeyMsg | str) -> bool:
        """Return True if ``key`` (a key message or key name) is bound here."""
        return str(key) in self.keys


@dataclass(frozen=True)
class AppKeyMap:
    """Bindings handled by the application and its track tables."""

    help: KeyBinding = KeyBinding(("?",), "?", "toggle help")
    quit: KeyBinding = KeyBinding(("esc", "ctrl+c"), "esc", "quit")
    toggle_user_id_input: KeyBinding = KeyBinding(("=",), "=", "enter user id")

    trending: KeyBinding = KeyBinding(("T",), "T", "trending")
    underground: KeyBinding = KeyBinding(("U",), "U", "underground")
    favorites: KeyBinding = KeyBinding(("F",), "F", "favorites")
    queue: KeyBinding = KeyBinding(("Q",), "Q", "queue")
    search: KeyBinding = KeyBinding(("S", "/"), "/", "search")

    up: KeyBinding = KeyBinding(("up", "k"), "↑/k", "move up")
    down: KeyBinding = KeyBinding(("down", "j"), "↓/j", "move down")
    top: KeyBinding = KeyBinding(("g",), "g", "jump to top")
    bottom: KeyBinding = KeyBinding(("G",), "G", "jump to bottom")
    page_up: KeyBinding = KeyBinding(("b",), "b", "jump page up")
    page_down: KeyBinding = KeyBinding(("f",), "f", "jump page down")
    half_page_up: KeyBinding = KeyBinding(("u",), "u", "jump 1/2 page up")
    half_page_down: KeyBinding = KeyBinding(("d",), "d", "jump 1/2 page down")

    def short_help(self) -> list[KeyBinding]:
        return [self.help, self.quit]

    def full_help(self) -> list[list[KeyBinding]]:
        return [
            [self.up, self.down, self.top, self.bottom],
            [self.half_page_up, self.half_page_down, self.page_up, self.page_down],
            [self.toggle_user_id_input, self.search, self.help, self.quit],
        ]


@dataclass(frozen=True)
class PlayerKeyMap:
    """Bindings handled by the player."""

    quit: KeyBinding = KeyBinding(("esc", "q", "ctrl+c"), "esc", "quit")
    pause: KeyBinding = KeyBinding(("p", " "), "p/space", "toggle pause")
    mute: KeyBinding = KeyBinding(("m",), "m", "toggle mute")
    repeat: KeyBinding = KeyBinding(("r",), "r", "toggle repeat")
    volume_up: KeyBinding = KeyBinding((".",), ".", "volume up")
    volume_down: KeyBinding = KeyBinding((",",), ",", "volume down")
    skip_forward: KeyBinding = KeyBinding(("o",), "o", "10s forward")
    skip_back: KeyBinding = KeyBinding(("i",), "i", "10s back")
    next: KeyBinding = KeyBinding()
    prev: KeyBinding = KeyBinding()
    play: KeyBinding = KeyBinding(("enter",), "enter", "play track")

    def short_help(self) -> list[KeyBinding]:
        return []

    def full_help(self) -> list[list[KeyBinding]]:
        return [[self.play, self.pause, self.repeat, self.mute]]