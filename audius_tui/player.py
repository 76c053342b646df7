"""Now-playing panel: queue handling, playback controls and progress bar."""

from __future__ import annotations

import dataclasses
import time
from dataclasses import dataclass
from typing import Any, Optional

from . import api
from .audio import AudioPlayer
from .keys import PlayerKeyMap
from .messages import (
    Cmd,
    KeyMsg,
    MouseMsg,
    PlayTrackMsg,
    PlayTracksMsg,
    TickMsg,
    batch,
)
from .models import Track
from .styles import (
    EMPTY_COLOR,
    GREY3,
    GREY4,
    WHITE,
    Style,
    border_container,
    header,
    join_horizontal,
    join_vertical,
    render,
)
from .utils import get_duration_text

TICK_INTERVAL = 0.5
PROGRESS_WIDTH = 96
_PROGRESS_ROW = 21
_PROGRESS_LEFT = 3
_BLOCK = "▄"
_GRADIENT = ("#5A56E0", "#EE6FF8")

_CONTAINER = dataclasses.replace(
    border_container(), padding=(0, 2, 0, 2), width=100, align="center"
)


@dataclass(frozen=True)
class FetchTrackMp3ResMsg:
    """A track's audio has been downloaded to ``file_name``."""

    track: Track
    file_name: str


def fetch_and_play_track_cmd(track: Track) -> Cmd:
    """Command that downloads a track's audio; prints and yields None on failure."""

    def run() -> Optional[FetchTrackMp3ResMsg]:
        try:
            file_name = api.get_track_mp3(track.id)
        except (api.ApiError, OSError) as exc:
            print(exc)
            return None
        return FetchTrackMp3ResMsg(track=track, file_name=file_name)

    return run


def tick_cmd() -> Cmd:
    """Command that waits half a second and yields a tick."""

    def run() -> TickMsg:
        time.sleep(TICK_INTERVAL)
        return TickMsg(time=time.time())

    return run


def _rgb(color: str) -> tuple[int, int, int]:
    digits = color.lstrip("#")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def _progress_bar(percent: float, width: int = PROGRESS_WIDTH) -> str:
    percent = min(max(percent, 0.0), 1.0)
    filled = min(width, int(width * percent + 0.5))
    start, end = _rgb(_GRADIENT[0]), _rgb(_GRADIENT[1])
    cells = []
    for index in range(filled):
        ratio = index / (filled - 1) if filled > 1 else 0.5
        red, green, blue = (round(a + (b - a) * ratio) for a, b in zip(start, end))
        cells.append(f"\x1b[38;2;{red};{green};{blue}m{_BLOCK}")
    empty_red, empty_green, empty_blue = _rgb(EMPTY_COLOR)
    if filled < width:
        cells.append(
            f"\x1b[38;2;{empty_red};{empty_green};{empty_blue}m"
            + _BLOCK * (width - filled)
        )
    return "".join(cells) + "\x1b[0m"


class Player:
    """Plays a queue of tracks and shows what is playing."""

    def __init__(self, audio_player: Optional[AudioPlayer] = None) -> None:
        self.audio_player = audio_player if audio_player is not None else AudioPlayer()
        self.tracks_queue: list[Track] = []
        self.queue_pos = 0
        self.current_track = Track(title="")
        self.current_pos = 0.0
        self.muted = False
        self.paused = False
        self.repeat = False
        self.key_map = PlayerKeyMap()

    def init(self) -> Cmd:
        return tick_cmd()

    def update(self, msg: Any) -> Optional[Cmd]:
        cmds: list[Optional[Cmd]] = []

        if isinstance(msg, MouseMsg):
            if (
                msg.button == "left"
                and self.audio_player.loaded
                and msg.y == _PROGRESS_ROW
                and _PROGRESS_LEFT <= msg.x <= _PROGRESS_LEFT + PROGRESS_WIDTH - 1
            ):
                percentage = (msg.x - _PROGRESS_LEFT) / PROGRESS_WIDTH
                self.seek(self.audio_player.track_length() * percentage)
        elif isinstance(msg, KeyMsg):
            keys = self.key_map
            if keys.pause.matches(msg):
                self.toggle_pause()
            elif keys.mute.matches(msg):
                self.toggle_mute()
            elif keys.repeat.matches(msg):
                self.toggle_repeat()
            elif keys.quit.matches(msg):
                self.audio_player.delete_temp_files()
        elif isinstance(msg, PlayTrackMsg):
            self.tracks_queue = [msg.track]
            self.queue_pos = 0
            cmds.append(fetch_and_play_track_cmd(self.tracks_queue[self.queue_pos]))
        elif isinstance(msg, PlayTracksMsg):
            self.tracks_queue = list(msg.tracks)
            self.queue_pos = msg.queue_pos
            cmds.append(fetch_and_play_track_cmd(self.tracks_queue[self.queue_pos]))
        elif isinstance(msg, FetchTrackMp3ResMsg):
            self.current_track = msg.track
            self._play(msg.file_name)
        elif isinstance(msg, TickMsg):
            self.update_progress_pos()
            if self.audio_player.track_ended:
                cmds.append(self._handle_playback_end())
            cmds.append(tick_cmd())

        return batch(*cmds)

    def view(self) -> str:
        track = self.current_track
        if track.title:
            text = join_horizontal(
                "center",
                render(track.title, Style(bold=True)),
                render(" - " + track.user.name, Style(foreground=GREY4)),
            )
        else:
            text = render("Now Playing", header())

        repeat_text = render("repeat", Style(foreground="#77F" if self.repeat else GREY3))
        pause_text = render("pause", Style(foreground="#7F7" if self.paused else GREY3))
        mute_text = render("mute", Style(foreground="#F77" if self.muted else GREY3))

        status = join_horizontal(
            "center",
            render(
                get_duration_text(int(self.current_pos * track.duration)),
                Style(width=32, align="left"),
            ),
            render(
                f"{repeat_text}  {pause_text}  {mute_text}",
                Style(width=32, align="center", foreground=WHITE),
            ),
            render(get_duration_text(track.duration), Style(width=32, align="right")),
        )
        return render(
            join_vertical("center", text, _progress_bar(self.current_pos), status),
            _CONTAINER,
        )

    def update_progress_pos(self) -> None:
        """Refresh the fraction of the current track that has played."""
        if self.audio_player.loaded:
            seconds = int(self.audio_player.position())
            duration = self.current_track.duration
            self.current_pos = seconds / duration if duration else 0.0

    def _handle_playback_end(self) -> Optional[Cmd]:
        self.audio_player.track_ended = False
        if self.repeat:
            self._play(self.audio_player.current_track_file_name)
            return None
        self.audio_player.delete_temp_files()
        if self.queue_pos + 1 < len(self.tracks_queue):
            self.queue_pos += 1
            return fetch_and_play_track_cmd(self.tracks_queue[self.queue_pos])
        return None

    def _play(self, path: str) -> None:
        self.paused = False
        try:
            self.audio_player.play(path, self.muted)
        except (OSError, RuntimeError) as exc:
            print(exc)

    def pause(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.pause()
            self.paused = self.audio_player.paused

    def resume(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.resume()
            self.paused = self.audio_player.paused

    def toggle_pause(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.toggle_pause()
            self.paused = self.audio_player.paused

    def set_volume(self, volume: float) -> None:
        self.audio_player.set_volume(volume)

    def mute(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.mute()
            self.muted = self.audio_player.muted
        else:
            self.muted = True

    def unmute(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.unmute()
            self.muted = self.audio_player.muted
        else:
            self.muted = False

    def toggle_mute(self) -> None:
        if self.audio_player.loaded:
            self.audio_player.toggle_mute()
            self.muted = self.audio_player.muted
        else:
            self.muted = not self.muted

    def toggle_repeat(self) -> None:
        self.repeat = not self.repeat

    def seek(self, pos: float) -> None:
        self.audio_player.seek(pos)