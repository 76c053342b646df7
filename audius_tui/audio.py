"""Audio playback of downloaded track files through the pygame mixer."""

from __future__ import annotations

import os

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
import pygame.mixer  # noqa: E402

DEFAULT_SAMPLE_RATE = 48000
DEFAULT_VOLUME = -2.0
VOLUME_BASE = 2.0

_FORMATS = (".mp3", ".wav", ".flac", ".ogg")


def _format_hint(path: str) -> str:
    """Pick the decoder from the file extension; unknown files are read as mp3."""
    for extension in _FORMATS:
        if path.endswith(extension):
            return extension[1:]
    return "mp3"


class AudioPlayer:
    """Plays one file at a time, with pause, mute, volume and seeking.

    Volume is an exponent of ``VOLUME_BASE``: the gain is
    ``VOLUME_BASE ** volume``. Positions are in seconds.
    """

    def __init__(self) -> None:
        self.current_track_file_name = ""
        self.sample_rate = DEFAULT_SAMPLE_RATE
        self.loaded = False
        self.paused = False
        self.muted = False
        self.volume = DEFAULT_VOLUME
        self.track_ended = False
        self._offset = 0.0
        self._last_position = 0.0
        self._finished = False
        self._length: int | None = None

    def on_playback_end(self) -> None:
        """Record that the current track has played to its end."""
        self.track_ended = True

    def delete_temp_files(self) -> None:
        """Remove the file of the current track, ignoring failures."""
        if self.current_track_file_name:
            try:
                os.remove(self.current_track_file_name)
            except OSError:
                pass

    def play(self, path: str | os.PathLike[str], muted: bool = False) -> AudioPlayer:
        """Start playing ``path`` from the beginning.

        Switching to a different file deletes the previous one. Raises
        OSError if the file cannot be opened and ``pygame.error`` if it
        cannot be decoded.
        """
        path = os.fspath(path)
        if path != self.current_track_file_name:
            self.delete_temp_files()
            self.current_track_file_name = path
            self._length = None

        with open(path, "rb"):
            pass

        mixer = pygame.mixer
        if not self.loaded:
            mixer.init(frequency=DEFAULT_SAMPLE_RATE)
        else:
            mixer.music.stop()
        mixer.music.load(path, _format_hint(path))

        self.paused = False
        self.muted = muted
        self.volume = DEFAULT_VOLUME
        self.sample_rate = DEFAULT_SAMPLE_RATE
        self._offset = 0.0
        self._last_position = 0.0
        self._finished = False
        self.loaded = True
        self._apply_volume()
        mixer.music.play()
        return self

    def track_length(self) -> int:
        """Length of the loaded track in whole seconds."""
        if not self.loaded:
            raise RuntimeError("no track loaded")
        if self._length is None:
            sound = pygame.mixer.Sound(self.current_track_file_name)
            self._length = int(sound.get_length())
        return self._length

    def position(self) -> float:
        """Current position in seconds; notices when the track has finished."""
        if not self.loaded:
            return 0.0
        music = pygame.mixer.music
        if not self.paused and not self._finished and not music.get_busy():
            self._finished = True
            self.on_playback_end()
        if self._finished:
            return self._last_position
        elapsed = music.get_pos()
        if elapsed >= 0:
            self._last_position = self._offset + elapsed / 1000
        return self._last_position

    def pause(self) -> None:
        if self.loaded:
            pygame.mixer.music.pause()
            self.paused = True

    def resume(self) -> None:
        if self.loaded:
            pygame.mixer.music.unpause()
            self.paused = False

    def toggle_pause(self) -> None:
        if self.loaded:
            if self.paused:
                self.resume()
            else:
                self.pause()

    def mute(self) -> None:
        if self.loaded:
            self.muted = True
            self._apply_volume()

    def unmute(self) -> None:
        if self.loaded:
            self.muted = False
            self._apply_volume()

    def toggle_mute(self) -> None:
        if self.loaded:
            if self.muted:
                self.unmute()
            else:
                self.mute()

    def set_volume(self, volume: float) -> None:
        if self.loaded:
            self.volume = volume
            self._apply_volume()

    def seek(self, pos: float) -> None:
        """Jump to ``pos`` seconds into the loaded track."""
        if self.loaded:
            start = max(0.0, float(pos))
            music = pygame.mixer.music
            music.play(start=start)
            if self.paused:
                music.pause()
            self._offset = start
            self._last_position = start
            self._finished = False

    def _apply_volume(self) -> None:
        gain = 0.0 if self.muted else min(1.0, VOLUME_BASE ** self.volume)
        pygame.mixer.music.set_volume(gain)