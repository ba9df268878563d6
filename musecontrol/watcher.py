# musecontrol/watcher.py

import logging
from dataclasses import dataclass

from .control.base import PlayerHelper, Song
from .control.controller import PlayerController
from .control.events import EventKind


@dataclass(frozen=True)
class NowPlaying:
    player: str
    song: Song
    playing: bool


class NowPlayingWatcher:
    """Reads the active player's state and logs it whenever it changes."""

    def __init__(self, controller: PlayerController):
        self._controller = controller
        self._last: NowPlaying | None = None

    @property
    def last(self) -> NowPlaying | None:
        return self._last

    def attach(self, helper: PlayerHelper) -> None:
        """Re-reads immediately when the helper reports a track or play/pause change."""
        helper.events.subscribe(EventKind.TRACK_CHANGED, self.poll)
        helper.events.subscribe(EventKind.PLAY_PAUSE_CHANGED, self.poll)

    def poll(self) -> NowPlaying | None:
        helper = self._controller.active()
        if helper is None:
            if self._last is not None:
                logging.info("No supported player is running.")
                self._last = None
            return None

        now_playing = NowPlaying(player=helper.name, song=helper.song, playing=helper.is_playing)
        if now_playing != self._last:
            song = now_playing.song
            logging.info(f"[{now_playing.player}] {song.name or 'Unknown track'} - {song.artist or 'Unknown artist'} "
                         f"({'playing' if now_playing.playing else 'paused'})")
            self._last = now_playing
        return now_playing
