# musecontrol/control/base.py

from dataclasses import dataclass
from enum import IntEnum
from typing import Protocol

from .events import PlayerEvents


class MuseControlError(Exception):
    """Base class for errors raised by musecontrol."""


class BridgeUnavailableError(MuseControlError):
    """The scripting bridge to a player cannot be established."""


@dataclass(frozen=True)
class Song:
    name: str = ""
    artist: str = ""
    album: str = ""
    duration: float = 0.0  # seconds


class PlayerState(IntEnum):
    PAUSED = 0
    PLAYING = 1


class RepeatState(IntEnum):
    NONE = 0
    REPEAT_ONE = 1
    REPEAT_ALL = 2


class ScriptingBridge(Protocol):
    """Defines the surface used to talk to an external player process."""

    def is_running(self) -> bool:
        """Returns True when the player process is running. Never raises."""
        ...

    def get(self, prop: str) -> str | None:
        """Reads a property. Returns None when it is absent or unreadable."""
        ...

    def get_data(self, prop: str) -> bytes | None:
        """Reads a binary property (e.g. artwork). Returns None when absent."""
        ...

    def set(self, prop: str, value: str) -> bool:
        """Sets a property. Returns True if the command was delivered."""
        ...

    def call(self, command: str) -> bool:
        """Issues a bare command. Returns True if the command was delivered."""
        ...


class PlayerHelper(Protocol):
    """Defines the capability contract every supported player implements."""

    @property
    def bundle_identifier(self) -> str:
        """Returns the application identifier the helper is bound to."""
        ...

    @property
    def name(self) -> str:
        """Returns a human readable player name (e.g. 'Vox')."""
        ...

    @property
    def does_send_play_pause_notification(self) -> bool:
        """Whether the player itself broadcasts play/pause changes."""
        ...

    @property
    def events(self) -> PlayerEvents:
        """Returns the hub listeners subscribe to for change notifications."""
        ...

    @property
    def is_available(self) -> bool:
        """Whether the player is running. False on any uncertainty."""
        ...

    @property
    def song(self) -> Song:
        """Returns the current track. Missing fields are empty/zero."""
        ...

    def toggle_play_pause(self) -> None: ...

    def next_track(self) -> None: ...

    def previous_track(self) -> None: ...

    @property
    def is_playing(self) -> bool: ...

    @property
    def playback_position(self) -> float: ...

    @playback_position.setter
    def playback_position(self, position: float) -> None: ...

    @property
    def track_duration(self) -> float: ...

    def scrub(self, value: float | None = None, touching: bool = False) -> None:
        """Moves to `value` (a fraction of the duration) unless the user is still dragging."""
        ...

    @property
    def volume(self) -> int: ...

    @volume.setter
    def volume(self, volume_percent: int) -> None: ...

    @property
    def repeating(self) -> bool: ...

    @repeating.setter
    def repeating(self, repeating: bool) -> None: ...

    @property
    def shuffling(self) -> bool: ...

    @shuffling.setter
    def shuffling(self, shuffling: bool) -> None: ...

    def artwork(self) -> bytes | None:
        """Returns the raw artwork image data, or None."""
        ...
