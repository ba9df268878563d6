# musecontrol/control/vox_helper.py

import logging
from typing import override

from .applescript_bridge import AppleScriptBridge, parse_float, parse_int
from .base import PlayerHelper, PlayerState, RepeatState, ScriptingBridge, Song
from .events import EventKind, PlayerEvents
from .settle import DEFAULT_CONFIRM_TIMEOUT, DEFAULT_SETTLE_DELAY, Scheduler, confirm_change, timer_scheduler

BUNDLE_IDENTIFIER = "com.coppertino.Vox"
PROCESS_NAME = "Vox"

# Broadcast by Vox on the distributed notification center
TRACK_CHANGED_NOTIFICATION = BUNDLE_IDENTIFIER + ".trackChanged"


def _format_number(value: float) -> str:
    return f"{float(value):.3f}"


class VoxHelper(PlayerHelper):
    """Drives Vox through its AppleScript dictionary.

    Every property is read live from the player. Absent or unreadable fields
    come back as empty/zero values, never as errors. Vox exposes no shuffle
    status (only a toggle command) and its repeat state is broken upstream:
    reading always gives 'none' and setting it does nothing.

    `schedule` decides where the play/pause read-back and its event run. The
    default, `timer_scheduler`, uses a `threading.Timer` thread, so listeners
    get PLAY_PAUSE_CHANGED off the caller's thread. Inside the app pass
    `PyObjCTools.AppHelper.callLater` to keep it on the AppKit run loop.
    """

    def __init__(
        self,
        bridge: ScriptingBridge | None = None,
        schedule: Scheduler = timer_scheduler,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        confirm_timeout: float = DEFAULT_CONFIRM_TIMEOUT,
    ):
        # Bound once; raises BridgeUnavailableError if the bridge cannot be set up
        self._bridge = bridge if bridge is not None else AppleScriptBridge(BUNDLE_IDENTIFIER, PROCESS_NAME)
        self._schedule = schedule
        self._settle_delay = settle_delay
        self._confirm_timeout = confirm_timeout
        self._events = PlayerEvents()

    @property
    @override
    def bundle_identifier(self) -> str:
        return BUNDLE_IDENTIFIER

    @property
    @override
    def name(self) -> str:
        return PROCESS_NAME

    @property
    @override
    def does_send_play_pause_notification(self) -> bool:
        return False

    @property
    @override
    def events(self) -> PlayerEvents:
        return self._events

    # Player availability

    @property
    @override
    def is_available(self) -> bool:
        try:
            return self._bridge.is_running()
        except Exception as e:
            logging.debug(f"Vox: Availability check failed: {e}")
            return False

    # Song data

    @property
    @override
    def song(self) -> Song:
        return Song(
            name=self._bridge.get("track") or "",
            artist=self._bridge.get("artist") or "",
            album=self._bridge.get("album") or "",
            duration=self.track_duration,
        )

    # Playback controls

    @override
    def toggle_play_pause(self) -> None:
        was_playing = self.is_playing
        self._bridge.call("playpause")

        def settled(confirmed: bool) -> None:
            if not confirmed:
                logging.debug("Vox: Play/pause change not observed before timeout.")
            self._events.emit(EventKind.PLAY_PAUSE_CHANGED)

        confirm_change(
            read=lambda: self.is_playing,
            before=was_playing,
            on_settled=settled,
            schedule=self._schedule,
            settle_delay=self._settle_delay,
            timeout=self._confirm_timeout,
        )

    @override
    def next_track(self) -> None:
        self._bridge.call("next")
        self._events.emit(EventKind.TRACK_CHANGED)

    @override
    def previous_track(self) -> None:
        self._bridge.call("previous")
        self._events.emit(EventKind.TRACK_CHANGED)

    # Playback status

    @property
    @override
    def is_playing(self) -> bool:
        return parse_int(self._bridge.get("player state")) == PlayerState.PLAYING

    @property
    @override
    def playback_position(self) -> float:
        position = parse_float(self._bridge.get("current time"))
        return position if position is not None else 0.0

    @playback_position.setter
    @override
    def playback_position(self, position: float) -> None:
        self._bridge.set("current time", _format_number(position))

    @property
    @override
    def track_duration(self) -> float:
        duration = parse_float(self._bridge.get("total time"))
        return duration if duration is not None else 0.0

    @override
    def scrub(self, value: float | None = None, touching: bool = False) -> None:
        if not touching and value is not None:
            self.playback_position = value * self.track_duration

        self._events.emit(EventKind.TIME_CHANGED, touching, value)

    # Playback options

    @property
    @override
    def volume(self) -> int:
        # Vox reports a float, truncated here
        volume = parse_int(self._bridge.get("player volume"))
        return volume if volume is not None else 0

    @volume.setter
    @override
    def volume(self, volume_percent: int) -> None:
        if not (0 <= volume_percent <= 100):
            raise ValueError(f"Volume {volume_percent}% out of range (0-100).")
        self._bridge.set("player volume", _format_number(volume_percent))

    @property
    @override
    def repeating(self) -> bool:
        state = parse_int(self._bridge.get("repeat state"))
        return state in (RepeatState.REPEAT_ONE, RepeatState.REPEAT_ALL)

    @repeating.setter
    @override
    def repeating(self, repeating: bool) -> None:
        # TODO: Vox ignores "set repeat state"; drop the optimistic event once it honors it
        state = RepeatState.REPEAT_ALL if repeating else RepeatState.NONE
        self._bridge.set("repeat state", str(int(state)))
        self._events.emit(EventKind.SHUFFLE_REPEAT_CHANGED, None, repeating)

    @property
    @override
    def shuffling(self) -> bool:
        # Vox only has a shuffle toggle, no status
        return False

    @shuffling.setter
    @override
    def shuffling(self, shuffling: bool) -> None:
        self._bridge.call("shuffle")
        self._events.emit(EventKind.SHUFFLE_REPEAT_CHANGED, False, None)

    # Artwork

    @override
    def artwork(self) -> bytes | None:
        return self._bridge.get_data("artwork image")
