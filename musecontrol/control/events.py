# musecontrol/control/events.py

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any


class EventKind(Enum):
    PLAY_PAUSE_CHANGED = "play_pause_changed"  # ()
    TRACK_CHANGED = "track_changed"  # ()
    TIME_CHANGED = "time_changed"  # (touching: bool, position: float | None)
    SHUFFLE_REPEAT_CHANGED = "shuffle_repeat_changed"  # (shuffle: bool | None, repeat: bool | None)


Listener = Callable[..., Any]


class PlayerEvents:
    """Per-player subscription hub for change notifications.

    Listeners run in registration order on the emitting thread. A listener
    that raises is logged and the remaining listeners still run.
    """

    def __init__(self):
        self._listeners: dict[EventKind, list[Listener]] = {kind: [] for kind in EventKind}

    def subscribe(self, kind: EventKind, listener: Listener) -> Listener:
        self._listeners[kind].append(listener)
        return listener

    def unsubscribe(self, kind: EventKind, listener: Listener) -> bool:
        """Removes a listener. Returns False if it was not subscribed."""
        try:
            self._listeners[kind].remove(listener)
        except ValueError:
            return False
        return True

    def listeners(self, kind: EventKind) -> list[Listener]:
        return list(self._listeners[kind])

    def emit(self, kind: EventKind, *args: Any) -> None:
        listeners = self.listeners(kind)
        logging.debug(f"Events: Emitting {kind.value}{args} to {len(listeners)} listener(s).")
        for listener in listeners:
            try:
                listener(*args)
            except Exception as e:
                logging.error(f"Events: Listener {getattr(listener, '__name__', listener)!r} failed on {kind.value}: {e}", exc_info=True)
