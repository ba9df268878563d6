# musecontrol/control/settle.py

import logging
import time
from collections.abc import Callable
from threading import Timer
from typing import Protocol, TypeVar

T = TypeVar("T")

DEFAULT_SETTLE_DELAY = 0.010  # 10ms, time for the player to apply a command
DEFAULT_CONFIRM_TIMEOUT = 0.5


class Scheduler(Protocol):
    def __call__(self, delay: float, func: Callable[[], None], /) -> object: ...


def timer_scheduler(delay: float, func: Callable[[], None]) -> Timer:
    """Runs func once after delay seconds on a daemon Timer thread, not the caller's."""
    timer = Timer(delay, func)
    timer.daemon = True
    timer.start()
    return timer


def confirm_change(
    read: Callable[[], T],
    before: T,
    on_settled: Callable[[bool], None],
    schedule: Scheduler = timer_scheduler,
    settle_delay: float = DEFAULT_SETTLE_DELAY,
    timeout: float = DEFAULT_CONFIRM_TIMEOUT,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Polls read() until it differs from before, then calls on_settled exactly once.

    The first read happens no earlier than settle_delay. Polling repeats every
    settle_delay until timeout has elapsed; past that on_settled(False) is
    called and the change is assumed to have happened.
    """
    if settle_delay <= 0:
        raise ValueError("settle_delay must be positive.")
    started = clock()
    interval = settle_delay

    def check() -> None:
        try:
            changed = read() != before
        except Exception as e:
            logging.debug(f"confirm_change: Read-back failed, treating as unchanged: {e}")
            changed = False

        elapsed = clock() - started
        if changed:
            logging.debug(f"confirm_change: Change confirmed after {elapsed*1000:.1f}ms.")
            on_settled(True)
        elif elapsed >= timeout:
            logging.debug(f"confirm_change: No change after {elapsed*1000:.1f}ms, assuming success.")
            on_settled(False)
        else:
            schedule(interval, check)

    schedule(settle_delay, check)
