"""Tests for the confirmation read-back loop."""

from __future__ import annotations

import pytest

from conftest import ManualScheduler
from musecontrol.control.settle import confirm_change


def test_first_read_waits_for_settle_delay(scheduler: ManualScheduler) -> None:
    reads: list[float] = []
    settled: list[bool] = []

    def read() -> bool:
        reads.append(scheduler.now)
        return True

    confirm_change(read, False, settled.append, schedule=scheduler, settle_delay=0.01, clock=scheduler.clock)

    assert reads == []
    scheduler.run_all()
    assert reads == [0.01]
    assert settled == [True]


def test_polls_until_change(scheduler: ManualScheduler) -> None:
    values = iter([False, False, True])
    settled: list[bool] = []

    confirm_change(lambda: next(values), False, settled.append, schedule=scheduler, settle_delay=0.01, timeout=1.0, clock=scheduler.clock)
    scheduler.run_all()

    assert settled == [True]
    assert scheduler.delays == [0.01, 0.01, 0.01]


def test_gives_up_after_timeout_exactly_once(scheduler: ManualScheduler) -> None:
    settled: list[bool] = []

    confirm_change(lambda: False, False, settled.append, schedule=scheduler, settle_delay=0.1, timeout=0.35, clock=scheduler.clock)
    ran = scheduler.run_all()

    assert settled == [False]
    assert ran == 4
    assert scheduler.pending == []


def test_failing_read_counts_as_unchanged(scheduler: ManualScheduler) -> None:
    settled: list[bool] = []

    def read() -> bool:
        raise RuntimeError("bridge hiccup")

    confirm_change(read, False, settled.append, schedule=scheduler, settle_delay=0.1, timeout=0.1, clock=scheduler.clock)
    scheduler.run_all()

    assert settled == [False]


def test_rejects_non_positive_delay(scheduler: ManualScheduler) -> None:
    with pytest.raises(ValueError):
        confirm_change(lambda: True, False, lambda _c: None, schedule=scheduler, settle_delay=0)
