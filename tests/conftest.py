"""Test configuration."""

from __future__ import annotations

from collections.abc import Callable

import pytest


class FakeBridge:
    """In-memory stand-in for the AppleScript bridge of one player."""

    def __init__(self, running: bool = True, props: dict[str, str] | None = None) -> None:
        self.running = running
        self.props: dict[str, str] = dict(props or {})
        self.data: dict[str, bytes] = {}
        self.calls: list[str] = []
        self.sets: list[tuple[str, str]] = []
        self.command_effects: dict[str, Callable[[FakeBridge], None]] = {}
        self.ignored_props: set[str] = set()

    def is_running(self) -> bool:
        return self.running

    def get(self, prop: str) -> str | None:
        if not self.running:
            return None
        return self.props.get(prop)

    def get_data(self, prop: str) -> bytes | None:
        if not self.running:
            return None
        return self.data.get(prop)

    def set(self, prop: str, value: str) -> bool:
        self.sets.append((prop, value))
        if self.running and prop not in self.ignored_props:
            self.props[prop] = value
        return self.running

    def call(self, command: str) -> bool:
        self.calls.append(command)
        effect = self.command_effects.get(command)
        if self.running and effect is not None:
            effect(self)
        return self.running


class ManualScheduler:
    """Collects scheduled callbacks and runs them on demand with a fake clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.pending: list[tuple[float, Callable[[], None]]] = []
        self.delays: list[float] = []

    def __call__(self, delay: float, func: Callable[[], None]) -> None:
        self.pending.append((delay, func))
        self.delays.append(delay)

    def clock(self) -> float:
        return self.now

    def run_next(self) -> None:
        delay, func = self.pending.pop(0)
        self.now += delay
        func()

    def run_all(self, limit: int = 1000) -> int:
        ran = 0
        while self.pending and ran < limit:
            self.run_next()
            ran += 1
        return ran


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge(
        props={
            "track": "Hyperballad",
            "artist": "Björk",
            "album": "Post",
            "total time": "200.0",
            "current time": "12.5",
            "player state": "1",
            "player volume": "55.0",
            "repeat state": "0",
        }
    )


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
