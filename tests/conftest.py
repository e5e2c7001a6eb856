"""
Shared fixtures for the VirusTotal dripper test suite.

FakeLoop stands in for the asyncio event loop wherever only ``time()`` and
``call_later()`` are needed, so admission timing can be tested without
sleeping.
"""

import heapq
import itertools
from collections.abc import Callable
from typing import Any

import pytest


class FakeTimerHandle:
    """Minimal stand-in for asyncio.TimerHandle."""

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple[Any, ...]):
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeLoop:
    """
    Deterministic loop clock with a timer heap.

    ``advance(seconds)`` fires every timer due within the interval in time
    order, including timers scheduled by callbacks that fire along the way.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._timers: list[tuple[float, int, FakeTimerHandle]] = []
        self._seq = itertools.count()

    def time(self) -> float:
        return self.now

    def call_later(
        self, delay: float, callback: Callable[..., Any], *args: Any
    ) -> FakeTimerHandle:
        handle = FakeTimerHandle(self.now + delay, callback, args)
        heapq.heappush(self._timers, (handle.when, next(self._seq), handle))
        return handle

    def scheduled(self) -> list[FakeTimerHandle]:
        return [h for _, _, h in self._timers if not h.cancelled]

    def advance(self, seconds: float = 0.0) -> None:
        target = self.now + seconds
        while self._timers and self._timers[0][0] <= target:
            when, _, handle = heapq.heappop(self._timers)
            self.now = max(self.now, when)
            if not handle.cancelled:
                handle.callback(*handle.args)
        self.now = target


@pytest.fixture
def fake_loop():
    """Create a FakeLoop starting at t=0."""
    return FakeLoop()


@pytest.fixture
def release_log(fake_loop):
    """List of (time, label) entries plus a factory for jobs that append to it."""
    log: list[tuple[float, str]] = []

    def make_job(label: str) -> Callable[[], None]:
        def job() -> None:
            log.append((fake_loop.time(), label))

        return job

    return log, make_job
