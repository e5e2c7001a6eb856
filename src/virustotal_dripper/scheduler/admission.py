# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Windowed admission queue ("dripper") for a remote API with fixed quotas.

The remote service gives no "slow down" signal before rejecting a request,
so the client meters itself: at most ``capacity`` jobs are released per
replenishment window, releases within a window are spaced by the assumed
network latency, and usage decays by ``capacity`` per window instead of
resetting to zero (a leaky counter), so a burst straddling a window
boundary is carried into the next window.

All bookkeeping runs on the event loop thread through ``call_later``
callbacks; nothing here awaits, so a release pass is never interleaved
with another one. Job bodies run later, off the ``submit`` call path.
"""

import asyncio
import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from ..observability.collector import MetricsCollector
from ..observability.constants import (
    JOBS_RELEASED_TOTAL,
    JOBS_SUBMITTED_TOTAL,
    REPLENISHMENTS_TOTAL,
)
from ..types.queue import JobPriority, QueuedJob, QueueSnapshot

logger = logging.getLogger(__name__)

NEVER = float("-inf")


class AdmissionQueue:
    """
    Leaky-bucket admission controller.

    Args:
        capacity: Maximum jobs released per replenishment window
        window_ms: Nominal window length in milliseconds
        latency_ms: Assumed network latency in milliseconds; pads both the
            spacing between releases and the window length (once per unit
            of capacity)
        loop: Event loop used for timers and as the clock. When omitted the
            queue binds to the running loop on first use, and rebinds to a
            new running loop once the bound one has been closed.
        metrics: Optional collector for submission/release counters

    Example:
        >>> queue = AdmissionQueue(capacity=4, window_ms=60_000)
        >>> queue.submit(lambda: print("released"))
        >>> queue.submit(urgent_job, priority=JobPriority.EXPEDITED)
    """

    def __init__(
        self,
        capacity: int,
        window_ms: float,
        latency_ms: float = 0,
        *,
        loop: asyncio.AbstractEventLoop | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if window_ms < 0:
            raise ValueError("window_ms must not be negative")
        if latency_ms < 0:
            raise ValueError("latency_ms must not be negative")

        self.capacity = capacity
        self.window_seconds = window_ms / 1000.0
        self.latency_seconds = latency_ms / 1000.0
        self.metrics = metrics

        self._loop = loop
        self._loop_fixed = loop is not None
        self._consumed = 0
        self._last_replenish_at = NEVER
        self._last_release_at = NEVER
        self._pending: deque[QueuedJob] = deque()
        self._wake_handle: asyncio.TimerHandle | None = None

    @property
    def replenish_span(self) -> float:
        """Seconds between replenishments: the window plus one latency per unit of capacity."""
        return self.window_seconds + self.capacity * self.latency_seconds

    @property
    def consumed(self) -> int:
        return self._consumed

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def wake_scheduled(self) -> bool:
        return self._wake_handle is not None

    def snapshot(self) -> QueueSnapshot:
        """Point-in-time view of the queue for logging and debugging."""
        return QueueSnapshot(
            pending=len(self._pending),
            consumed=self._consumed,
            capacity=self.capacity,
            window_seconds=self.window_seconds,
            latency_seconds=self.latency_seconds,
            wake_scheduled=self._wake_handle is not None,
        )

    def submit(
        self,
        action: Callable[[], Any],
        priority: JobPriority | bool = JobPriority.NORMAL,
    ) -> None:
        """
        Enqueue a job and return immediately.

        Normal jobs run in submission order. An expedited job joins ahead of
        every job still waiting, but never ahead of one already released.

        Args:
            action: Zero-argument callable, invoked exactly once on release
            priority: JobPriority, or True as shorthand for EXPEDITED
        """
        if not callable(action):
            raise TypeError("action must be a zero-argument callable")
        if isinstance(priority, bool):
            priority = JobPriority.EXPEDITED if priority else JobPriority.NORMAL

        loop = self._bind_running_loop()
        job = QueuedJob(action=action, priority=priority, submitted_at=loop.time())
        if priority is JobPriority.EXPEDITED:
            self._pending.appendleft(job)
        else:
            self._pending.append(job)

        if self.metrics is not None:
            self.metrics.inc_counter(
                JOBS_SUBMITTED_TOTAL, labels={"priority": priority.value}
            )

        self._drip()

    def close(self) -> list[QueuedJob]:
        """
        Cancel the pending wake-up and drop every job still waiting.

        Jobs already released are not affected. The queue stays usable; a
        later submit starts a fresh release pass.

        Returns:
            The dropped jobs, in the order they would have been released
        """
        if self._wake_handle is not None:
            self._wake_handle.cancel()
            self._wake_handle = None
        dropped = list(self._pending)
        self._pending.clear()
        if dropped:
            logger.debug(f"Dropped {len(dropped)} waiting jobs on close")
        return dropped

    def _bind_running_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None and self._loop_fixed:
            return self._loop
        running = asyncio.get_running_loop()
        if self._loop is not None and self._loop is not running:
            if not self._loop.is_closed():
                raise RuntimeError(
                    "AdmissionQueue is bound to another event loop that is still open"
                )
            if self._pending:
                logger.warning(
                    f"Dropping {len(self._pending)} jobs left on a closed event loop"
                )
                self._pending.clear()
            self._wake_handle = None
        self._loop = running
        return running

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def _drip(self) -> None:
        """Run one release pass: replenish, drain up to capacity, re-arm."""
        if self._wake_handle is not None or not self._pending:
            return

        loop = self._get_loop()
        now = loop.time()

        if self._last_replenish_at + self.replenish_span <= now:
            self._last_replenish_at = now
            self._consumed = max(0, self._consumed - self.capacity)
            if self.metrics is not None:
                self.metrics.inc_counter(REPLENISHMENTS_TOTAL)
            logger.debug(f"Quota window replenished, consumed={self._consumed}")

        while self._pending and self._consumed < self.capacity:
            job = self._pending.popleft()
            self._consumed += 1

            now = loop.time()
            delay = max(0.0, self.latency_seconds + self._last_release_at - now)
            self._last_release_at = now + delay

            loop.call_later(delay, self._run_job, job)
            if self.metrics is not None:
                self.metrics.inc_counter(JOBS_RELEASED_TOTAL)
            logger.debug(
                f"Released {job.priority.value} job after {delay:.3f}s "
                f"({self._consumed}/{self.capacity} used, {len(self._pending)} waiting)"
            )

        if self._pending and self._wake_handle is None:
            if self._consumed >= self.capacity:
                wait = max(0.0, self._last_replenish_at + self.replenish_span - now)
            else:
                wait = self.latency_seconds
            self._wake_handle = loop.call_later(wait, self._wake)
            logger.debug(f"Next release pass in {wait:.3f}s")

    def _wake(self) -> None:
        self._wake_handle = None
        self._drip()

    @staticmethod
    def _run_job(job: QueuedJob) -> None:
        try:
            job.action()
        except Exception:
            logger.exception("Released job raised; the queue continues")


__all__ = ["AdmissionQueue"]
