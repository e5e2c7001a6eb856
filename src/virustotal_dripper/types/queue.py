# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Queue types for the admission queue.

This module defines the job wrapper held by the admission queue and the
read-only snapshot it exposes for debugging.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JobPriority(Enum):
    """
    Job priority levels.

    * NORMAL: FIFO behind everything already waiting
    * EXPEDITED: jumps ahead of waiting jobs, never ahead of released ones
    """

    NORMAL = "normal"
    EXPEDITED = "expedited"


@dataclass
class QueuedJob:
    """
    A unit of work waiting in the admission queue.

    Attributes:
        action: Zero-argument callable invoked exactly once on release
        priority: Where the job joined the pending sequence
        submitted_at: Clock reading (seconds) at submission
    """

    action: Callable[[], Any]
    priority: JobPriority = JobPriority.NORMAL
    submitted_at: float = field(default=0.0)


@dataclass(frozen=True)
class QueueSnapshot:
    """
    Point-in-time view of admission queue state.

    Attributes:
        pending: Jobs waiting for release
        consumed: Capacity units used since the last replenishment
        capacity: Jobs released per window
        window_seconds: Nominal window length
        latency_seconds: Assumed latency padding
        wake_scheduled: Whether a wake-up timer is outstanding
    """

    pending: int
    consumed: int
    capacity: int
    window_seconds: float
    latency_seconds: float
    wake_scheduled: bool


__all__ = ["JobPriority", "QueueSnapshot", "QueuedJob"]
