# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Dispatcher: every outbound call becomes an admission queue job.

The job body starts the network exchange as a task and settles the caller's
future with the classified result. Submission never waits; the caller's
await suspends only until that future settles.
"""

import asyncio
import logging
from typing import Any

from ..exceptions import ClientClosedError
from ..observability.collector import MetricsCollector
from ..transport.executor import RequestExecutor
from ..types.queue import JobPriority
from ..types.request import RequestDescriptor
from ..types.response import ApiResponse
from .admission import AdmissionQueue

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Couples the AdmissionQueue to the RequestExecutor.

    Args:
        queue: Admission queue that decides when each exchange may start
        executor: Performs and classifies the exchange
        metrics: Optional collector for outcome counters

    Example:
        >>> dispatcher = Dispatcher(queue, executor)
        >>> response = await dispatcher.dispatch(descriptor)
        >>> urgent = dispatcher.submit(other_descriptor, expedited=True)
        >>> response = await urgent
    """

    def __init__(
        self,
        queue: AdmissionQueue,
        executor: RequestExecutor,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.queue = queue
        self.executor = executor
        self.metrics = metrics
        self._active_tasks: set[asyncio.Task[Any]] = set()
        self._waiting: dict[asyncio.Future[ApiResponse], RequestDescriptor] = {}
        self._closed = False

    @property
    def active_count(self) -> int:
        """Exchanges released and still in flight."""
        return len(self._active_tasks)

    def submit(
        self, descriptor: RequestDescriptor, expedited: bool = False
    ) -> "asyncio.Future[ApiResponse]":
        """
        Queue an exchange and return the future that will hold its outcome.

        Must be called from a running event loop. The future receives either
        the ApiResponse or the classified exception. After ``close()`` the
        future fails with ClientClosedError without being queued.
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[ApiResponse] = loop.create_future()
        if self._closed:
            future.set_exception(ClientClosedError(descriptor.path))
            return future

        def job() -> None:
            if self._waiting.pop(future, None) is None:
                return
            task = loop.create_task(self._run(descriptor, future))
            self._active_tasks.add(task)
            task.add_done_callback(self._active_tasks.discard)

        priority = JobPriority.EXPEDITED if expedited else JobPriority.NORMAL
        self._waiting[future] = descriptor
        self.queue.submit(job, priority)
        return future

    async def dispatch(
        self, descriptor: RequestDescriptor, expedited: bool = False
    ) -> ApiResponse:
        """Queue an exchange and wait for its classified outcome."""
        return await self.submit(descriptor, expedited)

    async def _run(
        self, descriptor: RequestDescriptor, future: "asyncio.Future[ApiResponse]"
    ) -> None:
        try:
            result = await self.executor.execute(descriptor)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            if self.metrics is not None:
                self.metrics.record_outcome(e)
            if not future.done():
                future.set_exception(e)
        else:
            if self.metrics is not None:
                self.metrics.record_outcome(None)
            if not future.done():
                future.set_result(result)

    async def drain(self) -> None:
        """Wait for all exchanges already released to finish."""
        if self._active_tasks:
            await asyncio.gather(*self._active_tasks, return_exceptions=True)

    def close(self) -> None:
        """
        Stop admitting work and fail every exchange that has not started.

        Waiting futures, including jobs released with a latency delay that
        have not run yet, fail with ClientClosedError. Exchanges already in
        flight are left to finish; see ``drain()``.
        """
        self._closed = True
        self.queue.close()
        waiting, self._waiting = self._waiting, {}
        for future, descriptor in waiting.items():
            if not future.done():
                future.set_exception(ClientClosedError(descriptor.path))
        if waiting:
            logger.info(f"Failed {len(waiting)} queued requests on close")

    async def aclose(self) -> None:
        """Close, then wait for in-flight exchanges."""
        self.close()
        await self.drain()

    @property
    def closed(self) -> bool:
        return self._closed


__all__ = ["Dispatcher"]
