"""Serialized execution of remote operations.

All calls that touch the EO API (polling refreshes, session checks,
lock and power commands) are admitted through one :class:`CommandQueue`
so they run one at a time, in submission order.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")

CommandTask = Callable[[], Awaitable[Any]]


@dataclass(slots=True)
class _Job:
    """A queued task and the future its caller awaits."""

    task: CommandTask
    future: asyncio.Future[Any]
    name: str


class CommandQueue:
    """FIFO queue with a concurrency of one.

    Tasks are zero-argument coroutine functions.  A failing task only
    fails its own future; the following tasks run as usual.
    """

    def __init__(self) -> None:
        self._jobs: asyncio.Queue[_Job] = asyncio.Queue()
        self._worker: asyncio.Task[None] | None = None
        self._in_flight: int = 0
        self._closed = False

    @property
    def size(self) -> int:
        """Number of tasks waiting to start."""
        return self._jobs.qsize()

    @property
    def pending(self) -> int:
        """Number of tasks currently executing (0 or 1)."""
        return self._in_flight

    @property
    def busy(self) -> bool:
        return self.size + self.pending > 0

    def enqueue(self, task: Callable[[], Awaitable[T]], *, name: str | None = None) -> asyncio.Future[T]:
        """Schedule *task* and return a future resolving to its result."""
        if self._closed:
            raise RuntimeError("CommandQueue is closed")
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._jobs.put_nowait(_Job(task=task, future=future, name=name or getattr(task, "__name__", "task")))
        self._ensure_worker()
        return future

    async def join(self) -> None:
        """Wait until every task enqueued so far has finished."""
        await self._jobs.join()

    async def close(self) -> None:
        """Stop the worker and cancel every task that has not finished."""
        self._closed = True
        worker = self._worker
        self._worker = None
        if worker is not None:
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker
        while not self._jobs.empty():
            job = self._jobs.get_nowait()
            job.future.cancel()
            self._jobs.task_done()

    def _ensure_worker(self) -> None:
        if self._worker is None or self._worker.done():
            self._worker = asyncio.get_running_loop().create_task(self._run(), name="pyeomini-command-queue")

    async def _run(self) -> None:
        while True:
            job = await self._jobs.get()
            self._in_flight = 1
            try:
                if job.future.cancelled():
                    continue
                try:
                    result = await job.task()
                except asyncio.CancelledError:
                    job.future.cancel()
                    raise
                except Exception as exc:
                    _logger.debug("Queued task %s failed", job.name, exc_info=True)
                    if not job.future.done():
                        job.future.set_exception(exc)
                else:
                    if not job.future.done():
                        job.future.set_result(result)
            finally:
                self._in_flight = 0
                self._jobs.task_done()
