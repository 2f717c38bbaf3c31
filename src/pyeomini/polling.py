"""Background polling loop."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable

from pyeomini.exceptions import EoMiniError
from pyeomini.platform import ChargerPlatform

_logger = logging.getLogger(__name__)


class Poller:
    """Drives a :class:`ChargerPlatform` on a fixed cadence.

    Every ``interval`` seconds each accessory is polled; every
    ``refresh_interval`` seconds the charger list is refreshed.  Both
    yield when the command queue already has work.
    """

    def __init__(
        self,
        platform: ChargerPlatform,
        *,
        interval: float | None = None,
        refresh_interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._platform = platform
        self._interval = interval if interval is not None else platform.config.poll_interval
        self._refresh_interval = refresh_interval if refresh_interval is not None else platform.config.refresh_rate
        self._clock = clock
        self._last_refresh: float | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._last_refresh = self._clock()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pyeomini-poller")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def tick(self) -> None:
        """Run one polling step."""
        if self._refresh_due():
            if self._platform.queue.busy:
                _logger.debug("Skipping device refresh (queue is not empty)")
            else:
                self._last_refresh = self._clock()
                try:
                    await self._platform.refresh_devices()
                except EoMiniError as exc:
                    _logger.error("Failed to refresh devices: %s", exc)
        self._platform.poll()

    def _refresh_due(self) -> bool:
        if self._last_refresh is None:
            return True
        return self._clock() - self._last_refresh >= self._refresh_interval

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.tick()
            except Exception:
                _logger.exception("Polling tick failed")
