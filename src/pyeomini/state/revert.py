"""Debounced revert of rejected power commands.

When the host asks to turn power on while no session is alive, the
request is rejected and the power characteristic is forced back to
``False`` after a short debounce.  Forcing the value back makes the host
echo a set call of its own; exactly one such re-entry is swallowed.

Transitions:

* ``IDLE --reject--> PENDING_REVERT``: schedule the revert.
* ``PENDING_REVERT --reject--> PENDING_REVERT``: before the revert fired,
  repeated calls are debounced into the scheduled revert.
* ``PENDING_REVERT --reject--> IDLE``: after the revert fired, the echo
  is suppressed.
* ``PENDING_REVERT --expire--> IDLE``: no echo arrived within one more
  debounce window after the revert fired.
* ``* --reset--> IDLE``: pending work is cancelled.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable

_logger = logging.getLogger(__name__)


class RevertState(enum.StrEnum):
    IDLE = "idle"
    PENDING_REVERT = "pending_revert"


class PowerRevertGuard:
    """Two-state machine driving the power revert."""

    def __init__(self, address: str, revert: Callable[[], None], *, debounce: float) -> None:
        self._address = address
        self._revert = revert
        self._debounce = debounce
        self._state = RevertState.IDLE
        self._reverted = False
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> RevertState:
        return self._state

    def reject(self) -> bool:
        """Handle a rejected power command.

        Returns ``True`` when a revert was scheduled and ``False`` when the
        call was absorbed by one already pending.
        """
        if self._state is RevertState.PENDING_REVERT:
            if self._reverted:
                _logger.debug("%s Suppressing power re-entry", self._address)
                self._to_idle()
            else:
                _logger.debug("%s Power revert already scheduled", self._address)
            return False

        self._state = RevertState.PENDING_REVERT
        self._reverted = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    def reset(self) -> None:
        self._to_idle()

    def _to_idle(self) -> None:
        task = self._task
        self._task = None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
        self._state = RevertState.IDLE
        self._reverted = False

    async def _run(self) -> None:
        await asyncio.sleep(self._debounce)
        self._reverted = True
        try:
            self._revert()
        except Exception:
            _logger.warning("%s Power revert failed", self._address, exc_info=True)
        if self._task is not asyncio.current_task():
            return
        await asyncio.sleep(self._debounce)
        if self._task is asyncio.current_task():
            _logger.debug("%s No power echo received, guard expired", self._address)
            self._task = None
            self._state = RevertState.IDLE
            self._reverted = False
