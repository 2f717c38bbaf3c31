"""Per-charger accessory state reconciliation.

A :class:`ChargerAccessory` maps the remote truth of one charger (its
device snapshot, the active charging session and the session alive flag)
onto three characteristics:

* lock: ``SECURED`` when the charger is disabled,
* power: ``True`` while a session exists and is not paused,
* contact: ``DETECTED`` while a cable/vehicle is connected.

Every remote call is admitted through the shared
:class:`~pyeomini._queue.CommandQueue`.  User commands update their
characteristic optimistically before the queued call runs.  A failed lock
command moves the current lock state to ``UNKNOWN``; a failed power
command is only logged and left for the next poll to correct.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pyeomini._constants import DEFAULT_REVERT_DEBOUNCE, MANUFACTURER
from pyeomini._queue import CommandQueue
from pyeomini.client import EoMiniClient
from pyeomini.exceptions import EoMiniError
from pyeomini.models.charge_session import ChargeSession
from pyeomini.models.control import ChargerCommand, SessionCommand
from pyeomini.models.mini import Mini
from pyeomini.state.characteristics import Characteristic, ContactState, LockState
from pyeomini.state.revert import PowerRevertGuard
from pyeomini.state.store import AccessoryState, CharacteristicCallback, CharacteristicStore

_logger = logging.getLogger(__name__)

_LOCK_COMMANDS: dict[LockState, ChargerCommand] = {
    LockState.SECURED: ChargerCommand.DISABLE,
    LockState.UNSECURED: ChargerCommand.ENABLE,
}

_POWER_COMMANDS: dict[bool, SessionCommand] = {
    True: SessionCommand.UNPAUSE,
    False: SessionCommand.PAUSE,
}


class ChargerAccessory:
    """Reconciler for one charger.

    Parameters
    ----------
    device : Mini
        Initial device snapshot.
    client : EoMiniClient
        API client shared by the platform.
    queue : CommandQueue
        Queue shared by every accessory of the platform.
    on_characteristic : callable, optional
        ``(address, characteristic, value)`` callback invoked on every
        emitted change.
    revert_debounce : float
        Delay before a rejected power command is reverted.
    """

    def __init__(
        self,
        device: Mini,
        client: EoMiniClient,
        queue: CommandQueue,
        *,
        on_characteristic: CharacteristicCallback | None = None,
        revert_debounce: float = DEFAULT_REVERT_DEBOUNCE,
    ) -> None:
        self._device = device
        self._pending_device: Mini | None = None
        self._client = client
        self._queue = queue
        self._session: ChargeSession | None = None
        self._session_alive = False
        self._store = CharacteristicStore(device.address, on_characteristic)
        self._power_guard = PowerRevertGuard(device.address, self._revert_power, debounce=revert_debounce)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    @property
    def address(self) -> str:
        return self._device.address

    @property
    def device(self) -> Mini:
        return self._device

    @property
    def session(self) -> ChargeSession | None:
        return self._session

    @property
    def session_alive(self) -> bool:
        return self._session_alive

    @property
    def information(self) -> dict[str, str]:
        """Accessory information fields for the host."""
        return {
            "manufacturer": MANUFACTURER,
            "model": "" if self._device.charger_model is None else str(self._device.charger_model),
            "serial_number": self._device.charger_address,
        }

    @property
    def has_pending_snapshot(self) -> bool:
        return self._pending_device is not None

    def notify_snapshot(self, device: Mini) -> None:
        """Record a newer device snapshot; it is adopted by the next session check."""
        if device.address != self.address:
            raise ValueError(f"Snapshot for {device.address} handed to accessory {self.address}")
        self._pending_device = device

    # ------------------------------------------------------------------
    # Characteristic getters
    # ------------------------------------------------------------------

    @property
    def state(self) -> AccessoryState:
        return self._store.state

    @property
    def lock_current(self) -> LockState:
        return self._store.state.lock_current

    @property
    def lock_target(self) -> LockState:
        return self._store.state.lock_target

    @property
    def power_on(self) -> bool:
        return self._store.state.power_on

    @property
    def contact_state(self) -> ContactState:
        return self._store.state.contact_state

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def poll(self) -> asyncio.Future[None] | None:
        """Called on every tick of the polling loop.

        Skips while the queue has work, so polling never piles up behind
        a slow command.  Otherwise re-checks the session when a newer
        snapshot is waiting.
        """
        if self._queue.busy:
            _logger.debug("%s Skipping update (queue is not empty)", self.address)
            return None
        if self._pending_device is None:
            return None
        _logger.debug("%s Checking for updates", self.address)
        return self.check_session()

    def check_session(self) -> asyncio.Future[None]:
        _logger.debug("%s Check session", self.address)
        future = self._queue.enqueue(self._check_session, name=f"check_session:{self.address}")
        future.add_done_callback(self._log_check_failure)
        return future

    def _log_check_failure(self, future: asyncio.Future[None]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            _logger.error("%s Session check crashed: %r", self.address, exc, exc_info=exc)

    async def _check_session(self) -> None:
        if self._pending_device is not None:
            self._device = self._pending_device
            self._pending_device = None

        try:
            session = await self._client.get_session()
            alive = await self._client.is_session_alive()
        except EoMiniError as exc:
            _logger.error("%s Failed to check session: %s", self.address, exc)
            return

        self._session = session
        self._session_alive = alive
        self.compute_all()

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def compute_all(self) -> None:
        _logger.debug("%s Computing all", self.address)

        lock_state = self.compute_lock_current()
        self._store.update(Characteristic.LOCK_CURRENT, lock_state)
        # Target and current only diverge while a user command is in flight.
        self._store.update(Characteristic.LOCK_TARGET, lock_state, forced=True)
        self._store.update(Characteristic.POWER, self.compute_power_on())
        self._store.update(Characteristic.CONTACT, self.compute_contact_state())

    def compute_lock_current(self) -> LockState:
        return LockState.SECURED if self._device.is_disabled == 1 else LockState.UNSECURED

    def compute_power_on(self) -> bool:
        if self._session is None:
            return False
        return not self._session.is_paused

    def compute_contact_state(self) -> ContactState:
        if self._session_alive:
            return ContactState.DETECTED
        return ContactState.NOT_DETECTED

    # ------------------------------------------------------------------
    # Lock commands
    # ------------------------------------------------------------------

    def set_lock_target(self, value: Any) -> asyncio.Future[None] | None:
        """Request a lock state.

        Returns the future of the queued command, or ``None`` when the
        request was ignored.
        """
        try:
            target = LockState(value)
        except ValueError:
            target = None
        if target is None or target not in _LOCK_COMMANDS:
            _logger.error("%s Unknown lock target %r", self.address, value)
            return None

        state = self._store.state
        if target == state.lock_target and target == state.lock_current:
            _logger.debug("%s Ignoring lock target %s, already in place", self.address, target.name)
            return None

        self._store.update(Characteristic.LOCK_TARGET, target)
        return self._queue.enqueue(
            lambda: self._apply_lock(target),
            name=f"lock:{self.address}:{target.name}",
        )

    async def _apply_lock(self, target: LockState) -> None:
        command = _LOCK_COMMANDS[target]
        _logger.info("%s Attempt to %s", self.address, command.name.lower())
        try:
            await self._client.send_charger_command(self.address, command)
        except EoMiniError as exc:
            _logger.error("%s Failed to %s: %s", self.address, command.name.lower(), exc)
            self._store.update(Characteristic.LOCK_CURRENT, LockState.UNKNOWN)
            return

        _logger.info("%s Complete to %s", self.address, command.name.lower())
        is_disabled = 1 if target is LockState.SECURED else 0
        self._device = self._device.model_copy(update={"is_disabled": is_disabled})
        if self._pending_device is not None:
            self._pending_device = self._pending_device.model_copy(update={"is_disabled": is_disabled})
        self._store.update(Characteristic.LOCK_CURRENT, target)
        # A session check queued ahead of this command may have reset the target.
        self._store.update(Characteristic.LOCK_TARGET, target)

    # ------------------------------------------------------------------
    # Power commands
    # ------------------------------------------------------------------

    def set_power_on(self, value: Any) -> asyncio.Future[None] | None:
        """Request charging to be paused (``False``) or resumed (``True``).

        Without a live session the request is rejected and the power
        characteristic is forced back to ``False`` after the debounce.
        Returns the future of the queued command, or ``None`` when the
        request was rejected or ignored.
        """
        if not isinstance(value, bool):
            _logger.error("%s Unknown power value %r", self.address, value)
            return None

        if not self._session_alive:
            if self._power_guard.reject():
                _logger.warning("%s Session not alive, rejecting power %s", self.address, value)
            return None

        self._power_guard.reset()

        if value == self._store.state.power_on:
            _logger.debug("%s Ignoring power %s, already in place", self.address, value)
            return None

        self._store.update(Characteristic.POWER, value)
        return self._queue.enqueue(
            lambda: self._apply_power(value),
            name=f"power:{self.address}:{value}",
        )

    async def _apply_power(self, value: bool) -> None:
        command = _POWER_COMMANDS[value]
        _logger.info("%s Attempt to %s", self.address, command.name.lower())
        try:
            await self._client.send_session_command(command)
        except EoMiniError as exc:
            _logger.error("%s Failed to %s: %s", self.address, command.name.lower(), exc)
            return

        _logger.info("%s Complete to %s", self.address, command.name.lower())
        if self._session is not None:
            self._session = self._session.model_copy(update={"is_paused": not value})

    def _revert_power(self) -> None:
        self._store.update(Characteristic.POWER, False, forced=True)

    def close(self) -> None:
        """Cancel pending timers; queued commands are left to the queue owner."""
        self._power_guard.reset()
