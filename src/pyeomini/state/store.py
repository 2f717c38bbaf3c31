"""Last-emitted characteristic values with change suppression."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict

from pyeomini.state.characteristics import Characteristic, CharacteristicValue, ContactState, LockState

_logger = logging.getLogger(__name__)

CharacteristicCallback = Callable[[str, Characteristic, CharacteristicValue], None]


class AccessoryState(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    lock_current: LockState = LockState.UNSECURED
    lock_target: LockState = LockState.UNSECURED
    power_on: bool = False
    contact_state: ContactState = ContactState.NOT_DETECTED


_FIELDS: dict[Characteristic, str] = {
    Characteristic.LOCK_CURRENT: "lock_current",
    Characteristic.LOCK_TARGET: "lock_target",
    Characteristic.POWER: "power_on",
    Characteristic.CONTACT: "contact_state",
}


def _label(value: CharacteristicValue) -> str:
    if isinstance(value, (LockState, ContactState)):
        return value.name
    return str(value)


class CharacteristicStore:
    """Holds the :class:`AccessoryState` of one charger.

    ``update`` reports a value to the host callback only when it differs
    from the last emitted one, or when ``forced`` is set.
    """

    def __init__(self, address: str, on_change: CharacteristicCallback | None = None) -> None:
        self._address = address
        self._on_change = on_change
        self._state = AccessoryState()

    @property
    def state(self) -> AccessoryState:
        return self._state.model_copy()

    def get(self, characteristic: Characteristic) -> CharacteristicValue:
        value: CharacteristicValue = getattr(self._state, _FIELDS[characteristic])
        return value

    def update(
        self,
        characteristic: Characteristic,
        value: CharacteristicValue,
        *,
        forced: bool = False,
    ) -> bool:
        """Record *value* and notify the host.

        Returns ``True`` when the host was notified.
        """
        current = self.get(characteristic)
        if value == current and not forced:
            _logger.debug("%s Ignoring update %s %s -> %s", self._address, characteristic, _label(current), _label(value))
            return False

        _logger.info("%s %s %s -> %s", self._address, characteristic, _label(current), _label(value))
        setattr(self._state, _FIELDS[characteristic], value)

        if self._on_change is not None:
            try:
                self._on_change(self._address, characteristic, value)
            except Exception:
                _logger.warning("%s on_change callback failed for %s", self._address, characteristic, exc_info=True)
        return True
