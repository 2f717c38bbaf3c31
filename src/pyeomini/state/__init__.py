"""Accessory state layer.

This package holds the last-emitted characteristic values of each
accessory and decides when a change is reported to the host.
"""

from pyeomini.state.characteristics import Characteristic, CharacteristicValue, ContactState, LockState
from pyeomini.state.revert import PowerRevertGuard, RevertState
from pyeomini.state.store import AccessoryState, CharacteristicStore

__all__ = [
    "AccessoryState",
    "Characteristic",
    "CharacteristicStore",
    "CharacteristicValue",
    "ContactState",
    "LockState",
    "PowerRevertGuard",
    "RevertState",
]
