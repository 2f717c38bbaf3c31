"""Characteristic identifiers and values exposed to the host."""

from __future__ import annotations

import enum


class Characteristic(enum.StrEnum):
    LOCK_CURRENT = "lock_current"
    LOCK_TARGET = "lock_target"
    POWER = "power"
    CONTACT = "contact"


class LockState(enum.IntEnum):
    """Lock axis.  ``SECURED`` means charging is disabled.

    ``UNKNOWN`` is only ever a current state, reached when a lock
    command fails.
    """

    UNSECURED = 0
    SECURED = 1
    UNKNOWN = 3


class ContactState(enum.IntEnum):
    """Contact axis, driven by the session alive flag."""

    DETECTED = 0
    NOT_DETECTED = 1


CharacteristicValue = LockState | ContactState | bool
