from __future__ import annotations

import logging

import pytest

from pyeomini.state import Characteristic, CharacteristicStore, CharacteristicValue, ContactState, LockState

ADDRESS = "EO-MINI-1"


def _recording_store() -> tuple[CharacteristicStore, list[tuple[Characteristic, CharacteristicValue]]]:
    events: list[tuple[Characteristic, CharacteristicValue]] = []

    def on_change(address: str, characteristic: Characteristic, value: CharacteristicValue) -> None:
        assert address == ADDRESS
        events.append((characteristic, value))

    return CharacteristicStore(ADDRESS, on_change), events


def test_initial_state() -> None:
    store, _ = _recording_store()

    state = store.state
    assert state.lock_current is LockState.UNSECURED
    assert state.lock_target is LockState.UNSECURED
    assert state.power_on is False
    assert state.contact_state is ContactState.NOT_DETECTED


def test_unchanged_value_is_suppressed() -> None:
    store, events = _recording_store()

    assert store.update(Characteristic.POWER, False) is False
    assert store.update(Characteristic.CONTACT, ContactState.NOT_DETECTED) is False
    assert events == []


def test_changed_value_is_emitted_once() -> None:
    store, events = _recording_store()

    assert store.update(Characteristic.LOCK_CURRENT, LockState.SECURED) is True
    assert store.update(Characteristic.LOCK_CURRENT, LockState.SECURED) is False

    assert events == [(Characteristic.LOCK_CURRENT, LockState.SECURED)]
    assert store.get(Characteristic.LOCK_CURRENT) is LockState.SECURED


def test_forced_update_is_emitted_even_when_unchanged() -> None:
    store, events = _recording_store()

    assert store.update(Characteristic.LOCK_TARGET, LockState.UNSECURED, forced=True) is True
    assert store.update(Characteristic.POWER, False, forced=True) is True

    assert events == [(Characteristic.LOCK_TARGET, LockState.UNSECURED), (Characteristic.POWER, False)]


def test_state_snapshot_is_a_copy() -> None:
    store, _ = _recording_store()
    snapshot = store.state

    store.update(Characteristic.POWER, True)

    assert snapshot.power_on is False
    assert store.state.power_on is True


def test_callback_failure_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    def broken(address: str, characteristic: Characteristic, value: CharacteristicValue) -> None:
        raise RuntimeError("host went away")

    store = CharacteristicStore(ADDRESS, broken)

    with caplog.at_level(logging.WARNING, logger="pyeomini.state.store"):
        assert store.update(Characteristic.CONTACT, ContactState.DETECTED) is True

    assert store.get(Characteristic.CONTACT) is ContactState.DETECTED
    assert "on_change callback failed" in caplog.text


def test_changes_are_logged_at_info(caplog: pytest.LogCaptureFixture) -> None:
    store, _ = _recording_store()

    with caplog.at_level(logging.INFO, logger="pyeomini.state.store"):
        store.update(Characteristic.LOCK_CURRENT, LockState.UNKNOWN)

    assert "EO-MINI-1 lock_current UNSECURED -> UNKNOWN" in caplog.text
