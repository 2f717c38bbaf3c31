from __future__ import annotations

import asyncio
from collections.abc import Mapping

import pytest

from pyeomini import (
    Characteristic,
    ChargerPlatform,
    ContactState,
    EoMiniClient,
    EoMiniConfig,
    LockState,
    Poller,
)
from pyeomini._transport import HttpTransport, TransportResponse
from pyeomini.state import CharacteristicValue

from conftest import MINI_ADDRESS, FakeEoBackend, session_payload


def _patch_transport(monkeypatch: pytest.MonkeyPatch, backend: FakeEoBackend) -> None:
    async def _fake_request(
        self: HttpTransport,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        return await backend.request(method, endpoint, headers=headers, data=data)

    monkeypatch.setattr(HttpTransport, "request", _fake_request)


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_read_only_flow(monkeypatch: pytest.MonkeyPatch, backend: FakeEoBackend) -> None:
    _patch_transport(monkeypatch, backend)
    backend.session = session_payload()
    backend.alive = True
    config = EoMiniConfig(username="user@example.com", password="secret")

    async with EoMiniClient(config) as client:
        chargers = await client.list_chargers()
        status = await client.charger_status(chargers[0].address)
        session = await client.get_session()
        alive = await client.is_session_alive()
        user = await client.get_user()
        vehicle = await client.get_vehicle()

    assert chargers[0].address == MINI_ADDRESS
    assert status.is_hub_connected
    assert session is not None and session.is_charging
    assert alive is True
    assert user.email == "ada@example.com"
    assert vehicle.year == 2020
    assert backend.logins == 1


@pytest.mark.asyncio
@pytest.mark.e2e
async def test_e2e_platform_commands_and_polling(monkeypatch: pytest.MonkeyPatch, backend: FakeEoBackend) -> None:
    _patch_transport(monkeypatch, backend)
    backend.session = session_payload(is_paused=False)
    backend.alive = True
    config = EoMiniConfig(
        username="user@example.com",
        password="secret",
        poll_interval=0.01,
        refresh_rate=0.02,
        revert_debounce=0.01,
    )
    events: list[tuple[str, Characteristic, CharacteristicValue]] = []

    async with EoMiniClient(config) as client:
        platform = ChargerPlatform(
            config,
            client,
            on_characteristic=lambda address, characteristic, value: events.append((address, characteristic, value)),
        )
        await platform.discover_devices()
        await platform.queue.join()
        accessory = platform.get(MINI_ADDRESS)
        assert accessory is not None
        assert accessory.power_on is True
        assert accessory.contact_state is ContactState.DETECTED

        lock = accessory.set_lock_target(LockState.SECURED)
        power = accessory.set_power_on(False)
        assert lock is not None and power is not None
        await asyncio.gather(lock, power)

        assert accessory.lock_current is LockState.SECURED
        assert backend.minis[0]["isDisabled"] == 1
        assert backend.session is not None and backend.session["IsPaused"] is True

        # Cable unplugged on the remote side; the next refresh picks it up.
        backend.session = None
        backend.alive = False
        poller = Poller(platform)
        poller.start()
        for _ in range(100):
            if accessory.contact_state is ContactState.NOT_DETECTED:
                break
            await asyncio.sleep(0.01)
        await poller.stop()
        await platform.close()

    assert accessory.contact_state is ContactState.NOT_DETECTED
    assert accessory.power_on is False
    assert accessory.lock_current is LockState.SECURED
    assert backend.max_in_flight == 1
    assert (MINI_ADDRESS, Characteristic.LOCK_TARGET, LockState.SECURED) in events
