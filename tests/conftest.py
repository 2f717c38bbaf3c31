from __future__ import annotations

import asyncio
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from pyeomini._transport import TransportResponse
from pyeomini.client import EoMiniClient
from pyeomini.config import EoMiniConfig

MINI_ADDRESS = "EO-MINI-1"


def mini_payload(address: str = MINI_ADDRESS, *, is_disabled: int = 0) -> dict[str, Any]:
    return {
        "address": address,
        "isDisabled": is_disabled,
        "ct1": "16.0",
        "ct2": None,
        "ct3": None,
        "advertisedRate": 7.2,
        "voltage": "230",
        "timezone": "Europe/London",
        "chargerAddress": f"{address}-C",
        "hubAddress": f"{address}-H",
        "chargerModel": 11,
        "hubModel": "4",
        "hubSerial": "HUB-0001",
    }


def session_payload(*, is_paused: bool = False) -> dict[str, Any]:
    return {
        "USID": 123456,
        "CPID": 42,
        "PiTime": 1771000000,
        "ESTime": 1771003600,
        "ESCost": "1.25",
        "ESKWH": 6.4,
        "ChargingTime": 3000,
        "ULoc": "home",
        "Location": "Driveway",
        "Voltage": 231.5,
        "IsPaused": is_paused,
        "IsOverridden": False,
    }


class FakeClock:
    """Settable UTC clock for expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@dataclass
class RecordedCall:
    method: str
    endpoint: str
    headers: dict[str, str]
    data: str | None


@dataclass
class FakeEoBackend:
    """In-memory EO API implementing the transport protocol."""

    minis: list[dict[str, Any]] = field(default_factory=lambda: [mini_payload()])
    session: dict[str, Any] | None = None
    alive: bool = False
    hub_status: str = "200"
    mini_status: str = "200"
    expires_in: int = 3600
    login_should_fail: bool = False
    fail_endpoints: set[str] = field(default_factory=set)
    delay: float = 0.0
    calls: list[RecordedCall] = field(default_factory=list)
    logins: int = 0
    in_flight: int = 0
    max_in_flight: int = 0

    def count(self, endpoint: str) -> int:
        return sum(1 for call in self.calls if call.endpoint == endpoint)

    def endpoints(self) -> list[str]:
        return [call.endpoint for call in self.calls]

    def _json(self, body: Any, status: int = 200) -> TransportResponse:
        return TransportResponse(status=status, text=json.dumps(body))

    def _set_disabled(self, data: str | None, value: int) -> None:
        address = (data or "").removeprefix("id=")
        for mini in self.minis:
            if mini["address"] == address:
                mini["isDisabled"] = value

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        self.calls.append(RecordedCall(method, endpoint, dict(headers), data))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            return self._route(method, endpoint, data)
        finally:
            self.in_flight -= 1

    def _route(self, method: str, endpoint: str, data: str | None) -> TransportResponse:
        path = endpoint.split("?", 1)[0]
        if path in self.fail_endpoints:
            return TransportResponse(status=500, text='{"Message":"An error has occurred."}')

        if path == "token":
            if self.login_should_fail:
                return self._json({"error": "invalid_grant"}, status=400)
            self.logins += 1
            return self._json(
                {
                    "access_token": f"tok-{self.logins}",
                    "token_type": "bearer",
                    "expires_in": self.expires_in,
                    "userName": "user@example.com",
                }
            )

        if path == "api/mini/list":
            return self._json(self.minis)

        if path == "api/mini/status":
            return self._json({"hubStatus": self.hub_status, "miniStatus": self.mini_status})

        if path == "api/mini/enable":
            self._set_disabled(data, 0)
            return TransportResponse(status=200, text="")

        if path == "api/mini/disable":
            self._set_disabled(data, 1)
            return TransportResponse(status=200, text="")

        if path == "api/session":
            if self.session is None:
                return TransportResponse(status=200, text="")
            return self._json(self.session)

        if path == "api/session/alive":
            if self.alive:
                return TransportResponse(status=200, text="")
            return TransportResponse(status=404, text="")

        if path in ("api/session/Pause", "api/session/unpause"):
            if self.session is not None:
                self.session["IsPaused"] = path.endswith("Pause")
            return TransportResponse(status=200, text="")

        if path == "api/user":
            return self._json({"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com", "userType": 1})

        if path == "api/vehicle":
            return self._json({"ID": 7, "Manufacturer": "Nissan", "Model": "Leaf", "Year": 2020, "BatteryKWH": "40"})

        return TransportResponse(status=404, text="")


@pytest.fixture
def config() -> EoMiniConfig:
    return EoMiniConfig(username="user@example.com", password="secret", revert_debounce=0.01)


@pytest.fixture
def backend() -> FakeEoBackend:
    return FakeEoBackend()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def client(config: EoMiniConfig, backend: FakeEoBackend, clock: FakeClock) -> EoMiniClient:
    return EoMiniClient(config, transport=backend, clock=clock)
