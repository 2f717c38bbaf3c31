"""High-level async client for the EO charger API."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import aiohttp

from pyeomini._api import account as _account_api
from pyeomini._api import charge_session as _session_api
from pyeomini._api import mini as _mini_api
from pyeomini._transport import HttpTransport, Transport
from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import EoMiniError
from pyeomini.models.account import User, Vehicle
from pyeomini.models.charge_session import ChargeSession
from pyeomini.models.control import ChargerCommand, SessionCommand
from pyeomini.models.mini import Mini, MiniStatus
from pyeomini.session import AuthManager, AuthSession, _utcnow


class EoMiniClient:
    """Async client for the EO charger API.

    Usage::

        async with EoMiniClient(config) as client:
            chargers = await client.list_chargers()
            session = await client.get_session()

    Authentication is lazy: the first request logs in, and a new login
    happens whenever the cached token has expired.
    """

    def __init__(
        self,
        config: EoMiniConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._clock = clock
        self._auth: AuthManager | None = AuthManager(config, transport, clock=clock) if transport else None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> EoMiniClient:
        if self._external_transport:
            return self
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession()
        self._transport = HttpTransport(self._config, self._http_session)
        self._auth = AuthManager(self._config, self._transport, clock=self._clock)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if self._external_transport:
            return
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None
        self._auth = None

    @property
    def config(self) -> EoMiniConfig:
        return self._config

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    async def login(self) -> AuthSession:
        """Authenticate now, replacing any cached token."""
        return await self._require_auth().authenticate()

    async def ensure_session(self) -> AuthSession:
        """Return an active session, re-authenticating if expired."""
        auth = self._require_auth()
        await auth.ensure_authorized()
        session = auth.session
        assert session is not None  # noqa: S101
        return session

    def invalidate_session(self) -> None:
        """Force session invalidation (next call will re-authenticate)."""
        self._require_auth().invalidate()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise EoMiniError("Client not initialized. Use 'async with EoMiniClient(...) as client:'")
        return self._transport

    def _require_auth(self) -> AuthManager:
        if self._auth is None:
            raise EoMiniError("Client not initialized. Use 'async with EoMiniClient(...) as client:'")
        return self._auth

    # ------------------------------------------------------------------
    # Chargers
    # ------------------------------------------------------------------

    async def list_chargers(self) -> list[Mini]:
        """Fetch all chargers associated with the account."""
        return await _mini_api.fetch_mini_list(self._require_transport(), self._require_auth())

    async def charger_status(self, address: str) -> MiniStatus:
        """Check hub and charger connectivity.

        Raises :class:`~pyeomini.exceptions.EoMiniConnectivityError` when
        either is reported as not connected.
        """
        return await _mini_api.fetch_mini_status(self._require_transport(), self._require_auth(), address)

    async def send_charger_command(self, address: str, command: ChargerCommand) -> None:
        await _mini_api.send_mini_command(self._require_transport(), self._require_auth(), address, command)

    async def enable_charger(self, address: str) -> None:
        """Enable charging (unlock)."""
        await self.send_charger_command(address, ChargerCommand.ENABLE)

    async def disable_charger(self, address: str) -> None:
        """Disable charging (lock)."""
        await self.send_charger_command(address, ChargerCommand.DISABLE)

    # ------------------------------------------------------------------
    # Charging session
    # ------------------------------------------------------------------

    async def get_session(self) -> ChargeSession | None:
        """Fetch the active charging session, ``None`` if there is none."""
        return await _session_api.fetch_session(self._require_transport(), self._require_auth())

    async def is_session_alive(self) -> bool:
        """Whether a cable/vehicle is connected. Never raises for API failures."""
        return await _session_api.fetch_session_alive(self._require_transport(), self._require_auth())

    async def send_session_command(self, command: SessionCommand) -> None:
        await _session_api.send_session_command(self._require_transport(), self._require_auth(), command)

    async def pause_session(self) -> None:
        await self.send_session_command(SessionCommand.PAUSE)

    async def resume_session(self) -> None:
        await self.send_session_command(SessionCommand.UNPAUSE)

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------

    async def get_user(self) -> User:
        """Fetch the authenticated user's profile."""
        return await _account_api.fetch_user(self._require_transport(), self._require_auth())

    async def get_vehicle(self) -> Vehicle:
        """Fetch the vehicle registered on the account."""
        return await _account_api.fetch_vehicle(self._require_transport(), self._require_auth())
