"""Session state management for authenticated API calls."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel, ConfigDict

from pyeomini._api.login import TOKEN_HEADERS, build_token_form, parse_token_response
from pyeomini._constants import TOKEN_ENDPOINT
from pyeomini._transport import Transport
from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import EoMiniAuthError, EoMiniRequestError
from pyeomini.models.token import AuthToken

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthSession(BaseModel):
    """Immutable bearer session.

    Parameters
    ----------
    token : str
        Bearer token.
    expires_at : datetime
        Aware UTC instant after which the token must not be used.
    raw : AuthToken
        The token response the session was built from.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str
    expires_at: datetime
    raw: AuthToken

    @classmethod
    def from_token(cls, token: AuthToken, *, now: datetime) -> AuthSession:
        return cls(
            token=token.access_token,
            expires_at=now + timedelta(seconds=token.expires_in),
            raw=token,
        )

    def is_valid(self, now: datetime) -> bool:
        """A session is valid strictly before its expiry."""
        return now < self.expires_at

    @property
    def header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class AuthManager:
    """Owns the bearer session of one client.

    ``ensure_authorized`` returns the auth header, authenticating first
    when there is no session or the cached one has expired.  A lock keeps
    concurrent callers from authenticating twice.
    """

    def __init__(
        self,
        config: EoMiniConfig,
        transport: Transport,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._config = config
        self._transport = transport
        self._clock = clock
        self._session: AuthSession | None = None
        self._lock = asyncio.Lock()

    @property
    def session(self) -> AuthSession | None:
        return self._session

    @property
    def is_authorized(self) -> bool:
        return self._session is not None and self._session.is_valid(self._clock())

    async def ensure_authorized(self) -> dict[str, str]:
        """Return the auth header, re-authenticating if required."""
        session = self._session
        if session is not None and session.is_valid(self._clock()):
            return session.header

        async with self._lock:
            # Another caller may have authenticated while we waited.
            session = self._session
            if session is None or not session.is_valid(self._clock()):
                session = await self._authenticate()
            return session.header

    async def authenticate(self) -> AuthSession:
        """Force a new authentication regardless of the cached session."""
        async with self._lock:
            return await self._authenticate()

    def invalidate(self) -> None:
        """Drop the cached session (next call will re-authenticate)."""
        self._session = None

    async def _authenticate(self) -> AuthSession:
        self._session = None
        _logger.debug("Authenticating against %s", TOKEN_ENDPOINT)

        try:
            response = await self._transport.request(
                "POST",
                TOKEN_ENDPOINT,
                headers=TOKEN_HEADERS,
                data=build_token_form(self._config),
            )
        except EoMiniRequestError as exc:
            raise EoMiniAuthError(str(exc), status=exc.status, raw_body=exc.raw_body) from exc

        try:
            token = parse_token_response(response)
        except EoMiniAuthError as exc:
            _logger.warning("Authentication failed: %s (status=%s)", exc.reason, exc.status)
            raise

        session = AuthSession.from_token(token, now=self._clock())
        self._session = session
        _logger.debug("Authenticated, token expires at %s", session.expires_at.isoformat())
        return session
