"""Charging session endpoints.

Endpoints:
  - /api/session
  - /api/session/alive
  - /api/session/Pause, /api/session/unpause
"""

from __future__ import annotations

import logging

from pyeomini._api._common import Authorizer, request
from pyeomini._constants import SESSION_ALIVE_ENDPOINT, SESSION_COMMAND_ENDPOINT, SESSION_ENDPOINT
from pyeomini._transport import Transport
from pyeomini.exceptions import EoMiniError
from pyeomini.models.charge_session import ChargeSession
from pyeomini.models.control import SessionCommand

_logger = logging.getLogger(__name__)


async def fetch_session(transport: Transport, auth: Authorizer) -> ChargeSession | None:
    """Fetch the active session; ``None`` when there is none."""
    response = await request(transport, auth, "GET", SESSION_ENDPOINT, allow_empty=True)
    body = response.body
    if not isinstance(body, dict) or not body:
        return None
    return ChargeSession.model_validate(body)


async def fetch_session_alive(transport: Transport, auth: Authorizer) -> bool:
    """Whether a cable/vehicle is connected.

    The endpoint answers non-2xx when nothing is plugged in, so any
    failure is reported as ``False`` instead of being raised.
    """
    try:
        await request(transport, auth, "GET", SESSION_ALIVE_ENDPOINT, expect=False)
    except EoMiniError as exc:
        _logger.debug("Session not alive: %s", exc)
        return False
    return True


async def send_session_command(transport: Transport, auth: Authorizer, command: SessionCommand) -> None:
    """Pause or unpause the active session."""
    endpoint = SESSION_COMMAND_ENDPOINT.format(command=command.value)
    _logger.debug("Sending %s to active session", command.name)
    await request(transport, auth, "POST", endpoint, expect=False)
