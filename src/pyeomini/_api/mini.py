"""Charger endpoints.

Endpoints:
  - /api/mini/list
  - /api/mini/status?address=...
  - /api/mini/enable, /api/mini/disable
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

from pydantic import ValidationError

from pyeomini._api._common import Authorizer, request
from pyeomini._constants import (
    FORM_CONTENT_TYPE,
    MINI_COMMAND_ENDPOINT,
    MINI_LIST_ENDPOINT,
    MINI_STATUS_ENDPOINT,
)
from pyeomini._transport import Transport
from pyeomini.exceptions import EoMiniConnectivityError, EoMiniResponseFormatError
from pyeomini.models.control import ChargerCommand
from pyeomini.models.mini import Mini, MiniStatus

_logger = logging.getLogger(__name__)


async def fetch_mini_list(transport: Transport, auth: Authorizer) -> list[Mini]:
    """Fetch all chargers on the account (in practice exactly one)."""
    response = await request(transport, auth, "GET", MINI_LIST_ENDPOINT)
    if not isinstance(response.body, list):
        raise EoMiniResponseFormatError(
            f"Expected a list from {MINI_LIST_ENDPOINT}",
            status=response.status,
            raw_body=response.raw_body,
            endpoint=MINI_LIST_ENDPOINT,
        )
    try:
        return [Mini.model_validate(item) for item in response.body if isinstance(item, dict)]
    except ValidationError as exc:
        raise EoMiniResponseFormatError(
            f"Unexpected charger entry from {MINI_LIST_ENDPOINT}: {exc.errors()[0]['msg']}",
            status=response.status,
            raw_body=response.raw_body,
            endpoint=MINI_LIST_ENDPOINT,
        ) from exc


async def fetch_mini_status(transport: Transport, auth: Authorizer, address: str) -> MiniStatus:
    """Fetch hub/charger reachability.

    Raises
    ------
    EoMiniConnectivityError
        Unless both status codes look like HTTP 2xx codes.
    """
    endpoint = f"{MINI_STATUS_ENDPOINT}?{urlencode({'address': address})}"
    response = await request(transport, auth, "GET", endpoint)
    if not isinstance(response.body, dict):
        raise EoMiniResponseFormatError(
            f"Expected an object from {MINI_STATUS_ENDPOINT}",
            status=response.status,
            raw_body=response.raw_body,
            endpoint=MINI_STATUS_ENDPOINT,
        )

    status = MiniStatus.model_validate(response.body)
    if not status.is_hub_connected:
        raise EoMiniConnectivityError(
            f"HUB not connected ({status.hub_status})",
            hub_status=status.hub_status,
            mini_status=status.mini_status,
        )
    if not status.is_mini_connected:
        raise EoMiniConnectivityError(
            f"MINI not connected ({status.mini_status})",
            hub_status=status.hub_status,
            mini_status=status.mini_status,
        )
    return status


async def send_mini_command(
    transport: Transport,
    auth: Authorizer,
    address: str,
    command: ChargerCommand,
) -> None:
    """Enable or disable a charger."""
    endpoint = MINI_COMMAND_ENDPOINT.format(command=command.value)
    _logger.debug("Sending %s to charger %s", command.name, address)
    await request(
        transport,
        auth,
        "POST",
        endpoint,
        expect=False,
        headers={"Content-Type": FORM_CONTENT_TYPE},
        data=urlencode({"id": address}),
    )
