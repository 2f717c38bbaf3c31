"""Shared request executor for EO API endpoint modules.

Every authenticated call goes through :func:`request`, which:
- ensures a valid bearer header (proactive, expiry-based re-auth)
- merges default, auth and caller headers
- classifies non-2xx statuses and unparseable bodies

It is internal to pyeomini and may change at any time.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from pyeomini._constants import DEFAULT_HEADERS
from pyeomini._redact import redact_for_log
from pyeomini._transport import Transport
from pyeomini.exceptions import EoMiniRequestError, EoMiniResponseFormatError

_logger = logging.getLogger(__name__)


class Authorizer(Protocol):
    """Anything able to hand out a valid auth header."""

    async def ensure_authorized(self) -> dict[str, str]:
        ...


@dataclass(frozen=True, slots=True)
class ApiResponse:
    """Parsed response of an authenticated request."""

    status: int
    body: Any = field(default_factory=dict)
    raw_body: str = ""


async def request(
    transport: Transport,
    auth: Authorizer,
    method: str,
    endpoint: str,
    *,
    expect: bool = True,
    allow_empty: bool = False,
    headers: Mapping[str, str] | None = None,
    data: str | None = None,
) -> ApiResponse:
    """Perform an authenticated request.

    Parameters
    ----------
    expect : bool
        When ``False`` the body is not parsed and ``body`` is ``{}``.
    allow_empty : bool
        When ``True`` an empty body is returned as ``None`` instead of
        failing JSON parsing.
    headers : Mapping[str, str] or None
        Caller overrides, applied last.
    data : str or None
        Pre-encoded request body.

    Raises
    ------
    EoMiniAuthError
        If authentication was required and failed.
    EoMiniRequestError
        On network failure, timeout or a non-2xx status.
    EoMiniResponseFormatError
        If a JSON body was expected and could not be parsed.
    """
    auth_header = await auth.ensure_authorized()

    merged_headers: dict[str, str] = {**DEFAULT_HEADERS, **auth_header}
    if headers:
        merged_headers.update(headers)

    response = await transport.request(method, endpoint, headers=merged_headers, data=data)
    raw_body = response.text

    _logger.debug("Response %s %s status=%s length=%d", method, endpoint, response.status, len(raw_body))

    if not response.ok:
        raise EoMiniRequestError(
            f"Request failed: {method} {endpoint} status={response.status}: {raw_body[:200]}",
            status=response.status,
            raw_body=raw_body,
            endpoint=endpoint,
        )

    if not expect:
        return ApiResponse(status=response.status, body={}, raw_body=raw_body)

    if allow_empty and not raw_body.strip():
        return ApiResponse(status=response.status, body=None, raw_body=raw_body)

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError as exc:
        raise EoMiniResponseFormatError(
            f"Response not JSON from {endpoint}: {raw_body[:200]}",
            status=response.status,
            raw_body=raw_body,
            endpoint=endpoint,
        ) from exc

    _logger.debug("Response %s %s body=%s", method, endpoint, redact_for_log(body))
    return ApiResponse(status=response.status, body=body, raw_body=raw_body)
