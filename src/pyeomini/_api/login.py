"""Token endpoint.

Endpoint:
  - /token (form-encoded password grant, no bearer header)
"""

from __future__ import annotations

import json
import logging
from urllib.parse import urlencode

from pydantic import ValidationError

from pyeomini._constants import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE
from pyeomini._redact import redact_for_log
from pyeomini._transport import TransportResponse
from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import EoMiniAuthError
from pyeomini.models.token import AuthToken

_logger = logging.getLogger(__name__)

TOKEN_HEADERS: dict[str, str] = {
    "Content-Type": FORM_CONTENT_TYPE,
    "Accept": JSON_CONTENT_TYPE,
}


def build_token_form(config: EoMiniConfig) -> str:
    """Build the form body for the password grant."""
    return urlencode(
        {
            "grant_type": "password",
            "username": config.username,
            "password": config.password,
        }
    )


def parse_token_response(response: TransportResponse) -> AuthToken:
    """Parse the token response.

    Parameters
    ----------
    response : TransportResponse
        Raw response of the token endpoint.

    Returns
    -------
    AuthToken
        The parsed token.

    Raises
    ------
    EoMiniAuthError
        If the status is not 2xx, the body is not a JSON object, or the
        token fields are missing.
    """
    raw_body = response.text

    if not response.ok:
        raise EoMiniAuthError("Response not ok", status=response.status, raw_body=raw_body)

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError as exc:
        raise EoMiniAuthError("Response not JSON", status=response.status, raw_body=raw_body) from exc

    if not isinstance(body, dict):
        raise EoMiniAuthError("Response not JSON object", status=response.status, raw_body=raw_body)

    _logger.debug("Token response parsed=%s", redact_for_log(body))

    if not body.get("access_token"):
        raise EoMiniAuthError("No access token", status=response.status, raw_body=raw_body)
    if not body.get("expires_in"):
        raise EoMiniAuthError("No expiration time", status=response.status, raw_body=raw_body)

    try:
        token = AuthToken.model_validate(body)
    except ValidationError as exc:
        raise EoMiniAuthError("Response not a token", status=response.status, raw_body=raw_body) from exc
    if token.expires_in <= 0:
        raise EoMiniAuthError("No expiration time", status=response.status, raw_body=raw_body)
    return token
