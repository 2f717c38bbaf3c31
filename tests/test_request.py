from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

import pytest

from pyeomini._api._common import request
from pyeomini._transport import TransportResponse
from pyeomini.exceptions import EoMiniAuthError, EoMiniRequestError, EoMiniResponseFormatError


@dataclass
class _StaticTransport:
    status: int = 200
    text: str = "{}"
    seen_headers: list[dict[str, str]] = field(default_factory=list)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        self.seen_headers.append(dict(headers))
        return TransportResponse(status=self.status, text=self.text)


class _StaticAuth:
    async def ensure_authorized(self) -> dict[str, str]:
        return {"Authorization": "Bearer abc"}


class _FailingAuth:
    async def ensure_authorized(self) -> dict[str, str]:
        raise EoMiniAuthError("Response not ok", status=400)


@pytest.mark.asyncio
async def test_headers_merge_defaults_auth_and_overrides() -> None:
    transport = _StaticTransport()

    await request(
        transport,
        _StaticAuth(),
        "POST",
        "api/mini/enable",
        expect=False,
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )

    assert transport.seen_headers == [
        {
            "Accept": "application/json",
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": "Bearer abc",
        }
    ]


@pytest.mark.asyncio
async def test_json_body_is_parsed() -> None:
    response = await request(_StaticTransport(text='[{"address": "A"}]'), _StaticAuth(), "GET", "api/mini/list")

    assert response.status == 200
    assert response.body == [{"address": "A"}]


@pytest.mark.asyncio
async def test_non_success_status_raises_request_error() -> None:
    transport = _StaticTransport(status=503, text="Service Unavailable")

    with pytest.raises(EoMiniRequestError) as exc_info:
        await request(transport, _StaticAuth(), "GET", "api/session")

    err = exc_info.value
    assert not isinstance(err, EoMiniResponseFormatError)
    assert err.status == 503
    assert err.endpoint == "api/session"
    assert err.raw_body == "Service Unavailable"


@pytest.mark.asyncio
async def test_invalid_json_raises_format_error() -> None:
    with pytest.raises(EoMiniResponseFormatError) as exc_info:
        await request(_StaticTransport(text="<html>oops</html>"), _StaticAuth(), "GET", "api/user")

    assert exc_info.value.status == 200
    assert isinstance(exc_info.value, EoMiniRequestError)


@pytest.mark.asyncio
async def test_unexpected_body_is_not_parsed() -> None:
    response = await request(_StaticTransport(text="not json"), _StaticAuth(), "GET", "api/session/alive", expect=False)

    assert response.body == {}
    assert response.raw_body == "not json"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "  \n"])
async def test_empty_body_allowed_when_requested(text: str) -> None:
    response = await request(_StaticTransport(text=text), _StaticAuth(), "GET", "api/session", allow_empty=True)

    assert response.body is None


@pytest.mark.asyncio
async def test_empty_body_is_format_error_by_default() -> None:
    with pytest.raises(EoMiniResponseFormatError):
        await request(_StaticTransport(text=""), _StaticAuth(), "GET", "api/session")


@pytest.mark.asyncio
async def test_auth_failure_aborts_before_transport() -> None:
    transport = _StaticTransport()

    with pytest.raises(EoMiniAuthError):
        await request(transport, _FailingAuth(), "GET", "api/mini/list")

    assert transport.seen_headers == []
