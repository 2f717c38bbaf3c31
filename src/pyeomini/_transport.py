"""HTTP transport for the EO cloud API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import aiohttp

from pyeomini.config import EoMiniConfig
from pyeomini.exceptions import EoMiniRequestError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Status code and undecoded body of an HTTP exchange."""

    status: int
    text: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        ...


class HttpTransport:
    """aiohttp-backed transport with a bounded per-request timeout."""

    def __init__(self, config: EoMiniConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def url_for(self, endpoint: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{endpoint.lstrip('/')}"

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        headers: Mapping[str, str],
        data: str | None = None,
    ) -> TransportResponse:
        """Send one request and return its status and body text.

        Network failures and timeouts are raised as
        :class:`EoMiniRequestError` without a status code.  Non-2xx
        statuses are returned, not raised; classification is up to the
        caller.
        """
        url = self.url_for(endpoint)
        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                headers=dict(headers),
                data=data,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                return TransportResponse(status=resp.status, text=text)
        except asyncio.TimeoutError as exc:
            raise EoMiniRequestError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise EoMiniRequestError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
