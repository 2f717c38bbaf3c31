"""Custom exception hierarchy for pyeomini."""

from __future__ import annotations


class EoMiniError(Exception):
    """Base exception for all pyeomini errors."""


class EoMiniConfigError(EoMiniError):
    """Invalid or missing configuration."""


class EoMiniAuthError(EoMiniError):
    """Authentication against ``/token`` failed.

    Raised when the endpoint answers with a non-success status, when the
    body is not a JSON object, or when it lacks ``access_token`` or
    ``expires_in``.  The cached session is already dropped when this is
    raised; the next request authenticates again.
    """

    def __init__(
        self,
        reason: str,
        *,
        status: int | None = None,
        raw_body: str = "",
    ) -> None:
        self.reason = reason
        self.status = status
        self.raw_body = raw_body
        super().__init__(f"Authentication failed: {reason}")


class EoMiniRequestError(EoMiniError):
    """HTTP-level failure (network, timeout, non-2xx)."""

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        raw_body: str = "",
        endpoint: str = "",
    ) -> None:
        self.status = status
        self.raw_body = raw_body
        self.endpoint = endpoint
        super().__init__(message)


class EoMiniResponseFormatError(EoMiniRequestError):
    """Response body could not be parsed as JSON."""


class EoMiniConnectivityError(EoMiniError):
    """Hub or charger reported as not reachable by the status endpoint."""

    def __init__(
        self,
        message: str,
        *,
        hub_status: str = "",
        mini_status: str = "",
    ) -> None:
        self.hub_status = hub_status
        self.mini_status = mini_status
        super().__init__(message)
