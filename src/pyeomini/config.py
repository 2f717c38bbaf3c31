"""Client configuration for pyeomini."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyeomini._constants import (
    BASE_URL,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REFRESH_RATE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_REVERT_DEBOUNCE,
)
from pyeomini.exceptions import EoMiniConfigError


@dataclasses.dataclass(frozen=True)
class EoMiniConfig:
    """Client configuration.

    Parameters
    ----------
    username : str
        EO account email.
    password : str
        EO account password.
    base_url : str
        API base URL.
    refresh_rate : float
        Seconds between two refreshes of the charger list.  Each refresh
        hands a new snapshot to every accessory, which then re-checks its
        charging session.
    poll_interval : float
        Seconds between two ticks of the polling loop.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.  A request
        that exceeds it fails with :class:`~pyeomini.exceptions.EoMiniRequestError`
        and releases its slot in the command queue.
    revert_debounce : float
        Delay in seconds before a rejected power command is reverted.
    """

    username: str
    password: str
    base_url: str = BASE_URL
    refresh_rate: float = DEFAULT_REFRESH_RATE
    poll_interval: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    revert_debounce: float = DEFAULT_REVERT_DEBOUNCE

    def validate(self) -> EoMiniConfig:
        """Check required fields and timings.

        Returns the config itself so calls can be chained.

        Raises
        ------
        EoMiniConfigError
            If credentials are missing or a timing is not positive.
        """
        if not self.username:
            raise EoMiniConfigError("Missing username")
        if not self.password:
            raise EoMiniConfigError("Missing password")
        for name in ("refresh_rate", "poll_interval", "request_timeout"):
            if getattr(self, name) <= 0:
                raise EoMiniConfigError(f"{name} must be positive")
        if self.revert_debounce < 0:
            raise EoMiniConfigError("revert_debounce must not be negative")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> EoMiniConfig:
        """Create configuration from environment variables.

        Reads ``EOMINI_USERNAME``, ``EOMINI_PASSWORD`` and the optional
        ``EOMINI_*`` variables below.  Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        EoMiniConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "EOMINI_USERNAME": "username",
            "EOMINI_PASSWORD": "password",
            "EOMINI_BASE_URL": "base_url",
        }
        _ENV_FLOAT_MAP = {
            "EOMINI_REFRESH_RATE": "refresh_rate",
            "EOMINI_POLL_INTERVAL": "poll_interval",
            "EOMINI_REQUEST_TIMEOUT": "request_timeout",
            "EOMINI_REVERT_DEBOUNCE": "revert_debounce",
        }

        config_kwargs: dict[str, Any] = {"username": "", "password": ""}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = float(val)
            except ValueError as exc:
                raise EoMiniConfigError(f"{env_key} must be a number, got {val!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
