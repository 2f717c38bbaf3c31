"""Authentication token model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyeomini._normalize import safe_int
from pyeomini.models._base import EoBaseModel


class AuthToken(EoBaseModel):
    """Token returned by the ``/token`` endpoint.

    Parameters
    ----------
    access_token : str
        Bearer token for subsequent requests.
    token_type : str
        Token type, ``"bearer"`` in practice.
    expires_in : int
        Lifetime of the token in seconds.
    user_name : str
        Account the token was issued for.
    issued, expires : str
        Server-side issue and expiry timestamps, as sent.
    raw : dict
        Full decoded token dict for access to additional fields.
    """

    access_token: str = Field(validation_alias=AliasChoices("access_token", "accessToken"))
    token_type: str = Field(default="bearer", validation_alias=AliasChoices("token_type", "tokenType"))
    expires_in: int = Field(validation_alias=AliasChoices("expires_in", "expiresIn"))
    user_name: str = Field(default="", validation_alias=AliasChoices("userName", "user_name"))
    issued: str = Field(default="", validation_alias=AliasChoices(".issued", "issued"))
    expires: str = Field(default="", validation_alias=AliasChoices(".expires", "expires"))

    @field_validator("expires_in", mode="before")
    @classmethod
    def _coerce_expires_in(cls, value: Any) -> int | None:
        return safe_int(value)
