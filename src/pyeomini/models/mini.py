"""Charger (EO Mini) models.

Mapped from the ``/api/mini/list`` and ``/api/mini/status`` responses.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyeomini._normalize import safe_float, safe_int, safe_str
from pyeomini.models._base import EoBaseModel

_CONNECTED_CODE = re.compile(r"^2..$", re.IGNORECASE)


class Mini(EoBaseModel):
    """A charger registered on the account.

    Used as the device snapshot of an accessory: it is replaced wholesale
    on every refresh and ``address`` never changes for a given charger.
    """

    address: str = Field(validation_alias=AliasChoices("address"))
    """Stable charger identity."""
    is_disabled: int = Field(default=0, validation_alias=AliasChoices("isDisabled", "is_disabled"))
    """``1`` when the charger is disabled (locked)."""
    ct1: float | None = Field(default=None, validation_alias=AliasChoices("ct1"))
    ct2: float | None = Field(default=None, validation_alias=AliasChoices("ct2"))
    ct3: float | None = Field(default=None, validation_alias=AliasChoices("ct3"))
    advertised_rate: float | None = Field(
        default=None,
        validation_alias=AliasChoices("advertisedRate", "advertised_rate"),
    )
    """Advertised charge rate in kW."""
    voltage: float | None = Field(default=None, validation_alias=AliasChoices("voltage"))
    timezone: str = Field(default="", validation_alias=AliasChoices("timezone"))
    charger_address: str = Field(default="", validation_alias=AliasChoices("chargerAddress", "charger_address"))
    hub_address: str = Field(default="", validation_alias=AliasChoices("hubAddress", "hub_address"))
    charger_model: int | None = Field(default=None, validation_alias=AliasChoices("chargerModel", "charger_model"))
    hub_model: int | None = Field(default=None, validation_alias=AliasChoices("hubModel", "hub_model"))
    hub_serial: str = Field(default="", validation_alias=AliasChoices("hubSerial", "hub_serial"))

    @property
    def is_locked(self) -> bool:
        """Whether charging is disabled on this charger."""
        return self.is_disabled == 1

    @field_validator("address", "timezone", "charger_address", "hub_address", "hub_serial", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str:
        return safe_str(value) or ""

    @field_validator("is_disabled", mode="before")
    @classmethod
    def _coerce_disabled(cls, value: Any) -> int:
        return safe_int(value) or 0

    @field_validator("charger_model", "hub_model", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("ct1", "ct2", "ct3", "advertised_rate", "voltage", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)


class MiniStatus(EoBaseModel):
    """Hub and charger reachability codes (HTTP-like, e.g. ``"200"``)."""

    hub_status: str = Field(default="", validation_alias=AliasChoices("hubStatus", "hub_status"))
    mini_status: str = Field(default="", validation_alias=AliasChoices("miniStatus", "mini_status"))

    @field_validator("hub_status", "mini_status", mode="before")
    @classmethod
    def _coerce_codes(cls, value: Any) -> str:
        return safe_str(value) or ""

    @property
    def is_hub_connected(self) -> bool:
        return bool(_CONNECTED_CODE.match(self.hub_status))

    @property
    def is_mini_connected(self) -> bool:
        return bool(_CONNECTED_CODE.match(self.mini_status))
