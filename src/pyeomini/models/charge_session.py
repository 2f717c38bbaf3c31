"""Charging session model.

Mapped from the ``/api/session`` response.  The API uses PascalCase keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyeomini._normalize import safe_bool, safe_float, safe_int, safe_str
from pyeomini.models._base import EoBaseModel


class ChargeSession(EoBaseModel):
    """The active charging session of the account's charger."""

    usid: int | None = Field(default=None, validation_alias=AliasChoices("USID", "usid"))
    """Session identifier."""
    cpid: int | None = Field(default=None, validation_alias=AliasChoices("CPID", "cpid"))
    """Charge point identifier."""
    pi_time: int | None = Field(default=None, validation_alias=AliasChoices("PiTime", "pi_time"))
    """Plug-in time (epoch seconds)."""
    es_time: int | None = Field(default=None, validation_alias=AliasChoices("ESTime", "es_time"))
    es_cost: float | None = Field(default=None, validation_alias=AliasChoices("ESCost", "es_cost"))
    """Estimated session cost."""
    es_kwh: float | None = Field(default=None, validation_alias=AliasChoices("ESKWH", "es_kwh"))
    """Energy delivered so far in kWh."""
    charging_time: int | None = Field(default=None, validation_alias=AliasChoices("ChargingTime", "charging_time"))
    """Seconds spent actually charging."""
    pay_r1: float | None = Field(default=None, validation_alias=AliasChoices("PayR1", "pay_r1"))
    pay_r2: float | None = Field(default=None, validation_alias=AliasChoices("PayR2", "pay_r2"))
    pay_r3: float | None = Field(default=None, validation_alias=AliasChoices("PayR3", "pay_r3"))
    pay_r4: float | None = Field(default=None, validation_alias=AliasChoices("PayR4", "pay_r4"))
    u_loc: str = Field(default="", validation_alias=AliasChoices("ULoc", "u_loc"))
    location: str = Field(default="", validation_alias=AliasChoices("Location", "location"))
    voltage: float | None = Field(default=None, validation_alias=AliasChoices("Voltage", "voltage"))
    is_paused: bool = Field(default=False, validation_alias=AliasChoices("IsPaused", "is_paused"))
    """Whether charging is paused by the user."""
    is_overridden: bool = Field(default=False, validation_alias=AliasChoices("IsOverridden", "is_overridden"))
    """Whether the charge schedule was overridden for this session."""

    @property
    def is_charging(self) -> bool:
        """A present, unpaused session delivers power."""
        return not self.is_paused

    @field_validator("usid", "cpid", "pi_time", "es_time", "charging_time", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("es_cost", "es_kwh", "pay_r1", "pay_r2", "pay_r3", "pay_r4", "voltage", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("is_paused", "is_overridden", mode="before")
    @classmethod
    def _coerce_bools(cls, value: Any) -> bool:
        return bool(safe_bool(value))

    @field_validator("u_loc", "location", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str:
        return safe_str(value) or ""
