"""Account-level models: user profile and registered vehicle."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyeomini._normalize import safe_float, safe_int, safe_str
from pyeomini.models._base import EoBaseModel


class Vehicle(EoBaseModel):
    """The vehicle registered on the account (``/api/vehicle``)."""

    id: int | None = Field(default=None, validation_alias=AliasChoices("ID", "id"))
    manufacturer: str = Field(default="", validation_alias=AliasChoices("Manufacturer", "manufacturer"))
    model: str = Field(default="", validation_alias=AliasChoices("Model", "model"))
    year: int | None = Field(default=None, validation_alias=AliasChoices("Year", "year"))
    range: int | None = Field(default=None, validation_alias=AliasChoices("Range", "range"))
    """Range in the account's distance unit."""
    battery_kwh: float | None = Field(default=None, validation_alias=AliasChoices("BatteryKWH", "battery_kwh"))

    @field_validator("id", "year", "range", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("battery_kwh", mode="before")
    @classmethod
    def _coerce_floats(cls, value: Any) -> float | None:
        return safe_float(value)

    @property
    def display_name(self) -> str:
        parts = [self.manufacturer, self.model]
        return " ".join(part for part in parts if part)


class User(EoBaseModel):
    """The authenticated user (``/api/user``).

    Only the identity fields are mapped; charge defaults, currency and
    the remaining profile data stay available in ``raw``.
    """

    title: str = Field(default="", validation_alias=AliasChoices("title"))
    first_name: str = Field(default="", validation_alias=AliasChoices("firstName", "first_name"))
    last_name: str = Field(default="", validation_alias=AliasChoices("lastName", "last_name"))
    email: str = Field(default="", validation_alias=AliasChoices("email"))
    user_type: int | None = Field(default=None, validation_alias=AliasChoices("userType", "user_type"))
    address: str = Field(default="", validation_alias=AliasChoices("address"))
    country_code: str = Field(default="", validation_alias=AliasChoices("countryCode", "country_code"))
    distance_units: int | None = Field(default=None, validation_alias=AliasChoices("distanceUnits", "distance_units"))

    @field_validator("user_type", "distance_units", mode="before")
    @classmethod
    def _coerce_ints(cls, value: Any) -> int | None:
        return safe_int(value)

    @field_validator("title", "first_name", "last_name", "email", "address", "country_code", mode="before")
    @classmethod
    def _coerce_strings(cls, value: Any) -> str:
        return safe_str(value) or ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
