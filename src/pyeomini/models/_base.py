"""Base model for EO API responses.

Every EO response model inherits from :class:`EoBaseModel` which
provides:

* frozen, ``extra="ignore"`` configuration with ``populate_by_name`` so
  models accept both the wire names and the snake_case field names.
* A ``model_validator(mode="before")`` that stashes the original payload
  in ``raw`` unless the caller supplied one.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class EoBaseModel(BaseModel):
    """Base for EO API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    raw: dict[str, Any] = Field(default_factory=dict)
    """Original API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        if "raw" in values:
            return values
        merged = dict(values)
        merged["raw"] = dict(values)
        return merged
