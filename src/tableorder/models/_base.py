"""Base model for payloads coming from the REST API and the socket.

Every payload model inherits from :class:`ApiModel` which provides:

* ``alias_generator=to_camel`` so camelCase keys map automatically to
  snake_case fields.
* A ``model_validator(mode="before")`` that drops ``None`` and blank-string
  values so the field default is used.
* A ``raw`` dict that captures the original payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for API and socket payload models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    raw: dict[str, Any] = Field(default_factory=dict, exclude=True)
    """Original payload dict."""

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and not value.strip():
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _clean_values(cls, values: Any) -> Any:
        """Drop empty values and stash the raw payload."""
        if not isinstance(values, dict):
            return values
        original = dict(values)
        cleaned = ApiModel._clean_dict(original)
        # Keep an explicitly passed raw= as-is.
        if "raw" not in values:
            cleaned["raw"] = original
        return cleaned
