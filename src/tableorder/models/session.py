"""Socket event payload models.

The socket client delivers small JSON-like mappings for session and table
events. These models give the bridge a typed view of the fields it reads;
everything else stays available through ``raw``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from tableorder.models._base import ApiModel


def _stringify_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class SessionStarted(ApiModel):
    """Payload of the ``session_started`` event.

    A blank ``sessionId`` is dropped like any other empty value, so an event
    carrying ``""`` parses with ``session_id=None`` and the bridge ignores it.
    """

    session_id: str | None = None
    """New session identifier. Events without a non-blank one are ignored."""

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_session_id(cls, value: Any) -> Any:
        return _stringify_id(value)


class Bill(ApiModel):
    """Bill summary attached to a ``session_ended`` event."""

    total: float | str | None = None
    """Total due. Kept as sent when the backend uses a preformatted string."""


class SessionEnded(ApiModel):
    """Payload of the ``session_ended`` event."""

    session_id: str | None = None
    bill: Bill | None = None

    @field_validator("session_id", mode="before")
    @classmethod
    def _coerce_session_id(cls, value: Any) -> Any:
        return _stringify_id(value)

    @field_validator("bill", mode="before")
    @classmethod
    def _only_mapping_bill(cls, value: Any) -> Any:
        # A non-mapping bill (e.g. a bare number) carries no usable summary.
        if value is not None and not isinstance(value, dict):
            return None
        return value

    def summary(self, currency: str) -> str:
        """Human-readable message shown after the session closes."""
        message = "Session Ended."
        if self.bill is not None:
            total = self.bill.total
            message += f" Bill: {_format_total(total)} {currency}."
        return message


def _format_total(total: float | str | None) -> str:
    if total is None:
        return "null"
    if isinstance(total, float) and total.is_integer():
        return str(int(total))
    return str(total)


class TableRegistered(ApiModel):
    """Payload of the ``table_registered`` event.

    The bridge re-reads the table id from the socket client instead of
    trusting this payload; ``table_id`` is kept for logging.
    """

    table_id: str | None = Field(default=None)

    @field_validator("table_id", mode="before")
    @classmethod
    def _coerce_table_id(cls, value: Any) -> Any:
        return _stringify_id(value)
