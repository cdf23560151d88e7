"""Mirror socket client notifications into local session state.

Owns:
- the five subscriptions on the socket client's event sources
- translating event payloads into :class:`SessionState` updates

Reconnection and retries belong to the socket client; nothing here
schedules work of its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import ValidationError

from tableorder.models._base import ApiModel
from tableorder.models.session import SessionEnded, SessionStarted, TableRegistered
from tableorder.protocols import Cancelable, SocketClient

_logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=ApiModel)

# Error texts from the socket client that mean the connection is gone.
_CONNECTION_LOST_MARKERS: tuple[str, ...] = ("Connection Failed", "Disconnected")


@dataclass(slots=True)
class SessionState:
    """Socket-derived fields mirrored for the UI."""

    connected: bool = False
    error_message: str | None = None
    session_id: str | None = None
    table_id: str | None = None


class SocketEventBridge:
    """Subscribe to a :class:`SocketClient` and keep a :class:`SessionState` current.

    Parameters
    ----------
    socket
        The socket client to listen to.
    state
        State object updated in place.
    on_change
        Called after every update that the UI should see.
    on_session_ended
        Called when the session closes; expected to clear the cart and
        notify.
    currency
        Currency label for the bill summary.
    """

    def __init__(
        self,
        socket: SocketClient,
        state: SessionState,
        *,
        on_change: Callable[[], None],
        on_session_ended: Callable[[], None],
        currency: str = "DZD",
    ) -> None:
        self._socket = socket
        self._state = state
        self._on_change = on_change
        self._on_session_ended = on_session_ended
        self._currency = currency
        self._subscriptions: dict[str, Cancelable] = {}

    @property
    def is_attached(self) -> bool:
        return bool(self._subscriptions)

    def attach(self) -> None:
        if self._subscriptions:
            return
        socket = self._socket
        self._subscriptions = {
            "connected": socket.on_connected.listen(self._handle_connected),
            "error": socket.on_error.listen(self._handle_error),
            "session_started": socket.on_session_started.listen(self._handle_session_started),
            "session_ended": socket.on_session_ended.listen(self._handle_session_ended),
            "table_registered": socket.on_table_registered.listen(self._handle_table_registered),
        }
        _logger.debug("Socket bridge attached")

    def detach(self) -> None:
        subscriptions = self._subscriptions
        self._subscriptions = {}
        for name, subscription in subscriptions.items():
            try:
                subscription.cancel()
            except Exception:
                _logger.debug("Cancelling %s subscription failed", name, exc_info=True)
        if subscriptions:
            _logger.debug("Socket bridge detached")

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _handle_connected(self, is_connected: bool) -> None:
        state = self._state
        state.connected = bool(is_connected)
        if state.connected:
            state.error_message = None
        elif state.error_message is None:
            state.error_message = "Disconnected"
        state.table_id = self._socket.table_id
        _logger.debug("Socket connected=%s table_id=%s", state.connected, state.table_id)
        self._on_change()

    def _handle_error(self, error: str) -> None:
        message = str(error)
        self._state.error_message = message
        if any(marker in message for marker in _CONNECTION_LOST_MARKERS):
            self._state.connected = False
        _logger.debug("Socket error: %s", message)
        self._on_change()

    def _handle_session_started(self, data: Mapping[str, Any]) -> None:
        payload = _parse(SessionStarted, data)
        if payload is None or payload.session_id is None:
            return
        self._state.session_id = payload.session_id
        self._state.error_message = None
        _logger.debug("Session started id=%s", payload.session_id)
        self._on_change()

    def _handle_session_ended(self, data: Mapping[str, Any]) -> None:
        payload = _parse(SessionEnded, data) or SessionEnded()
        self._state.session_id = None
        self._state.error_message = payload.summary(self._currency)
        _logger.debug("Session ended: %s", self._state.error_message)
        self._on_session_ended()

    def _handle_table_registered(self, data: Mapping[str, Any]) -> None:
        payload = _parse(TableRegistered, data)
        table_id = self._socket.table_id
        _logger.debug(
            "Table registered payload=%s client table_id=%s",
            payload.table_id if payload is not None else None,
            table_id,
        )
        if table_id != self._state.table_id:
            self._state.table_id = table_id
            self._on_change()


def _parse(model: type[_M], data: Any) -> _M | None:
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        _logger.debug("Ignoring non-mapping %s payload: %r", model.__name__, data)
        return None
    try:
        return model.model_validate(dict(data))
    except ValidationError:
        _logger.debug("Failed to parse %s payload", model.__name__, exc_info=True)
        return None
