"""Structural interfaces for the collaborators the store depends on.

The REST client and the realtime socket client are owned elsewhere; the
store only relies on the shapes below. Having protocols here makes it easy
to pass test doubles while keeping production clients concrete.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, TypeVar

from tableorder.models.menu import MenuItem
from tableorder.models.order import OrderType

T_co = TypeVar("T_co", covariant=True)


class Cancelable(Protocol):
    def cancel(self) -> Any: ...


class EventSource(Protocol[T_co]):
    """Anything that can register a callback and hand back a cancelable handle."""

    def listen(self, callback: Callable[[T_co], None]) -> Cancelable: ...


class MenuApi(Protocol):
    """REST API client used for menu lookups and order submission."""

    async def get_menu_items_by_category(self, category: str) -> list[MenuItem]: ...

    async def create_order(
        self,
        *,
        items: Sequence[MenuItem],
        order_type: OrderType,
        table_id: str,
    ) -> Mapping[str, Any]: ...


class SocketClient(Protocol):
    """Realtime socket client.

    Reconnection, session bookkeeping and table registration all happen
    inside the client; the store mirrors what the event sources report.
    """

    @property
    def is_connected(self) -> bool: ...

    @property
    def is_connecting(self) -> bool: ...

    @property
    def session_id(self) -> str | None: ...

    @property
    def table_id(self) -> str | None: ...

    @property
    def on_connected(self) -> EventSource[bool]: ...

    @property
    def on_error(self) -> EventSource[str]: ...

    @property
    def on_session_started(self) -> EventSource[Mapping[str, Any]]: ...

    @property
    def on_session_ended(self) -> EventSource[Mapping[str, Any]]: ...

    @property
    def on_table_registered(self) -> EventSource[Mapping[str, Any]]: ...

    def end_current_session(self) -> None: ...

    async def manual_reconnect(self) -> None: ...
