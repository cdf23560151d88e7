from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

import pytest

from tableorder.config import StoreConfig
from tableorder.models.menu import MenuItem
from tableorder.models.order import OrderType
from tableorder.state.events import EventStream


def menu_item(item_id: str, category: str, price: float = 100.0, **extra: Any) -> dict[str, Any]:
    """API-shaped (camelCase) menu item payload."""
    return {"id": item_id, "category": category, "price": price, "name": f"Item {item_id}", **extra}


class FakeMenuApi:
    """In-memory API client.

    ``hold(category)`` returns a future the next fetch of that category
    waits on, so tests can decide when (and how) it completes.
    """

    def __init__(self, menu: Mapping[str, list[dict[str, Any]]] | None = None) -> None:
        self.menu: dict[str, list[dict[str, Any]]] = dict(menu or {})
        self.failures: dict[str, Exception] = {}
        self.calls: list[str] = []
        self.orders: list[dict[str, Any]] = []
        self.order_response: dict[str, Any] = {"status": "ok", "orderId": "order-1"}
        self._gates: dict[str, asyncio.Future[list[dict[str, Any]]]] = {}

    def hold(self, category: str) -> asyncio.Future[list[dict[str, Any]]]:
        gate: asyncio.Future[list[dict[str, Any]]] = asyncio.get_running_loop().create_future()
        self._gates[category] = gate
        return gate

    async def get_menu_items_by_category(self, category: str) -> list[MenuItem]:
        self.calls.append(category)
        gate = self._gates.pop(category, None)
        if gate is not None:
            payload = await gate
        else:
            failure = self.failures.get(category)
            if failure is not None:
                raise failure
            payload = self.menu.get(category, [])
        return [MenuItem.model_validate(entry) for entry in payload]

    async def create_order(
        self,
        *,
        items: Sequence[MenuItem],
        order_type: OrderType,
        table_id: str,
    ) -> Mapping[str, Any]:
        self.orders.append({"items": list(items), "order_type": order_type, "table_id": table_id})
        return self.order_response


class FakeSocketClient:
    def __init__(
        self,
        *,
        is_connected: bool = True,
        session_id: str | None = None,
        table_id: str | None = None,
    ) -> None:
        self.is_connected = is_connected
        self.is_connecting = False
        self.session_id = session_id
        self.table_id = table_id
        self.on_connected: EventStream[bool] = EventStream("connected")
        self.on_error: EventStream[str] = EventStream("error")
        self.on_session_started: EventStream[Mapping[str, Any]] = EventStream("session_started")
        self.on_session_ended: EventStream[Mapping[str, Any]] = EventStream("session_ended")
        self.on_table_registered: EventStream[Mapping[str, Any]] = EventStream("table_registered")
        self.end_session_calls = 0
        self.reconnect_calls = 0

    def streams(self) -> list[EventStream[Any]]:
        return [
            self.on_connected,
            self.on_error,
            self.on_session_started,
            self.on_session_ended,
            self.on_table_registered,
        ]

    def end_current_session(self) -> None:
        self.end_session_calls += 1

    async def manual_reconnect(self) -> None:
        self.reconnect_calls += 1


@pytest.fixture
def menu() -> dict[str, list[dict[str, Any]]]:
    return {
        "burgers": [
            menu_item("b1", "burgers", 450),
            menu_item("b2", "burgers", 600),
        ],
        "pizzas": [
            menu_item("p1", "pizzas", 900),
            menu_item("p2", "pizzas", 1200.5),
        ],
    }


@pytest.fixture
def api(menu: dict[str, list[dict[str, Any]]]) -> FakeMenuApi:
    return FakeMenuApi(menu)


@pytest.fixture
def socket() -> FakeSocketClient:
    return FakeSocketClient(is_connected=True, session_id="sess-1", table_id="T7")


@pytest.fixture
def config() -> StoreConfig:
    return StoreConfig(categories=("burgers", "pizzas", "tacos"))
