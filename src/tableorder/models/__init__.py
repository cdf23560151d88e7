"""Data models for menu items, orders and socket payloads."""

from tableorder.models._base import ApiModel
from tableorder.models.menu import ItemCategory, MenuItem
from tableorder.models.order import CartSummary, OrderType
from tableorder.models.session import Bill, SessionEnded, SessionStarted, TableRegistered

__all__ = [
    "ApiModel",
    "Bill",
    "CartSummary",
    "ItemCategory",
    "MenuItem",
    "OrderType",
    "SessionEnded",
    "SessionStarted",
    "TableRegistered",
]
