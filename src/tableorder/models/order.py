"""Order models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from tableorder.models.menu import MenuItem


class OrderType(StrEnum):
    """Fulfillment type sent with an order.

    The values are the labels the ordering backend expects.
    """

    TAKE_AWAY = "Take Away"
    DINE_IN = "Dine In"

    @classmethod
    def from_index(cls, index: int) -> OrderType:
        """Map the UI's ordering tab index: ``0`` is take-away, anything else dine-in."""
        return cls.TAKE_AWAY if index == 0 else cls.DINE_IN


class CartSummary(BaseModel):
    """Snapshot of the cart at a point in time."""

    model_config = ConfigDict(frozen=True)

    items: tuple[MenuItem, ...] = Field(default_factory=tuple)
    total_items: int = 0
    total_amount: float = 0.0

    @classmethod
    def from_items(cls, items: list[MenuItem] | tuple[MenuItem, ...]) -> CartSummary:
        in_cart = tuple(item for item in items if item.count > 0)
        return cls(
            items=in_cart,
            total_items=sum(item.count for item in in_cart),
            total_amount=sum(item.line_total for item in in_cart),
        )

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0
