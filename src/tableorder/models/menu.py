"""Menu models."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from tableorder.models._base import ApiModel


class ItemCategory(BaseModel):
    """A named grouping of menu items, as shown in the category strip."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    """Category key used for API lookups and as the cache key."""
    image: str | None = None
    """Optional asset path for the category icon."""

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("category name must be non-empty")
        return name


class MenuItem(ApiModel):
    """A menu item together with its cart state.

    Instances are immutable. Cart actions replace cached items with copies
    produced by :meth:`with_count`, which keeps ``is_selected`` equal to
    ``count > 0``.
    """

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    """Item identifier, unique within the menu."""
    category: str
    """Category key the item belongs to."""
    price: float = Field(default=0.0, ge=0)
    """Unit price."""
    name: str = ""
    """Display name."""
    description: str = ""
    """Optional description."""
    image_url: str | None = None
    """Optional picture URL."""
    count: int = Field(default=0, ge=0)
    """Quantity in the cart."""
    is_selected: bool = False
    """Whether the item is in the cart. Always equal to ``count > 0``."""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        # Some backends send numeric ids.
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="after")
    def _sync_selection(self) -> MenuItem:
        """Derive ``is_selected`` from ``count``."""
        if self.is_selected != (self.count > 0):
            object.__setattr__(self, "is_selected", self.count > 0)
        return self

    @property
    def line_total(self) -> float:
        """``price * count``."""
        return self.price * self.count

    def with_count(self, count: int) -> MenuItem:
        """Return a copy with *count* (clamped at 0) and matching selection."""
        count = max(0, count)
        return self.model_copy(update={"count": count, "is_selected": count > 0})

    def cleared(self) -> MenuItem:
        """Return a copy removed from the cart."""
        if self.count == 0 and not self.is_selected:
            return self
        return self.with_count(0)

    def in_category(self, category: str) -> MenuItem:
        """Return a copy stamped with *category*."""
        if self.category == category:
            return self
        return self.model_copy(update={"category": category})
