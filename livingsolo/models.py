"""Data models for the budget, kitchen and to-do modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum

PRIORITY_HIGH = "High"
PRIORITY_MEDIUM = "Priority"
PRIORITY_NONE = "None"

# Display order of the priority picker
PRIORITIES: tuple[str, ...] = (PRIORITY_HIGH, PRIORITY_MEDIUM, PRIORITY_NONE)

PRIORITY_RANK: dict[str, int] = {
    PRIORITY_HIGH: 0,
    PRIORITY_MEDIUM: 1,
    PRIORITY_NONE: 2,
}

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Refrigerator",
    "Freezer",
    "Cupboard",
    "Pantry",
)


class Urgency(str, Enum):
    """Expiry urgency of a kitchen item, derived at read time."""

    URGENT = "urgent"
    WARNING = "warning"
    NORMAL = "normal"


@dataclass
class Expense:
    """An expected monthly expense."""

    name: str
    amount: Decimal
    id: int | None = None


@dataclass
class KitchenItem:
    """A perishable item stored in one category."""

    name: str
    quantity: int
    expiry_date: date
    category_id: int | None = None  # None only until the item is stored
    id: int | None = None


@dataclass
class Category:
    """A storage location (fridge, cupboard...) owning its kitchen items."""

    name: str
    items: list[KitchenItem] = field(default_factory=list)
    id: int | None = None


@dataclass
class ToDoItem:
    title: str
    priority: str = PRIORITY_NONE
    is_done: bool = False
    id: int | None = None
