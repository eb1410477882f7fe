"""Derived views computed from stored entities.

Everything here is a pure function of its arguments. Nothing reads the
clock: callers pass ``today`` explicitly so that expiry urgency can be
evaluated against any date.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, Overflow, localcontext
from typing import Iterable, Sequence

from .models import (
    PRIORITY_NONE,
    PRIORITY_RANK,
    Category,
    Expense,
    KitchenItem,
    ToDoItem,
    Urgency,
)

PREVIEW_LIMIT = 5
WARNING_DAYS = 3

# Unknown priority strings sort with "None"
_DEFAULT_RANK = PRIORITY_RANK[PRIORITY_NONE]


@dataclass
class ItemPreview:
    """The items shown on a category card and how many are hidden."""

    items: list[KitchenItem] = field(default_factory=list)
    remaining: int = 0

    @property
    def more_label(self) -> str:
        return f"+ {self.remaining} more" if self.remaining > 0 else ""


def budget_total(expenses: Iterable[Expense]) -> Decimal:
    """Sum of all expense amounts (0 for no expenses).

    A sum beyond the decimal exponent range comes back as ``Infinity``
    rather than raising.
    """
    with localcontext() as ctx:
        ctx.traps[Overflow] = False
        return sum((Decimal(e.amount) for e in expenses), Decimal("0"))


def format_amount(amount: Decimal, currency: str = "£") -> str:
    """Render an amount the way the budget screen shows it, e.g. ``£9.99``."""
    return f"{currency}{Decimal(amount):.2f}"


def filter_categories(
    categories: Sequence[Category], query: str
) -> list[Category]:
    """Return the categories matching a search query.

    A category matches when its own name, or the name of at least one of its
    items, contains the query (case-insensitive substring). An empty query
    returns every category. Input order is preserved.
    """
    if not query:
        return list(categories)

    needle = query.casefold()
    results: list[Category] = []
    for c in categories:
        if needle in c.name.casefold():
            results.append(c)
            continue
        if any(needle in item.name.casefold() for item in c.items):
            results.append(c)
    return results


def sort_items_by_expiry(items: Iterable[KitchenItem]) -> list[KitchenItem]:
    """Soonest-expiring first; equal dates keep creation order."""
    return sorted(
        items,
        key=lambda i: (_as_date(i.expiry_date), i.id if i.id is not None else 0),
    )


def preview_items(category: Category, limit: int = PREVIEW_LIMIT) -> ItemPreview:
    """First ``limit`` items of a category by expiry, plus the hidden count."""
    ordered = sort_items_by_expiry(category.items)
    return ItemPreview(items=ordered[:limit], remaining=max(len(ordered) - limit, 0))


def days_until_expiry(expiry: date, today: date) -> int:
    """Whole calendar days from the start of ``today`` to the start of ``expiry``."""
    return (_as_date(expiry) - _as_date(today)).days


def classify_urgency(days: int, warning_days: int = WARNING_DAYS) -> Urgency:
    """Map days-until-expiry to an urgency level.

    Less than one day left (including already expired) is urgent, up to
    ``warning_days`` is a warning, anything later is normal.
    """
    if days < 1:
        return Urgency.URGENT
    if days <= warning_days:
        return Urgency.WARNING
    return Urgency.NORMAL


def item_urgency(
    item: KitchenItem, today: date, warning_days: int = WARNING_DAYS
) -> Urgency:
    return classify_urgency(days_until_expiry(item.expiry_date, today), warning_days)


def priority_rank(priority: str) -> int:
    return PRIORITY_RANK.get(priority, _DEFAULT_RANK)


def sort_todos(items: Iterable[ToDoItem]) -> list[ToDoItem]:
    """Order tasks for display.

    Open tasks come before finished ones; within each group, High before
    Priority before None. Tasks that tie on both keys stay in creation
    order (ascending id).
    """
    return sorted(
        items,
        key=lambda t: (
            bool(t.is_done),
            priority_rank(t.priority),
            t.id if t.id is not None else 0,
        ),
    )


def _as_date(value: date) -> date:
    # datetime is a subclass of date; drop the time of day
    if isinstance(value, datetime):
        return value.date()
    return value
