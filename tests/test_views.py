"""Tests for the derived views (totals, search, expiry urgency, task order)."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from livingsolo.models import Category, Expense, KitchenItem, ToDoItem, Urgency
from livingsolo.views import (
    budget_total,
    classify_urgency,
    days_until_expiry,
    filter_categories,
    format_amount,
    item_urgency,
    preview_items,
    priority_rank,
    sort_items_by_expiry,
    sort_todos,
)

TODAY = date(2025, 3, 10)


def _item(name: str, expiry: date, id: int, quantity: int = 1) -> KitchenItem:
    return KitchenItem(name=name, quantity=quantity, expiry_date=expiry, category_id=1, id=id)


@pytest.fixture
def categories():
    return [
        Category(name="Cupboard", id=1, items=[_item("Rice", date(2025, 9, 1), 1)]),
        Category(
            name="Refrigerator",
            id=2,
            items=[_item("Milk", date(2025, 3, 12), 2), _item("Yoghurt", date(2025, 3, 11), 3)],
        ),
        Category(name="Freezer", id=3),
    ]


# -- budget ------------------------------------------------------------------


def test_budget_total_empty():
    assert budget_total([]) == Decimal("0")


def test_budget_total_sums_amounts():
    expenses = [
        Expense(name="Rent", amount=Decimal("750.00"), id=1),
        Expense(name="Spotify", amount=Decimal("10.99"), id=2),
        Expense(name="Bus pass", amount=Decimal("0.01"), id=3),
    ]
    assert budget_total(expenses) == Decimal("761.00")


def test_budget_total_changes_by_expense_amount():
    expenses = [Expense(name="Rent", amount=Decimal("750"), id=1)]
    before = budget_total(expenses)
    extra = Expense(name="Gym", amount=Decimal("25.50"), id=2)
    assert budget_total(expenses + [extra]) - before == Decimal("25.50")


def test_budget_total_does_not_raise_past_decimal_range():
    expenses = [
        Expense(name="Rent", amount=Decimal("750"), id=1),
        Expense(name="Bad", amount=Decimal("9E+999999"), id=2),
        Expense(name="Worse", amount=Decimal("9E+999999"), id=3),
    ]
    assert budget_total(expenses).is_infinite()


def test_format_amount():
    assert format_amount(Decimal("9.9")) == "£9.90"
    assert format_amount(Decimal("1234.567"), "$") == "$1234.57"


# -- kitchen search ------------------------------------------------------------


def test_filter_empty_query_returns_everything(categories):
    assert filter_categories(categories, "") == categories


def test_filter_matches_category_name_case_insensitive(categories):
    result = filter_categories(categories, "FRIDGE")
    assert result == []
    result = filter_categories(categories, "fRiG")
    assert [c.name for c in result] == ["Refrigerator"]


def test_filter_matches_item_name_includes_parent(categories):
    """A query matching only an item still returns that item's category."""
    result = filter_categories(categories, "yog")
    assert [c.name for c in result] == ["Refrigerator"]


def test_filter_is_substring_match(categories):
    result = filter_categories(categories, "ice")
    assert [c.name for c in result] == ["Cupboard"]


def test_filter_result_is_subset_in_order(categories):
    for query in ("r", "e", "zz", "i", "Milk"):
        result = filter_categories(categories, query)
        assert all(c in categories for c in result)
        positions = [categories.index(c) for c in result]
        assert positions == sorted(positions)


def test_filter_no_match(categories):
    assert filter_categories(categories, "caviar") == []


# -- item ordering and preview -----------------------------------------------------


def test_sort_items_by_expiry_ties_keep_creation_order():
    items = [
        _item("B", date(2025, 3, 15), 5),
        _item("A", date(2025, 3, 11), 9),
        _item("C", date(2025, 3, 15), 2),
    ]
    assert [i.name for i in sort_items_by_expiry(items)] == ["A", "C", "B"]


def test_preview_truncates_to_five():
    items = [_item(f"item{n}", date(2025, 4, 1 + n), n + 1) for n in range(7)]
    category = Category(name="Pantry", items=list(reversed(items)), id=1)

    preview = preview_items(category)

    assert [i.name for i in preview.items] == [f"item{n}" for n in range(5)]
    assert preview.remaining == 2
    assert preview.more_label == "+ 2 more"


def test_preview_small_category_has_no_remainder():
    category = Category(name="Pantry", items=[_item("Oats", TODAY, 1)], id=1)
    preview = preview_items(category)
    assert len(preview.items) == 1
    assert preview.remaining == 0
    assert preview.more_label == ""


def test_preview_empty_category():
    preview = preview_items(Category(name="Freezer", id=3))
    assert preview.items == []
    assert preview.remaining == 0


# -- expiry urgency ---------------------------------------------------------------


@pytest.mark.parametrize(
    "days, expected",
    [
        (-1, Urgency.URGENT),
        (0, Urgency.URGENT),
        (1, Urgency.WARNING),
        (2, Urgency.WARNING),
        (3, Urgency.WARNING),
        (4, Urgency.NORMAL),
        (30, Urgency.NORMAL),
    ],
)
def test_classify_urgency_thresholds(days, expected):
    assert classify_urgency(days) is expected


def test_classify_urgency_custom_warning_window():
    assert classify_urgency(5, warning_days=7) is Urgency.WARNING
    assert classify_urgency(8, warning_days=7) is Urgency.NORMAL


def test_days_until_expiry_uses_calendar_days():
    assert days_until_expiry(date(2025, 3, 13), TODAY) == 3
    assert days_until_expiry(date(2025, 3, 9), TODAY) == -1


def test_days_until_expiry_ignores_time_of_day():
    late_tonight = datetime(2025, 3, 10, 23, 59)
    early_tomorrow = datetime(2025, 3, 11, 0, 1)
    assert days_until_expiry(early_tomorrow, late_tonight) == 1


def test_item_urgency_depends_on_reference_date():
    """The same stored item changes urgency as days pass."""
    item = _item("Milk", date(2025, 3, 15), 1)
    assert item_urgency(item, date(2025, 3, 1)) is Urgency.NORMAL
    assert item_urgency(item, date(2025, 3, 12)) is Urgency.WARNING
    assert item_urgency(item, date(2025, 3, 15)) is Urgency.URGENT


# -- to-do ordering --------------------------------------------------------------


def test_priority_rank():
    assert priority_rank("High") == 0
    assert priority_rank("Priority") == 1
    assert priority_rank("None") == 2
    assert priority_rank("whenever") == 2


def test_sort_todos_open_first_then_priority():
    items = [
        ToDoItem(title="C", priority="High", is_done=True, id=1),
        ToDoItem(title="B", priority="None", is_done=False, id=2),
        ToDoItem(title="A", priority="High", is_done=False, id=3),
    ]
    assert [t.title for t in sort_todos(items)] == ["A", "B", "C"]


def test_sort_todos_independent_of_insertion_order():
    items = [
        ToDoItem(title="A", priority="High", id=1),
        ToDoItem(title="B", priority="None", id=2),
        ToDoItem(title="C", priority="High", is_done=True, id=3),
    ]
    assert [t.title for t in sort_todos(reversed(items))] == ["A", "B", "C"]


def test_sort_todos_ties_in_creation_order():
    items = [
        ToDoItem(title="later", priority="Priority", id=8),
        ToDoItem(title="earlier", priority="Priority", id=4),
        ToDoItem(title="done", priority="Priority", is_done=True, id=1),
    ]
    assert [t.title for t in sort_todos(items)] == ["earlier", "later", "done"]
