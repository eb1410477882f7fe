"""Household helper: monthly budget, kitchen inventory and to-do list."""

from .config import AppConfig, load_config
from .db import BudgetDB, KitchenDB, TodoDB
from .models import (
    DEFAULT_CATEGORIES,
    PRIORITIES,
    Category,
    Expense,
    KitchenItem,
    ToDoItem,
    Urgency,
)
from .views import (
    ItemPreview,
    budget_total,
    classify_urgency,
    days_until_expiry,
    filter_categories,
    item_urgency,
    preview_items,
    sort_todos,
)

__all__ = [
    "AppConfig",
    "load_config",
    "BudgetDB",
    "KitchenDB",
    "TodoDB",
    "Expense",
    "Category",
    "KitchenItem",
    "ToDoItem",
    "Urgency",
    "DEFAULT_CATEGORIES",
    "PRIORITIES",
    "ItemPreview",
    "budget_total",
    "classify_urgency",
    "days_until_expiry",
    "filter_categories",
    "item_urgency",
    "preview_items",
    "sort_todos",
]
