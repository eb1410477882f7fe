"""SQLite storage for expenses, kitchen inventory and to-do items."""

from .base import DEFAULT_DB_PATH, SQLiteStore
from .budget import BudgetDB, parse_amount
from .kitchen import KitchenDB
from .schema import ensure_schema
from .todo import TodoDB

__all__ = [
    "BudgetDB",
    "KitchenDB",
    "TodoDB",
    "SQLiteStore",
    "DEFAULT_DB_PATH",
    "ensure_schema",
    "parse_amount",
]
