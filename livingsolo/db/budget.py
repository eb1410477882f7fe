"""Monthly expense CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from decimal import Decimal, InvalidOperation
from typing import Iterable

from ..models import Expense
from ..views import budget_total
from .base import SQLiteStore

logger = logging.getLogger(__name__)

# Largest amount a single expense may hold
MAX_AMOUNT = Decimal("1000000000")


def parse_amount(value: str | Decimal | int | float) -> Decimal | None:
    """Parse user input into a non-negative decimal amount.

    Returns:
        The amount, or None for blank, non-numeric, non-finite, negative or
        implausibly large (over MAX_AMOUNT) input.
    """
    if isinstance(value, Decimal):
        amount = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
    if not amount.is_finite() or amount < 0 or amount > MAX_AMOUNT:
        return None
    return amount


def _row_to_expense(row: sqlite3.Row) -> Expense:
    return Expense(name=row["name"], amount=Decimal(row["amount"]), id=row["id"])


class BudgetDB(SQLiteStore):
    """Manages the expense table."""

    def add_expense(
        self, name: str, amount: str | Decimal | int | float
    ) -> Expense | None:
        """Insert a new expense.

        Args:
            name: Expense name; surrounding whitespace is stripped and it
                must not be blank.
            amount: Amount as typed by the user (e.g. ``"9.99"``) or a number.

        Returns:
            The stored Expense, or None if the input was rejected or could
            not be saved.
        """
        name = name.strip()
        if not name:
            logger.debug("Expense rejected: blank name")
            return None
        parsed = parse_amount(amount)
        if parsed is None:
            logger.debug("Expense %r rejected: invalid amount %r", name, amount)
            return None

        cur = self._execute(
            "add expense",
            "INSERT INTO expense (name, amount) VALUES (?, ?)",
            (name, str(parsed)),
        )
        if cur is None or not self._commit("add expense"):
            return None
        logger.info("Added expense %r (%s)", name, parsed)
        return Expense(name=name, amount=parsed, id=cur.lastrowid)

    def list_expenses(self) -> list[Expense]:
        """Return all expenses ordered by name."""
        rows = self._fetchall("SELECT * FROM expense ORDER BY name COLLATE NOCASE, id")
        return [_row_to_expense(r) for r in rows]

    def get_expense(self, expense_id: int) -> Expense | None:
        row = self._fetchone("SELECT * FROM expense WHERE id = ?", (expense_id,))
        return _row_to_expense(row) if row else None

    def delete_expenses(self, expense_ids: Iterable[int]) -> int:
        """Delete expenses by ID.

        Returns:
            Number of rows removed (0 if the delete could not be saved).
        """
        return self._delete_ids("delete expenses", "expense", expense_ids)

    def total(self) -> Decimal:
        """Estimated monthly total of all expenses."""
        return budget_total(self.list_expenses())
