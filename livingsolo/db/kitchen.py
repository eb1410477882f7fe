"""Kitchen inventory CRUD operations: categories and their items."""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, timedelta
from pathlib import Path
from typing import Iterable

from ..models import DEFAULT_CATEGORIES, Category, KitchenItem
from .base import DEFAULT_DB_PATH, SQLiteStore

logger = logging.getLogger(__name__)

MIN_QUANTITY = 1
MAX_QUANTITY = 999
DEFAULT_SHELF_DAYS = 7


def _row_to_item(row: sqlite3.Row) -> KitchenItem:
    return KitchenItem(
        name=row["name"],
        quantity=row["quantity"],
        expiry_date=date.fromisoformat(row["expiry_date"]),
        category_id=row["category_id"],
        id=row["id"],
    )


class KitchenDB(SQLiteStore):
    """Manages the category and kitchen_item tables.

    A category owns its items: deleting it removes them in the same
    transaction, and an item whose quantity drops to zero is deleted.
    """

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        *,
        default_shelf_days: int = DEFAULT_SHELF_DAYS,
    ) -> None:
        super().__init__(db_path)
        self._default_shelf_days = default_shelf_days

    # -- categories ---------------------------------------------------------

    def seed_default_categories(
        self, names: Iterable[str] = DEFAULT_CATEGORIES
    ) -> list[Category]:
        """Insert any default category that does not exist yet.

        Safe to call on every start: names already present are skipped.

        Returns:
            The categories that were created.
        """
        existing = {c.name for c in self._load_categories()}
        created: list[Category] = []
        for name in names:
            if name in existing:
                continue
            cur = self._execute(
                "seed categories",
                "INSERT INTO category (name) VALUES (?)",
                (name,),
            )
            if cur is None:
                return []
            existing.add(name)
            created.append(Category(name=name, id=cur.lastrowid))
        if created and not self._commit("seed categories"):
            return []
        if created:
            logger.info("Seeded %d default categories", len(created))
        return created

    def add_category(self, name: str) -> Category | None:
        """Create a category; blank names are rejected."""
        name = name.strip()
        if not name:
            logger.debug("Category rejected: blank name")
            return None
        cur = self._execute(
            "add category", "INSERT INTO category (name) VALUES (?)", (name,)
        )
        if cur is None or not self._commit("add category"):
            return None
        logger.info("Added category %r", name)
        return Category(name=name, id=cur.lastrowid)

    def list_categories(self) -> list[Category]:
        """Return all categories ordered by name, each with its items."""
        categories = self._load_categories()
        by_id = {c.id: c for c in categories}
        for item in self.list_items():
            owner = by_id.get(item.category_id)
            if owner is not None:
                owner.items.append(item)
        return categories

    def get_category(self, category_id: int) -> Category | None:
        row = self._fetchone(
            "SELECT id, name FROM category WHERE id = ?", (category_id,)
        )
        if row is None:
            return None
        items = [
            _row_to_item(r)
            for r in self._fetchall(
                "SELECT * FROM kitchen_item WHERE category_id = ? "
                "ORDER BY expiry_date, id",
                (category_id,),
            )
        ]
        return Category(name=row["name"], items=items, id=row["id"])

    def delete_category(self, category_id: int) -> bool:
        """Delete a category together with every item it owns.

        The caller is expected to have asked the user for confirmation; this
        cannot be undone.

        Returns:
            True if the category existed and was removed.
        """
        action = "delete category"
        items = self._execute(
            action, "DELETE FROM kitchen_item WHERE category_id = ?", (category_id,)
        )
        if items is None:
            return False
        cur = self._execute(action, "DELETE FROM category WHERE id = ?", (category_id,))
        if cur is None:
            return False
        if cur.rowcount == 0:
            # Unknown category
            self._get_conn().rollback()
            return False
        if not self._commit(action):
            return False
        logger.info(
            "Deleted category %d and %d item(s)", category_id, items.rowcount
        )
        return True

    def _load_categories(self) -> list[Category]:
        rows = self._fetchall(
            "SELECT id, name FROM category ORDER BY name COLLATE NOCASE, id"
        )
        return [Category(name=r["name"], id=r["id"]) for r in rows]

    # -- items --------------------------------------------------------------

    def add_item(
        self,
        name: str,
        category_id: int | None = None,
        *,
        quantity: int = 1,
        expiry_date: date | None = None,
        new_category_name: str | None = None,
        today: date | None = None,
    ) -> KitchenItem | None:
        """Store a new item in an existing or newly created category.

        Args:
            name: Item name; stripped, must not be blank.
            category_id: ID of an existing category.
            quantity: Initial quantity (1-999).
            expiry_date: Expiry date; defaults to ``today`` plus the default
                shelf life.
            new_category_name: Create this category inline and put the item
                in it. Mutually exclusive with ``category_id``.
            today: Reference date for the default expiry.

        Returns:
            The stored KitchenItem, or None if the input was rejected or could
            not be saved.
        """
        name = name.strip()
        if not name:
            logger.debug("Item rejected: blank name")
            return None
        if not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
            logger.debug("Item %r rejected: quantity %d out of range", name, quantity)
            return None
        if (category_id is None) == (new_category_name is None):
            logger.debug("Item %r rejected: choose exactly one category", name)
            return None

        if new_category_name is not None:
            category = self.add_category(new_category_name)
            if category is None:
                return None
            category_id = category.id
        elif self._fetchone(
            "SELECT id FROM category WHERE id = ?", (category_id,)
        ) is None:
            logger.debug("Item %r rejected: unknown category %s", name, category_id)
            return None

        if expiry_date is None:
            expiry_date = (today or date.today()) + timedelta(
                days=self._default_shelf_days
            )

        cur = self._execute(
            "add item",
            """INSERT INTO kitchen_item (name, quantity, expiry_date, category_id)
               VALUES (?, ?, ?, ?)""",
            (name, quantity, expiry_date.isoformat(), category_id),
        )
        if cur is None or not self._commit("add item"):
            return None
        logger.info("Added %d x %r to category %d", quantity, name, category_id)
        return KitchenItem(
            name=name,
            quantity=quantity,
            expiry_date=expiry_date,
            category_id=category_id,
            id=cur.lastrowid,
        )

    def list_items(self) -> list[KitchenItem]:
        """Return every item, soonest expiry first."""
        rows = self._fetchall("SELECT * FROM kitchen_item ORDER BY expiry_date, id")
        return [_row_to_item(r) for r in rows]

    def get_item(self, item_id: int) -> KitchenItem | None:
        row = self._fetchone("SELECT * FROM kitchen_item WHERE id = ?", (item_id,))
        return _row_to_item(row) if row else None

    def increment_quantity(self, item_id: int) -> KitchenItem | None:
        """Add one to an item's quantity and return the updated item."""
        cur = self._execute(
            "increment quantity",
            "UPDATE kitchen_item SET quantity = quantity + 1 WHERE id = ?",
            (item_id,),
        )
        if cur is None or cur.rowcount == 0:
            return None
        if not self._commit("increment quantity"):
            return None
        return self.get_item(item_id)

    def decrement_quantity(self, item_id: int) -> KitchenItem | None:
        """Take one from an item's quantity.

        An item that reaches zero is deleted.

        Returns:
            The updated item, or None if it was used up (or does not exist).
        """
        action = "decrement quantity"
        cur = self._execute(
            action,
            "UPDATE kitchen_item SET quantity = quantity - 1 "
            "WHERE id = ? AND quantity > 0",
            (item_id,),
        )
        if cur is None:
            return None
        gone = self._execute(
            action,
            "DELETE FROM kitchen_item WHERE id = ? AND quantity = 0",
            (item_id,),
        )
        if gone is None or not self._commit(action):
            return None
        if gone.rowcount:
            logger.info("Item %d used up and removed", item_id)
            return None
        return self.get_item(item_id)

    def delete_item(self, item_id: int) -> bool:
        """Delete an item by ID."""
        cur = self._execute(
            "delete item", "DELETE FROM kitchen_item WHERE id = ?", (item_id,)
        )
        if cur is None or not self._commit("delete item"):
            return False
        return cur.rowcount > 0
