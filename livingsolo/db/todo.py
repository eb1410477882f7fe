"""To-do list CRUD operations."""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable

from ..models import PRIORITIES, PRIORITY_NONE, ToDoItem
from ..views import sort_todos
from .base import SQLiteStore

logger = logging.getLogger(__name__)


def _row_to_task(row: sqlite3.Row) -> ToDoItem:
    return ToDoItem(
        title=row["title"],
        priority=row["priority"],
        is_done=bool(row["is_done"]),
        id=row["id"],
    )


class TodoDB(SQLiteStore):
    """Manages the todo_item table."""

    def add_task(self, title: str, priority: str = PRIORITY_NONE) -> ToDoItem | None:
        """Add an open task.

        The title is stored as given, blank titles included. Only the known
        priorities (High, Priority, None) are accepted.
        """
        if priority not in PRIORITIES:
            logger.debug("Task %r rejected: unknown priority %r", title, priority)
            return None
        cur = self._execute(
            "add task",
            "INSERT INTO todo_item (title, priority, is_done) VALUES (?, ?, 0)",
            (title, priority),
        )
        if cur is None or not self._commit("add task"):
            return None
        logger.info("Added task %r [%s]", title, priority)
        return ToDoItem(title=title, priority=priority, id=cur.lastrowid)

    def list_tasks(self) -> list[ToDoItem]:
        """Return tasks in display order (open first, then by priority)."""
        rows = self._fetchall("SELECT * FROM todo_item")
        return sort_todos(_row_to_task(r) for r in rows)

    def get_task(self, task_id: int) -> ToDoItem | None:
        row = self._fetchone("SELECT * FROM todo_item WHERE id = ?", (task_id,))
        return _row_to_task(row) if row else None

    def toggle_done(self, task_id: int) -> ToDoItem | None:
        """Flip a task between open and done; returns the updated task."""
        cur = self._execute(
            "toggle task",
            "UPDATE todo_item SET is_done = 1 - is_done WHERE id = ?",
            (task_id,),
        )
        if cur is None or cur.rowcount == 0:
            return None
        if not self._commit("toggle task"):
            return None
        return self.get_task(task_id)

    def delete_tasks(self, task_ids: Iterable[int]) -> int:
        """Delete tasks by ID, never by position in the displayed list.

        Returns:
            Number of rows removed (0 if the delete could not be saved).
        """
        return self._delete_ids("delete tasks", "todo_item", task_ids)
