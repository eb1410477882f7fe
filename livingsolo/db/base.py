"""Connection handling shared by the SQLite-backed stores."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Iterable

from .schema import ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "~/.config/livingsolo/livingsolo.db"


class SQLiteStore:
    """Lazily opens the database and commits units of work.

    Stores never raise on persistence errors: a failed commit is rolled back,
    logged, and reported to the caller as ``False``.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _rollback(self, action: str) -> None:
        logger.exception("%s failed; changes rolled back", action)
        if self._conn is not None:
            try:
                self._conn.rollback()
            except sqlite3.Error:
                logger.exception("Rollback after %s failed", action)

    def _execute(
        self, action: str, sql: str, params: tuple = ()
    ) -> sqlite3.Cursor | None:
        """Run one write statement; ``None`` if the database refused it."""
        try:
            return self._get_conn().execute(sql, params)
        except sqlite3.Error:
            self._rollback(action)
            return None

    def _fetchall(self, sql: str, params: tuple = ()) -> list[sqlite3.Row]:
        try:
            return self._get_conn().execute(sql, params).fetchall()
        except sqlite3.Error:
            logger.exception("Query failed: %s", sql)
            return []

    def _fetchone(self, sql: str, params: tuple = ()) -> sqlite3.Row | None:
        rows = self._fetchall(sql, params)
        return rows[0] if rows else None

    def _delete_ids(self, action: str, table: str, ids: Iterable[int]) -> int:
        """Delete rows of ``table`` by primary key in one unit of work.

        Returns:
            Number of rows removed; 0 if none matched or the delete could not
            be saved.
        """
        deleted = 0
        for row_id in ids:
            cur = self._execute(action, f"DELETE FROM {table} WHERE id = ?", (row_id,))
            if cur is None:
                return 0
            deleted += cur.rowcount
        if not deleted:
            if self._conn is not None:
                self._conn.rollback()
            return 0
        if not self._commit(action):
            return 0
        logger.info("%s: removed %d row(s) from %s", action, deleted, table)
        return deleted

    def _commit(self, action: str) -> bool:
        try:
            self._get_conn().commit()
        except sqlite3.Error:
            self._rollback(action)
            return False
        return True
