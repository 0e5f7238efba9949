"""SQLite-backed key-value storage for the search cache."""

import sqlite3
from pathlib import Path

from loguru import logger

from kb_core.core.database.schema import create_schema


class SqliteStorage:
    """Store cache entries in the ``cache_entries`` table.

    The schema is created on first use. Every write is committed immediately.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn
        create_schema(conn)

    @classmethod
    def open(cls, db_path: str | Path) -> "SqliteStorage":
        """Open (creating if needed) a cache database file."""
        path = Path(db_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Opening cache database {}", path)
        return cls(sqlite3.connect(str(path)))

    def get(self, key: str) -> str | None:
        row = self.conn.execute(
            "SELECT value FROM cache_entries WHERE key = ?", (key,)
        ).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self.conn.execute(
            "INSERT OR REPLACE INTO cache_entries (key, value) VALUES (?, ?)",
            (key, value),
        )
        self.conn.commit()

    def delete(self, key: str) -> None:
        self.conn.execute("DELETE FROM cache_entries WHERE key = ?", (key,))
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()
