"""SQLite schema for the search cache database."""

import sqlite3

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS cache_entries (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the cache table if it is missing."""
    conn.executescript(_SCHEMA_SQL)
