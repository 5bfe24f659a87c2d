"""SQLite connection and schema setup for the preference store."""

import sqlite3
from pathlib import Path

# Index i brings the schema from user_version i to i + 1.
SCHEMA_STEPS = [
    """
    CREATE TABLE IF NOT EXISTS preferences (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
]


def connect(db_path: str | Path, check_same_thread: bool = True) -> sqlite3.Connection:
    """Open a WAL-mode connection.

    The web app keeps one connection for the process and uses it from the
    event loop thread, which may differ from the thread that opened it.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    return conn


def schema_version(conn: sqlite3.Connection) -> int:
    return conn.execute("PRAGMA user_version").fetchone()[0]


def ensure_schema(conn: sqlite3.Connection) -> int:
    """Apply pending schema steps. Returns how many were applied."""
    current = schema_version(conn)
    pending = SCHEMA_STEPS[current:]
    for offset, stmt in enumerate(pending, start=current + 1):
        conn.execute(stmt)
        conn.execute(f"PRAGMA user_version = {offset}")
        conn.commit()
    return len(pending)
