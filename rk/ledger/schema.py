"""Ledger schema and connection setup.

Three tables:
- assignees: one row per email
- version_lines: one row per (epoch, line, revision)
- releases: one row per (version_line_id, build)
"""

from __future__ import annotations

import sqlite3
from pathlib import Path

from rk.core.result import Err, Ok, Result
from rk.ledger.errors import StorageError

__all__ = ["SCHEMA_STATEMENTS", "connect", "ensure_schema"]

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS assignees (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        email TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS version_lines (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        epoch INTEGER NOT NULL,
        line INTEGER NOT NULL,
        revision INTEGER NOT NULL,
        UNIQUE (epoch, line, revision)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_version_lines_sort
    ON version_lines (epoch DESC, line DESC, revision DESC)
    """,
    """
    CREATE TABLE IF NOT EXISTS releases (
        branch TEXT NOT NULL,
        assignee_id INTEGER NOT NULL,
        description TEXT,
        commit_ref TEXT,
        released_at TEXT NOT NULL,
        issue_tracker_id INTEGER NOT NULL DEFAULT 0,
        version_line_id INTEGER NOT NULL,
        build INTEGER NOT NULL,
        PRIMARY KEY (version_line_id, build),
        FOREIGN KEY (version_line_id) REFERENCES version_lines (id),
        FOREIGN KEY (assignee_id) REFERENCES assignees (id)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_releases_build
    ON releases (build DESC)
    """,
)


def connect(path: Path, *, timeout: float = 5.0) -> Result[sqlite3.Connection, StorageError]:
    """Open the ledger database in autocommit mode.

    Transactions are opened explicitly by the ledger (BEGIN IMMEDIATE), and
    ``timeout`` is how long a writer waits for another process's lock.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(path, timeout=timeout, isolation_level=None)
        conn.execute("PRAGMA foreign_keys = ON")
    except (OSError, sqlite3.Error) as e:
        return Err(StorageError(operation="connect", detail=f"{path}: {e}"))
    return Ok(conn)


def ensure_schema(conn: sqlite3.Connection) -> Result[None, StorageError]:
    """Create missing tables and indexes; safe to run repeatedly."""
    try:
        conn.execute("BEGIN IMMEDIATE")
        for statement in SCHEMA_STATEMENTS:
            conn.execute(statement)
        conn.execute("COMMIT")
    except sqlite3.Error as e:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        return Err(StorageError(operation="schema", detail=str(e)))
    return Ok(None)
