from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest

from rk.ledger import ReleaseLedger, connect, ensure_schema


@pytest.fixture
def ledger_path(tmp_path: Path) -> Path:
    path = tmp_path / "state" / "ledger.db"
    conn = connect(path).unwrap()
    ensure_schema(conn).unwrap()
    conn.close()
    return path


@pytest.fixture
def conn(ledger_path: Path) -> Iterator[sqlite3.Connection]:
    connection = connect(ledger_path).unwrap()
    yield connection
    connection.close()


@pytest.fixture
def ledger(conn: sqlite3.Connection) -> ReleaseLedger:
    return ReleaseLedger(conn)
