"""Release ledger backed by SQLite.

Usage:
    from rk.ledger import ReleaseLedger, connect, ensure_schema

    conn = connect(Path(".rk/ledger.db")).unwrap()
    ensure_schema(conn).unwrap()
    ledger = ReleaseLedger(conn)
    latest = ledger.fetch_most_advanced()
"""

from rk.ledger.errors import (
    DuplicateBuild,
    InvalidRelease,
    LedgerError,
    ReleaseNotFound,
    StorageError,
)
from rk.ledger.model import Assignee, ReleaseRecord, issue_id_from_branch
from rk.ledger.schema import connect, ensure_schema
from rk.ledger.store import ReleaseLedger

__all__ = [
    # Model
    "Assignee",
    "ReleaseRecord",
    "issue_id_from_branch",
    # Store
    "ReleaseLedger",
    "connect",
    "ensure_schema",
    # Errors
    "DuplicateBuild",
    "InvalidRelease",
    "LedgerError",
    "ReleaseNotFound",
    "StorageError",
]
