"""Release ledger: durable history of released builds.

Several pipeline runs may write to the same ledger at once. Correctness rests
on SQLite alone:

- upserts are single ``INSERT ... ON CONFLICT ... RETURNING`` statements, so
  two first-time inserts of the same email or version line cannot race;
- ``save_release`` runs in one ``BEGIN IMMEDIATE`` transaction and the
  ``(version_line_id, build)`` primary key decides which run wins; the loser
  gets ``DuplicateBuild``;
- ``fetch_most_advanced`` reads through the same connection, never a cache.

The ledger does not retry; callers decide what to do with a ``DuplicateBuild``.
"""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime

from rk.core.result import Err, Ok, Result
from rk.ledger.errors import (
    DuplicateBuild,
    InvalidRelease,
    LedgerError,
    ReleaseNotFound,
    StorageError,
)
from rk.ledger.model import Assignee, ReleaseRecord
from rk.version.key import VersionKey

__all__ = ["ReleaseLedger"]

_UPSERT_ASSIGNEE = """
INSERT INTO assignees (name, email)
VALUES (?, ?)
ON CONFLICT (email) DO UPDATE SET email = excluded.email
RETURNING id
"""

_UPSERT_VERSION_LINE = """
INSERT INTO version_lines (epoch, line, revision)
VALUES (?, ?, ?)
ON CONFLICT (epoch, line, revision) DO UPDATE SET epoch = excluded.epoch
RETURNING id
"""

_INSERT_RELEASE = """
INSERT INTO releases (
    branch,
    assignee_id,
    description,
    commit_ref,
    released_at,
    issue_tracker_id,
    version_line_id,
    build
) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

_SELECT_MOST_ADVANCED = """
SELECT
    r.branch,
    a.name,
    a.email,
    r.description,
    r.commit_ref,
    r.released_at,
    r.issue_tracker_id,
    v.epoch,
    v.line,
    v.revision,
    r.build
FROM releases r
JOIN version_lines v ON r.version_line_id = v.id
JOIN assignees a ON r.assignee_id = a.id
ORDER BY v.epoch DESC, v.line DESC, v.revision DESC, r.build DESC
LIMIT 1
"""

_DUPLICATE_KEY_ERRORS = frozenset({"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"})

# SQLite INTEGER is a signed 64-bit value.
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def _out_of_range(record: ReleaseRecord) -> str | None:
    """Name of the first field SQLite cannot store as INTEGER, if any."""
    version = record.version
    fields = (
        ("epoch", version.epoch),
        ("line", version.line),
        ("revision", version.revision),
        ("build", version.build),
        ("issue_tracker_id", record.issue_tracker_id),
    )
    for name, value in fields:
        if not _INT_MIN <= value <= _INT_MAX:
            return name
    return None


def _timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.isoformat()


class ReleaseLedger:
    """Ledger operations over a caller-supplied connection.

    The connection must be in autocommit mode (``rk.ledger.connect`` opens
    one that is), since the ledger manages its own transactions.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def __enter__(self) -> ReleaseLedger:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def upsert_assignee(self, name: str, email: str) -> Result[int, StorageError]:
        """Id of the assignee row for ``email``, creating it on first sight."""
        try:
            return Ok(self._upsert_assignee(name, email))
        except (sqlite3.Error, OverflowError) as e:
            return Err(StorageError(operation="upsert assignee", detail=str(e)))

    def upsert_version_line(
        self, epoch: int, line: int, revision: int
    ) -> Result[int, StorageError]:
        """Id of the version line row for the triple, creating it on first sight."""
        try:
            return Ok(self._upsert_version_line(epoch, line, revision))
        except (sqlite3.Error, OverflowError) as e:
            return Err(StorageError(operation="upsert version line", detail=str(e)))

    def save_release(self, record: ReleaseRecord) -> Result[None, LedgerError]:
        """Append ``record``; exactly one writer wins per (version line, build)."""
        if not record.branch.strip():
            return Err(InvalidRelease(reason="branch is required"))
        field_name = _out_of_range(record)
        if field_name is not None:
            return Err(InvalidRelease(reason=f"{field_name} does not fit in a 64-bit integer"))

        conn = self._conn
        version = record.version
        try:
            conn.execute("BEGIN IMMEDIATE")
        except sqlite3.Error as e:
            return Err(StorageError(operation="save release", detail=str(e)))

        try:
            assignee_id = self._upsert_assignee(record.assignee.name, record.assignee.email)
            vline = version.version_line
            line_id = self._upsert_version_line(vline.epoch, vline.line, vline.revision)
            conn.execute(
                _INSERT_RELEASE,
                (
                    record.branch,
                    assignee_id,
                    record.description,
                    record.commit,
                    _timestamp(record.date),
                    record.issue_tracker_id,
                    line_id,
                    version.build,
                ),
            )
            conn.execute("COMMIT")
        except sqlite3.IntegrityError as e:
            self._rollback()
            if getattr(e, "sqlite_errorname", "") in _DUPLICATE_KEY_ERRORS:
                return Err(DuplicateBuild(version=version.format()))
            return Err(StorageError(operation="save release", detail=str(e)))
        except sqlite3.Error as e:
            self._rollback()
            return Err(StorageError(operation="save release", detail=str(e)))
        except BaseException:
            self._rollback()
            raise

        return Ok(None)

    def fetch_most_advanced(self) -> Result[ReleaseRecord, LedgerError]:
        """The release with the highest version key (epoch, line, revision, build)."""
        try:
            row = self._conn.execute(_SELECT_MOST_ADVANCED).fetchone()
        except sqlite3.Error as e:
            return Err(StorageError(operation="fetch most advanced", detail=str(e)))

        if row is None:
            return Err(ReleaseNotFound())

        (
            branch,
            assignee_name,
            assignee_email,
            description,
            commit_ref,
            released_at,
            issue_tracker_id,
            epoch,
            line,
            revision,
            build,
        ) = row

        try:
            date = datetime.fromisoformat(released_at)
        except ValueError as e:
            return Err(
                StorageError(operation="fetch most advanced", detail=f"bad timestamp: {e}")
            )

        return Ok(
            ReleaseRecord(
                branch=branch,
                assignee=Assignee(name=assignee_name, email=assignee_email),
                description=description or "",
                commit=commit_ref or "",
                date=date,
                version=VersionKey(epoch, line, revision, build),
                issue_tracker_id=issue_tracker_id,
            )
        )

    def count_releases(self) -> Result[int, StorageError]:
        try:
            (count,) = self._conn.execute("SELECT COUNT(*) FROM releases").fetchone()
        except sqlite3.Error as e:
            return Err(StorageError(operation="count releases", detail=str(e)))
        return Ok(count)

    def _upsert_assignee(self, name: str, email: str) -> int:
        rows = self._conn.execute(_UPSERT_ASSIGNEE, (name, email)).fetchall()
        return rows[0][0]

    def _upsert_version_line(self, epoch: int, line: int, revision: int) -> int:
        rows = self._conn.execute(_UPSERT_VERSION_LINE, (epoch, line, revision)).fetchall()
        return rows[0][0]

    def _rollback(self) -> None:
        if self._conn.in_transaction:
            self._conn.execute("ROLLBACK")
