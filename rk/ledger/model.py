from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from rk.version.key import VersionKey

_ISSUE_RE = re.compile(r"([0-9]+)")
_MAX_ISSUE = 2**63 - 1
_MAX_ISSUE_DIGITS = len(str(_MAX_ISSUE))


@dataclass(frozen=True, slots=True)
class Assignee:
    """Person a release is attributed to; the ledger keeps one row per email."""

    name: str
    email: str


@dataclass(frozen=True, slots=True)
class ReleaseRecord:
    """One released build.

    Stored once and never updated; the ledger key is (version line, build).
    """

    branch: str
    assignee: Assignee
    description: str
    commit: str
    date: datetime
    version: VersionKey
    issue_tracker_id: int = 0

    @property
    def build(self) -> int:
        return self.version.build

    def summary(self) -> str:
        return (
            f"{self.version.format()} on {self.branch} "
            f"by {self.assignee.name} <{self.assignee.email}> ({self.commit[:8]})"
        )


def issue_id_from_branch(branch: str) -> int | None:
    """First number in a branch name, e.g. ``feature/1234-login`` -> 1234.

    None when there is no number or the first one does not fit in 64 bits.
    """
    m = _ISSUE_RE.search(branch)
    if m is None:
        return None
    digits = m.group(1).lstrip("0") or "0"
    if len(digits) > _MAX_ISSUE_DIGITS or int(digits) > _MAX_ISSUE:
        return None
    return int(digits)
