"""Bump guard: skip a version bump that already happened for this change set.

Pipelines re-run on every push. Before bumping, the guard looks at the
commits reachable from ``head_ref`` but not from ``base_ref``; if one of their
titles carries the bump marker, a bump was already committed for this change
set and the pipeline must not bump again.

A history query failure is returned as ``QueryError``, never as False:
guessing "not bumped" would produce a duplicate bump.

The commit writer uses ``bump_commit_message(marker)`` so the message it
writes is always one the guard recognizes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from rk.core.result import Err, Ok, Result
from rk.git.repository import GitError

__all__ = [
    "BUMP_MARKER",
    "HistorySource",
    "QueryError",
    "already_applied",
    "bump_commit_message",
]

BUMP_MARKER = "bump version [skip ci]"


class HistorySource(Protocol):
    """Anything that can list commit titles between two refs (rk.git.Repository)."""

    def titles_between(self, base_ref: str, head_ref: str) -> Result[list[str], GitError]: ...


@dataclass(frozen=True, slots=True)
class QueryError:
    base_ref: str
    head_ref: str
    detail: str

    @property
    def message(self) -> str:
        return f"cannot read history {self.base_ref}..{self.head_ref}: {self.detail}"


def bump_commit_message(marker: str = BUMP_MARKER) -> str:
    """Commit message for an automated bump; always contains ``marker``."""
    return f"chore: {marker}"


def already_applied(
    history: HistorySource,
    base_ref: str,
    head_ref: str,
    *,
    marker: str = BUMP_MARKER,
) -> Result[bool, QueryError]:
    """Return Ok(True) if a commit in ``head_ref --not base_ref`` carries ``marker``."""
    if not base_ref.strip() or not head_ref.strip():
        return Err(QueryError(base_ref, head_ref, "base and head refs are required"))
    if not marker:
        return Err(QueryError(base_ref, head_ref, "bump marker cannot be empty"))

    titles = history.titles_between(base_ref, head_ref)
    if isinstance(titles, Err):
        return Err(QueryError(base_ref, head_ref, titles.error.message))

    return Ok(any(marker in title for title in titles.value))
