"""Commit metadata read from ``git log``."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

__all__ = ["COMMIT_FORMAT", "Commit", "parse_commit_record"]

_SEP = "\x1f"

# hash, author name, author email, strict ISO author date, subject
COMMIT_FORMAT = "%H%x1f%an%x1f%ae%x1f%aI%x1f%s"


@dataclass(frozen=True, slots=True)
class Commit:
    sha: str
    author_name: str
    author_email: str
    date: datetime
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:8]


def parse_commit_record(output: str) -> Commit | None:
    """Parse one record printed with ``--format=COMMIT_FORMAT``.

    Returns None when the output does not have the expected shape.
    """
    record = output.strip("\n")
    parts = record.split(_SEP)
    if len(parts) != 5:
        return None

    sha, name, email, date_text, subject = parts
    if not sha.strip() or not email.strip():
        return None

    try:
        date = datetime.fromisoformat(date_text.strip())
    except ValueError:
        return None

    return Commit(
        sha=sha.strip(),
        author_name=name.strip(),
        author_email=email.strip(),
        date=date,
        message=subject.strip(),
    )
