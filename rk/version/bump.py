"""Bump policy: how each kind of release advances a VersionKey.

Lower components restart at 1 (not 0) whenever a higher one moves, and a
line or epoch bump always re-buckets ``line`` to the next multiple of 100
above its current bucket. Existing tags depend on this exact arithmetic.
"""

from __future__ import annotations

from enum import IntEnum

from rk.core.result import Err, Ok, Result
from rk.version.errors import InvalidBumpKind
from rk.version.key import VersionKey

__all__ = ["BumpKind", "apply", "parse_bump_kind"]

_LINE_BUCKET = 100


class BumpKind(IntEnum):
    """Which tier to advance; ordered by severity."""

    BUILD = 0
    REVISION = 1
    LINE = 2
    EPOCH = 3

    def __str__(self) -> str:
        return self.name.lower()


# "patch"/"minor"/"major" are the names pipelines already pass on the command line.
_KIND_NAMES: dict[str, BumpKind] = {
    "build": BumpKind.BUILD,
    "revision": BumpKind.REVISION,
    "patch": BumpKind.REVISION,
    "line": BumpKind.LINE,
    "minor": BumpKind.LINE,
    "epoch": BumpKind.EPOCH,
    "major": BumpKind.EPOCH,
}


def parse_bump_kind(text: str) -> Result[BumpKind, InvalidBumpKind]:
    kind = _KIND_NAMES.get(text.strip().lower())
    if kind is None:
        return Err(InvalidBumpKind(value=text, accepted=tuple(_KIND_NAMES)))
    return Ok(kind)


def _next_line_bucket(line: int) -> int:
    return line - (line % _LINE_BUCKET) + _LINE_BUCKET


def apply(key: VersionKey, kind: BumpKind) -> VersionKey:
    """Return the key that follows ``key`` for a ``kind`` bump."""
    match kind:
        case BumpKind.BUILD:
            return VersionKey(key.epoch, key.line, key.revision, key.build + 1)
        case BumpKind.REVISION:
            return VersionKey(key.epoch, key.line, key.revision + 1, 1)
        case BumpKind.LINE:
            return VersionKey(key.epoch, _next_line_bucket(key.line), 1, 1)
        case BumpKind.EPOCH:
            return VersionKey(key.epoch + 1, _next_line_bucket(key.line), 1, 1)
        case _:
            raise AssertionError(f"unexpected bump kind: {kind}")
