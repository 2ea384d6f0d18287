"""Four-part version key: ``epoch.line.revision+build``.

The textual form is zero padded to 4/3/2/2 digits, e.g. ``2025.200.01+10``.
Padding is cosmetic; wider values are kept as-is.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from rk.core.result import Err, Ok, Result
from rk.version.errors import ParseError, VersionNotFound

__all__ = [
    "LocatedVersion",
    "VersionKey",
    "VersionLine",
    "locate_in",
    "parse_version",
]

# ASCII digits only. Unanchored: labels such as "version: " and trailing text are ignored.
_VERSION_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\+([0-9]+)")

# Shortest line that can hold a token ("0.0.0+00").
_MIN_TOKEN_LENGTH = 8

# Components are stored as signed 64-bit integers in the ledger.
_MAX_COMPONENT = 2**63 - 1
_MAX_COMPONENT_DIGITS = len(str(_MAX_COMPONENT))


@dataclass(frozen=True, slots=True, order=True)
class VersionLine:
    """The non-build part of a key; one ledger row per distinct line."""

    epoch: int
    line: int
    revision: int


@dataclass(frozen=True, slots=True, order=True)
class VersionKey:
    """Immutable version identifier, ordered epoch > line > revision > build."""

    epoch: int
    line: int
    revision: int
    build: int

    def __post_init__(self) -> None:
        for name in ("epoch", "line", "revision", "build"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @property
    def version_line(self) -> VersionLine:
        return VersionLine(self.epoch, self.line, self.revision)

    def format(self) -> str:
        return f"{self.format_without_build()}+{self.build:02d}"

    def format_without_build(self) -> str:
        """Label form used for branch and tag names."""
        return f"{self.epoch:04d}.{self.line:03d}.{self.revision:02d}"

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True, slots=True)
class LocatedVersion:
    key: VersionKey
    index: int


def parse_version(text: str) -> Result[VersionKey, ParseError]:
    """Find the first ``epoch.line.revision+build`` token anywhere in ``text``.

    Fails when the text is empty, holds no token, or a component does not fit
    in a signed 64-bit integer.
    """
    if not text:
        return Err(ParseError(text=text, reason="version text cannot be empty"))

    m = _VERSION_RE.search(text)
    if m is None:
        return Err(ParseError(text=text, reason="version token not found"))

    parts: list[int] = []
    for label, group in zip(("epoch", "line", "revision", "build"), m.groups(), strict=True):
        digits = group.lstrip("0") or "0"
        # length is checked before int(), which rejects very long digit strings
        if len(digits) > _MAX_COMPONENT_DIGITS or int(digits) > _MAX_COMPONENT:
            shown = digits if len(digits) <= 24 else f"{digits[:20]}... ({len(digits)} digits)"
            return Err(ParseError(text=text, reason=f"{label} out of range: {shown}"))
        parts.append(int(digits))

    return Ok(VersionKey(*parts))


def locate_in(lines: Sequence[str]) -> Result[LocatedVersion, VersionNotFound]:
    """Return the first line (by index) that holds a parsable version token."""
    for index, line in enumerate(lines):
        if len(line) < _MIN_TOKEN_LENGTH:
            continue
        parsed = parse_version(line)
        if isinstance(parsed, Ok):
            return Ok(LocatedVersion(key=parsed.value, index=index))
    return Err(VersionNotFound(lines_scanned=len(lines)))
