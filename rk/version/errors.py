from __future__ import annotations

from dataclasses import dataclass

EXPECTED_FORMAT = "2020.100.01+01"


@dataclass(frozen=True, slots=True)
class ParseError:
    """Text holds no usable version token."""

    text: str
    reason: str

    @property
    def message(self) -> str:
        shown = self.text if len(self.text) <= 80 else self.text[:77] + "..."
        return f"{self.reason} (expected format \"{EXPECTED_FORMAT}\", got: {shown!r})"


@dataclass(frozen=True, slots=True)
class VersionNotFound:
    """None of the scanned lines contains a version token."""

    lines_scanned: int

    @property
    def message(self) -> str:
        return f"version not found in {self.lines_scanned} line(s)"


@dataclass(frozen=True, slots=True)
class InvalidBumpKind:
    value: str
    accepted: tuple[str, ...]

    @property
    def message(self) -> str:
        return f"invalid bump kind: {self.value!r} (expected one of: {', '.join(self.accepted)})"


VersionError = ParseError | VersionNotFound | InvalidBumpKind
