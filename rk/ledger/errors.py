from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InvalidRelease:
    """Record rejected before touching storage."""

    reason: str

    @property
    def message(self) -> str:
        return f"invalid release: {self.reason}"


@dataclass(frozen=True, slots=True)
class DuplicateBuild:
    """Another run already recorded this build for the same version line.

    Recoverable: fetch the most advanced release, bump again, save again.
    """

    version: str

    @property
    def message(self) -> str:
        return f"build {self.version} is already recorded in the ledger"


@dataclass(frozen=True, slots=True)
class ReleaseNotFound:
    @property
    def message(self) -> str:
        return "no release recorded in the ledger yet"


@dataclass(frozen=True, slots=True)
class StorageError:
    operation: str
    detail: str

    @property
    def message(self) -> str:
        return f"ledger {self.operation} failed: {self.detail}"


LedgerError = InvalidRelease | DuplicateBuild | ReleaseNotFound | StorageError
