"""Error presentation utilities.

Centralized error formatting and exit code mapping for rk commands.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rk.core.errors import ErrorCode
from rk.guard import QueryError
from rk.ledger.errors import (
    DuplicateBuild,
    InvalidRelease,
    LedgerError,
    ReleaseNotFound,
    StorageError,
)
from rk.output.console import Style
from rk.version.errors import InvalidBumpKind, ParseError, VersionError, VersionNotFound

if TYPE_CHECKING:
    from rk.output.console import ConsoleProtocol

__all__ = [
    "ledger_error_exit_code",
    "print_ledger_error",
    "print_query_error",
    "print_version_error",
    "version_error_exit_code",
]


def print_version_error(error: VersionError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    match error:
        case VersionNotFound():
            console.print("hint: add a line such as 'version: 2025.100.01+01'", Style.DIM)
        case ParseError() | InvalidBumpKind():
            pass


def version_error_exit_code(error: VersionError) -> int:
    match error:
        case ParseError() | InvalidBumpKind():
            return int(ErrorCode.USER_ERROR)
        case VersionNotFound():
            return int(ErrorCode.IO_ERROR)


def print_query_error(error: QueryError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    console.print("hint: fetch both refs before running with --once", Style.DIM)


def print_ledger_error(error: LedgerError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    match error:
        case DuplicateBuild():
            console.print("hint: fetch the latest release, bump again and retry", Style.DIM)
        case ReleaseNotFound():
            console.print("hint: record a first release with 'rk release create'", Style.DIM)
        case InvalidRelease() | StorageError():
            pass


def ledger_error_exit_code(error: LedgerError) -> int:
    match error:
        case InvalidRelease() | ReleaseNotFound():
            return int(ErrorCode.USER_ERROR)
        case DuplicateBuild():
            return int(ErrorCode.CONFLICT)
        case StorageError():
            return int(ErrorCode.STORAGE_ERROR)
