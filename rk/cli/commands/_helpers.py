"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from rk.core.errors import ErrorCode
from rk.core.result import Err
from rk.ledger import ReleaseLedger, connect, ensure_schema
from rk.manifest import read_manifest
from rk.output.errors import print_version_error, version_error_exit_code
from rk.version import LocatedVersion, locate_in

if TYPE_CHECKING:
    from rk.cli.context import CLIContext


def fail(ctx: CLIContext, message: str, *, code: ErrorCode) -> NoReturn:
    ctx.console.error(message)
    raise typer.Exit(code=int(code))


def open_ledger(ctx: CLIContext) -> ReleaseLedger:
    """Connect to the configured ledger, creating its schema if needed."""
    path = ctx.ledger_path
    connected = connect(path, timeout=ctx.config.ledger.timeout)
    if isinstance(connected, Err):
        fail(ctx, connected.error.message, code=ErrorCode.STORAGE_ERROR)
    conn = connected.value

    schema = ensure_schema(conn)
    if isinstance(schema, Err):
        conn.close()
        fail(ctx, schema.error.message, code=ErrorCode.STORAGE_ERROR)
    return ReleaseLedger(conn)


def load_manifest_version(ctx: CLIContext, path: Path) -> tuple[list[str], LocatedVersion]:
    """Read the manifest and locate its version line, or exit."""
    lines = read_manifest(path)
    if isinstance(lines, Err):
        fail(ctx, lines.error.message, code=ErrorCode.IO_ERROR)

    located = locate_in(lines.value)
    if isinstance(located, Err):
        print_version_error(located.error, ctx.console)
        raise typer.Exit(code=version_error_exit_code(located.error))

    return lines.value, located.value
