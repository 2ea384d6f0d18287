from __future__ import annotations

from pathlib import Path

import typer

from rk.cli.commands._helpers import fail, load_manifest_version
from rk.cli.context import build_context
from rk.core.errors import ErrorCode
from rk.core.result import Err
from rk.manifest import splice_version, write_manifest
from rk.output.errors import print_version_error, version_error_exit_code
from rk.version import parse_version


def set_version(
    version: str = typer.Argument(..., help="New version, e.g. 2025.100.01+01"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Manifest file (default from rk.toml)"
    ),
) -> None:
    """Write a specific version into the manifest."""
    ctx = build_context()

    parsed = parse_version(version)
    if isinstance(parsed, Err):
        print_version_error(parsed.error, ctx.console)
        raise typer.Exit(code=version_error_exit_code(parsed.error))

    path = ctx.manifest_path(manifest)
    lines, located = load_manifest_version(ctx, path)

    written = write_manifest(
        path, splice_version(lines, located.index, parsed.value, ctx.config.manifest.prefix)
    )
    if isinstance(written, Err):
        fail(ctx, written.error.message, code=ErrorCode.IO_ERROR)

    ctx.console.success(f"{path.name}: {located.key} -> {parsed.value}")


def show(
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Manifest file (default from rk.toml)"
    ),
    no_build: bool = typer.Option(
        False, "--no-build", help="Print without the +build suffix (branch/tag label)"
    ),
) -> None:
    """Print the manifest version."""
    ctx = build_context()
    _, located = load_manifest_version(ctx, ctx.manifest_path(manifest))
    key = located.key
    ctx.console.print(key.format_without_build() if no_build else key.format())
