"""bump: advance the manifest version."""

from __future__ import annotations

from pathlib import Path

import typer

from rk.cli.commands._helpers import fail, load_manifest_version, open_ledger
from rk.cli.context import CLIContext, build_context
from rk.core.errors import ErrorCode
from rk.core.result import Err, Ok
from rk.guard import already_applied, bump_commit_message
from rk.ledger import ReleaseNotFound
from rk.manifest import splice_version, write_manifest
from rk.output.console import Style
from rk.output.errors import (
    ledger_error_exit_code,
    print_ledger_error,
    print_query_error,
    print_version_error,
    version_error_exit_code,
)
from rk.version import VersionKey, apply, parse_bump_kind


def bump(
    kind: str = typer.Argument(..., help="build, revision (patch), line (minor) or epoch (major)"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Manifest file (default from rk.toml)"
    ),
    fetch: bool = typer.Option(
        False, "--fetch", help="Start from the most advanced release in the ledger if it is ahead"
    ),
    once: bool = typer.Option(
        False, "--once", help="Skip if a bump commit already exists between --base and --head"
    ),
    base: str | None = typer.Option(None, "--base", help="Base ref for --once (e.g. origin/main)"),
    head: str | None = typer.Option(None, "--head", help="Head ref for --once (e.g. HEAD)"),
    commit: bool = typer.Option(False, "--commit", help="Commit the manifest with the bump message"),
) -> None:
    """Increment the version in the manifest."""
    ctx = build_context()

    parsed_kind = parse_bump_kind(kind)
    if isinstance(parsed_kind, Err):
        print_version_error(parsed_kind.error, ctx.console)
        raise typer.Exit(code=version_error_exit_code(parsed_kind.error))
    bump_kind = parsed_kind.value

    if once:
        if not base or not head:
            fail(ctx, "--once requires both --base and --head", code=ErrorCode.USER_ERROR)
        applied = already_applied(ctx.repo, base, head, marker=ctx.marker)
        if isinstance(applied, Err):
            print_query_error(applied.error, ctx.console)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        if applied.value:
            ctx.console.info(f"previous bump found in {head} --not {base}, skipping")
            return
        ctx.console.print("no previous bump found", Style.DIM)

    path = ctx.manifest_path(manifest)
    lines, located = load_manifest_version(ctx, path)

    current = located.key
    if fetch:
        current = _seed_from_ledger(ctx, current)

    next_key = apply(current, bump_kind)
    written = write_manifest(
        path, splice_version(lines, located.index, next_key, ctx.config.manifest.prefix)
    )
    if isinstance(written, Err):
        fail(ctx, written.error.message, code=ErrorCode.IO_ERROR)

    ctx.console.success(f"{bump_kind} bump: {current} -> {next_key}")

    if commit:
        committed = ctx.repo.commit_paths([path], bump_commit_message(ctx.marker))
        if isinstance(committed, Err):
            fail(ctx, f"commit failed: {committed.error.message}", code=ErrorCode.ENV_ERROR)
        ctx.console.print(f"committed {committed.value[:8]}", Style.DIM)


def _seed_from_ledger(ctx: CLIContext, local: VersionKey) -> VersionKey:
    """The greater of the manifest key and the ledger's most advanced key."""
    with open_ledger(ctx) as ledger:
        fetched = ledger.fetch_most_advanced()

    match fetched:
        case Ok(record):
            if record.version > local:
                ctx.console.print(f"ledger is ahead: {record.version}", Style.DIM)
                return record.version
            return local
        case Err(ReleaseNotFound()):
            ctx.console.print("ledger is empty, using manifest version", Style.DIM)
            return local
        case Err(error):
            print_ledger_error(error, ctx.console)
            raise typer.Exit(code=ledger_error_exit_code(error))
