"""release: record and query the release ledger."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

import typer

from rk.cli.commands._helpers import fail, load_manifest_version, open_ledger
from rk.cli.context import build_context
from rk.core.errors import ErrorCode
from rk.core.result import Err
from rk.ledger import Assignee, ReleaseRecord, issue_id_from_branch
from rk.output.console import Style
from rk.output.errors import (
    ledger_error_exit_code,
    print_ledger_error,
    print_version_error,
    version_error_exit_code,
)
from rk.version import VersionKey, parse_version

release_app = typer.Typer(add_completion=False, no_args_is_help=True)


@release_app.command("init")
def init() -> None:
    """Create the ledger database and its tables."""
    ctx = build_context()
    with open_ledger(ctx) as ledger:
        counted = ledger.count_releases()
    if isinstance(counted, Err):
        print_ledger_error(counted.error, ctx.console)
        raise typer.Exit(code=ledger_error_exit_code(counted.error))
    ctx.console.success(f"ledger ready: {ctx.ledger_path} ({counted.value} release(s))")


@release_app.command("create")
def create(
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Branch that produced this release (default: current branch)"
    ),
    issue: int | None = typer.Option(
        None, "--issue", "-i", help="Issue tracker id (default: first number in the branch name)"
    ),
    version: str | None = typer.Option(
        None, "--version", "-v", help="Released version (default: read from the manifest)"
    ),
    commit: str = typer.Option("HEAD", "--commit", "-c", help="Released commit"),
    manifest: Path | None = typer.Option(
        None, "--manifest", "-m", help="Manifest file (default from rk.toml)"
    ),
) -> None:
    """Record a release in the ledger."""
    ctx = build_context()

    key: VersionKey
    if version:
        parsed = parse_version(version)
        if isinstance(parsed, Err):
            print_version_error(parsed.error, ctx.console)
            raise typer.Exit(code=version_error_exit_code(parsed.error))
        key = parsed.value
    else:
        ctx.console.print("no --version given, reading the manifest", Style.DIM)
        _, located = load_manifest_version(ctx, ctx.manifest_path(manifest))
        key = located.key

    if branch is None:
        branch = ctx.repo.current_branch()
        if branch is None:
            fail(ctx, "detached HEAD: pass --branch", code=ErrorCode.USER_ERROR)

    info = ctx.repo.commit_info(commit)
    if isinstance(info, Err):
        fail(ctx, f"cannot read commit {commit}: {info.error.message}", code=ErrorCode.ENV_ERROR)
    git_commit = info.value

    if issue is None:
        issue = issue_id_from_branch(branch) or 0

    record = ReleaseRecord(
        branch=branch,
        assignee=Assignee(name=git_commit.author_name, email=git_commit.author_email),
        description=git_commit.message,
        commit=git_commit.sha,
        date=datetime.now(UTC),
        version=key,
        issue_tracker_id=issue,
    )

    with open_ledger(ctx) as ledger:
        saved = ledger.save_release(record)
    if isinstance(saved, Err):
        print_ledger_error(saved.error, ctx.console)
        raise typer.Exit(code=ledger_error_exit_code(saved.error))

    ctx.console.success(f"release recorded: {record.summary()}")
    ctx.console.print(f"commit {git_commit.short_sha}: {git_commit.message}", Style.DIM)


@release_app.command("latest")
def latest(
    short: bool = typer.Option(False, "--short", help="Print only the version"),
) -> None:
    """Show the most advanced release in the ledger."""
    ctx = build_context()

    with open_ledger(ctx) as ledger:
        fetched = ledger.fetch_most_advanced()
    if isinstance(fetched, Err):
        print_ledger_error(fetched.error, ctx.console)
        raise typer.Exit(code=ledger_error_exit_code(fetched.error))

    record = fetched.value
    if short:
        ctx.console.print(record.version.format())
        return

    ctx.console.print(record.version.format(), Style.BOLD)
    ctx.console.print(f"branch: {record.branch}")
    ctx.console.print(f"assignee: {record.assignee.name} <{record.assignee.email}>")
    ctx.console.print(f"commit: {record.commit}")
    ctx.console.print(f"date: {record.date.isoformat()}", Style.DIM)
    if record.issue_tracker_id:
        ctx.console.print(f"issue: {record.issue_tracker_id}", Style.DIM)
    if record.description:
        ctx.console.print(record.description, Style.DIM)
