from __future__ import annotations

from collections.abc import Callable

import pytest
import typer

import rk.cli.commands.release_cmd as release_cmd
from rk.cli.commands._helpers import open_ledger
from rk.cli.context import CLIContext
from rk.core.errors import ErrorCode
from rk.core.result import Ok
from rk.output.console import MockConsole
from rk.version import VersionKey

CtxFactory = Callable[..., CLIContext]


def _create(
    ctx: CLIContext,
    monkeypatch: pytest.MonkeyPatch,
    *,
    branch: str | None = "feature/1234-login",
    issue: int | None = None,
    version: str | None = None,
) -> MockConsole:
    monkeypatch.setattr(release_cmd, "build_context", lambda: ctx)
    release_cmd.create(branch=branch, issue=issue, version=version, commit="HEAD", manifest=None)
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


def test_init_creates_ledger(make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = make_ctx()
    monkeypatch.setattr(release_cmd, "build_context", lambda: ctx)

    release_cmd.init()
    release_cmd.init()

    assert ctx.ledger_path.exists()


class TestCreate:
    def test_records_release_from_manifest(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True)

        console = _create(ctx, monkeypatch)

        with open_ledger(ctx) as ledger:
            fetched = ledger.fetch_most_advanced()
        assert isinstance(fetched, Ok)
        record = fetched.value
        assert record.version == VersionKey(2025, 150, 3, 7)
        assert record.branch == "feature/1234-login"
        assert record.issue_tracker_id == 1234
        assert record.assignee.email == "jane@example.com"
        assert record.description == "feat: login screen"
        assert "release recorded" in console.text

    def test_explicit_version_and_issue(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True)

        _create(ctx, monkeypatch, branch="main", issue=42, version="2025.300.01+02")

        with open_ledger(ctx) as ledger:
            record = ledger.fetch_most_advanced().unwrap()
        assert record.version == VersionKey(2025, 300, 1, 2)
        assert record.issue_tracker_id == 42

    def test_branch_defaults_to_current(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True)

        _create(ctx, monkeypatch, branch=None)

        with open_ledger(ctx) as ledger:
            record = ledger.fetch_most_advanced().unwrap()
        assert record.branch == "feature/88-checkout"
        assert record.issue_tracker_id == 88

    def test_detached_head_needs_branch(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True, branch=None)

        with pytest.raises(typer.Exit) as exc:
            _create(ctx, monkeypatch, branch=None)

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)

    def test_duplicate_build_is_conflict(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True)
        _create(ctx, monkeypatch)

        with pytest.raises(typer.Exit) as exc:
            _create(ctx, monkeypatch, branch="main")

        assert exc.value.exit_code == int(ErrorCode.CONFLICT)

    def test_blank_branch_is_user_error(
        self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctx = make_ctx(with_commit=True)

        with pytest.raises(typer.Exit) as exc:
            _create(ctx, monkeypatch, branch=" ")

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)

    def test_unknown_commit(self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        ctx = make_ctx(with_commit=False)

        with pytest.raises(typer.Exit) as exc:
            _create(ctx, monkeypatch)

        assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)

    def test_bad_version(self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        ctx = make_ctx(with_commit=True)

        with pytest.raises(typer.Exit) as exc:
            _create(ctx, monkeypatch, version="v1")

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


class TestLatest:
    def test_empty_ledger(self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        ctx = make_ctx()
        monkeypatch.setattr(release_cmd, "build_context", lambda: ctx)

        with pytest.raises(typer.Exit) as exc:
            release_cmd.latest(short=False)

        assert exc.value.exit_code == int(ErrorCode.USER_ERROR)

    def test_short(self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        ctx = make_ctx(with_commit=True)
        _create(ctx, monkeypatch, version="2025.200.01+01")
        _create(ctx, monkeypatch, version="2025.300.01+01")
        _create(ctx, monkeypatch, version="2025.200.01+09")
        assert isinstance(ctx.console, MockConsole)
        ctx.console.outputs.clear()

        release_cmd.latest(short=True)

        assert ctx.console.messages == ["2025.300.01+01"]

    def test_full(self, make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
        ctx = make_ctx(with_commit=True)
        _create(ctx, monkeypatch)
        assert isinstance(ctx.console, MockConsole)
        ctx.console.outputs.clear()

        release_cmd.latest(short=False)

        text = ctx.console.text
        assert "2025.150.03+07" in text
        assert "Jane Smith <jane@example.com>" in text
        assert "issue: 1234" in text


def test_init_reports_count(make_ctx: CtxFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    ctx = make_ctx(with_commit=True)
    _create(ctx, monkeypatch)

    release_cmd.init()

    assert isinstance(ctx.console, MockConsole)
    assert "(1 release(s))" in ctx.console.messages[-1]
