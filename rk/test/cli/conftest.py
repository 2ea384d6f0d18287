from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

from rk.cli.context import CLIContext
from rk.core.config import Config, GuardConfig
from rk.core.result import Err, Ok, Result
from rk.git.commit import Commit
from rk.git.repository import GitError
from rk.output.console import MockConsole

PUBSPEC = "name: app\nversion: 2025.150.03+07\nenvironment:\n  sdk: '>=3.0.0'\n"


@dataclass
class FakeRepo:
    """Stands in for rk.git.Repository; records what the commands asked for."""

    titles: list[str] = field(default_factory=list)
    history_error: str | None = None
    commit: Commit | None = None
    branch: str | None = "feature/88-checkout"
    committed: list[tuple[list[Path], str]] = field(default_factory=list)
    queries: list[tuple[str, str]] = field(default_factory=list)

    def titles_between(self, base_ref: str, head_ref: str) -> Result[list[str], GitError]:
        self.queries.append((base_ref, head_ref))
        if self.history_error is not None:
            return Err(GitError(command="log", message=self.history_error, returncode=128))
        return Ok(self.titles)

    def current_branch(self) -> str | None:
        return self.branch

    def commit_info(self, ref: str = "HEAD") -> Result[Commit, GitError]:
        if self.commit is None:
            return Err(GitError(command="log", message=f"unknown revision {ref}", returncode=128))
        return Ok(self.commit)

    def commit_paths(self, paths: Sequence[Path], message: str) -> Result[str, GitError]:
        self.committed.append((list(paths), message))
        return Ok("f" * 40)


def sample_commit() -> Commit:
    return Commit(
        sha="3a4f5d6e7f8a9b0c1d2e3f4a5b6c7d8e9f0a1b2c",
        author_name="Jane Smith",
        author_email="jane@example.com",
        date=datetime(2025, 3, 5, 9, 15, tzinfo=UTC),
        message="feat: login screen",
    )


@pytest.fixture
def make_ctx(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., CLIContext]:
    """Factory for a CLIContext rooted at tmp_path with a FakeRepo and MockConsole."""
    monkeypatch.delenv("RK_LEDGER_PATH", raising=False)
    (tmp_path / "pubspec.yaml").write_text(PUBSPEC, encoding="utf-8")

    def factory(
        *,
        titles: list[str] | None = None,
        history_error: str | None = None,
        with_commit: bool = False,
        branch: str | None = "feature/88-checkout",
        marker: str | None = None,
    ) -> CLIContext:
        repo = FakeRepo(
            titles=titles or [],
            history_error=history_error,
            commit=sample_commit() if with_commit else None,
            branch=branch,
        )
        return CLIContext(
            cwd=tmp_path,
            config=Config(guard=GuardConfig(marker=marker)),
            console=MockConsole(),
            repo=repo,  # type: ignore[arg-type]
        )

    return factory
