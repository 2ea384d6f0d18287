from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GitRunner = Callable[..., str]


@pytest.fixture
def git_repo(tmp_path: Path) -> tuple[Path, GitRunner]:
    """A fresh repository on branch main with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git not installed")

    def git(*args: str) -> str:
        proc = subprocess.run(
            ["git", "-C", str(tmp_path), *args],
            capture_output=True,
            text=True,
            check=True,
        )
        return proc.stdout

    git("init", "-q", "-b", "main")
    git("config", "user.name", "CI Bot")
    git("config", "user.email", "ci@example.com")
    git("config", "commit.gpgsign", "false")
    (tmp_path / "pubspec.yaml").write_text("name: app\nversion: 2025.100.01+01\n", encoding="utf-8")
    git("add", ".")
    git("commit", "-q", "-m", "initial commit")
    return tmp_path, git
