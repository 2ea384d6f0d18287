"""Git repository abstraction.

Wraps the git CLI for the few operations rk needs: history titles between
two refs (the bump guard's history source), commit metadata for release
records, the current branch, and committing a version bump.
All operations return Result types.

Usage:
    repo = Repository(Path("."))

    match repo.titles_between("origin/main", "HEAD"):
        case Ok(titles):
            print(f"{len(titles)} commit(s) to release")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rk.core.result import Err, Ok, Result
from rk.git.commit import COMMIT_FORMAT, Commit, parse_commit_record
from rk.platform.process import ProcessError
from rk.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _option_like(command: str, ref: str) -> GitError:
    return GitError(command=command, message=f"invalid ref {ref!r}: refs cannot start with '-'")


class Repository:
    """Git repository abstraction.

    Attributes:
        path: Path to the repository (any directory inside the work tree)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["branch", "--show-current"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def titles_between(self, base_ref: str, head_ref: str) -> Result[list[str], GitError]:
        """Subjects of commits reachable from head_ref but not from base_ref.

        Equivalent to ``git log --format=%s <head> --not <base>``, newest first.
        Unknown refs are an error, never an empty list.
        """
        for ref in (base_ref, head_ref):
            if ref.startswith("-"):
                return Err(_option_like("log", ref))

        result = self._run(
            ["log", "--format=%s", head_ref, "--not", base_ref, "--"],
        )
        match result:
            case Err(e):
                return Err(self._error(f"log {head_ref} --not {base_ref}", e))
            case Ok(stdout):
                return Ok([ln for ln in stdout.splitlines() if ln.strip()])

    def commit_info(self, ref: str = "HEAD") -> Result[Commit, GitError]:
        """Metadata of a single commit (HEAD by default)."""
        if not ref.strip():
            return Err(GitError(command="log -1", message="commit ref cannot be empty"))
        if ref.startswith("-"):
            return Err(_option_like("log -1", ref))

        result = self._run(["log", "-1", f"--format={COMMIT_FORMAT}", ref, "--"])
        match result:
            case Err(e):
                return Err(self._error(f"log -1 {ref}", e))
            case Ok(stdout):
                commit = parse_commit_record(stdout)
                if commit is None:
                    return Err(
                        GitError(
                            command=f"log -1 {ref}",
                            message=f"unexpected git log output: {stdout.strip()!r}",
                        )
                    )
                return Ok(commit)

    def commit_paths(self, paths: Sequence[Path], message: str) -> Result[str, GitError]:
        """Stage ``paths`` and commit them with ``message``.

        Returns:
            Ok(sha of the new commit) on success
        """
        if not paths:
            return Err(GitError(command="add", message="nothing to commit"))

        added = self._run(["add", "--", *(str(p) for p in paths)])
        if isinstance(added, Err):
            return Err(self._error("add", added.error))

        committed = self._run(["commit", "-m", message])
        if isinstance(committed, Err):
            return Err(self._error("commit", committed.error))

        head = self._run(["rev-parse", "HEAD"])
        match head:
            case Err(e):
                return Err(self._error("rev-parse HEAD", e))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _error(self, command: str, error: ProcessError) -> GitError:
        return GitError(
            command=command,
            message=error.detail,
            returncode=error.returncode,
        )

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
