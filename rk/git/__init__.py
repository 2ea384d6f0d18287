"""Git operations module.

Usage:
    from rk.git import Repository

    repo = Repository(Path("."))
    commit = repo.commit_info("HEAD")
"""

from rk.git.commit import Commit, parse_commit_record
from rk.git.repository import GitError, Repository

__all__ = [
    "Commit",
    "GitError",
    "Repository",
    "parse_commit_record",
]
