"""Process exit codes for rk commands.

Pipelines branch on these values (e.g. retry a release on CONFLICT), so the
numbers must stay stable:
- 0: Success
- 1: User error (malformed version, unknown bump kind, missing flag)
- 2: Environment error (git missing, unknown refs, bad config)
- 3: Storage error (ledger unreachable or corrupt)
- 4: Conflict (another run already recorded this build)
- 5: I/O error (manifest not found, not writable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    STORAGE_ERROR = 3
    CONFLICT = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
