"""Version keys and the bump policy.

Usage:
    from rk.version import BumpKind, apply, locate_in

    located = locate_in(lines).unwrap()
    next_key = apply(located.key, BumpKind.BUILD)
"""

from rk.version.bump import BumpKind, apply, parse_bump_kind
from rk.version.errors import InvalidBumpKind, ParseError, VersionError, VersionNotFound
from rk.version.key import LocatedVersion, VersionKey, VersionLine, locate_in, parse_version

__all__ = [
    # Key
    "LocatedVersion",
    "VersionKey",
    "VersionLine",
    "locate_in",
    "parse_version",
    # Bump
    "BumpKind",
    "apply",
    "parse_bump_kind",
    # Errors
    "InvalidBumpKind",
    "ParseError",
    "VersionError",
    "VersionNotFound",
]
