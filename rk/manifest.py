"""Manifest file access: read lines, find the version, write it back.

The manifest format is never parsed; the version is whichever line
``rk.version.locate_in`` finds first, and that whole line is replaced by
``prefix + key.format()``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from rk.core.result import Err, Ok, Result
from rk.platform.files import atomic_write_text
from rk.version.key import VersionKey

__all__ = ["ManifestError", "read_manifest", "splice_version", "write_manifest"]


@dataclass(frozen=True, slots=True)
class ManifestError:
    path: Path
    message: str


def read_manifest(path: Path) -> Result[list[str], ManifestError]:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ManifestError(path, f"manifest not found: {path}"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(path, f"cannot read manifest {path}: {e}"))
    return Ok(text.split("\n"))


def splice_version(
    lines: Sequence[str], index: int, key: VersionKey, prefix: str
) -> list[str]:
    """Copy of ``lines`` with ``lines[index]`` replaced by the formatted key."""
    out = list(lines)
    out[index] = f"{prefix}{key.format()}"
    return out


def write_manifest(path: Path, lines: Sequence[str]) -> Result[None, ManifestError]:
    """Write lines back, keeping the file's permission bits."""
    try:
        atomic_write_text(path, "\n".join(lines))
    except OSError as e:
        return Err(ManifestError(path, f"cannot write manifest {path}: {e}"))
    return Ok(None)
