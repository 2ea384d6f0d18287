"""Typed configuration loading and access.

This module provides dataclasses for the rk.toml structure:

    [manifest]
    path = "pubspec.yaml"
    prefix = "version: "

    [ledger]
    path = ".rk/ledger.db"
    timeout = 5.0

    [guard]
    marker = "bump version [skip ci]"
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "Config",
    "ConfigError",
    "GuardConfig",
    "LedgerConfig",
    "ManifestConfig",
    "load_config",
    "resolve_config_path",
    # Defaults
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_MANIFEST_PATH",
    "DEFAULT_MANIFEST_PREFIX",
    "DEFAULT_LEDGER_PATH",
    "DEFAULT_LEDGER_TIMEOUT",
]

DEFAULT_CONFIG_NAME = "rk.toml"
DEFAULT_MANIFEST_PATH = "pubspec.yaml"
DEFAULT_MANIFEST_PREFIX = "version: "
DEFAULT_LEDGER_PATH = ".rk/ledger.db"
DEFAULT_LEDGER_TIMEOUT = 5.0

CONFIG_ENV = "RK_CONFIG"
LEDGER_PATH_ENV = "RK_LEDGER_PATH"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    """Where the version token lives and how its line is written back."""

    path: str = DEFAULT_MANIFEST_PATH
    prefix: str = DEFAULT_MANIFEST_PREFIX


@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """SQLite ledger location and busy timeout (seconds)."""

    path: str = DEFAULT_LEDGER_PATH
    timeout: float = DEFAULT_LEDGER_TIMEOUT


@dataclass(frozen=True, slots=True)
class GuardConfig:
    """Bump guard settings.

    ``marker`` None means the built-in marker from ``rk.guard``.
    """

    marker: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    guard: GuardConfig = field(default_factory=GuardConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        manifest: StrDict = get_table(data, "manifest") or {}
        ledger: StrDict = get_table(data, "ledger") or {}
        guard: StrDict = get_table(data, "guard") or {}

        return cls(
            manifest=ManifestConfig(
                path=get_str(manifest, "path") or DEFAULT_MANIFEST_PATH,
                prefix=get_str(manifest, "prefix", strip=False) or DEFAULT_MANIFEST_PREFIX,
            ),
            ledger=LedgerConfig(
                path=get_str(ledger, "path") or DEFAULT_LEDGER_PATH,
                timeout=get_float(ledger, "timeout") or DEFAULT_LEDGER_TIMEOUT,
            ),
            guard=GuardConfig(marker=_marker(guard)),
        )

    def ledger_path(self, base: Path) -> Path:
        """Resolve the ledger file, honoring RK_LEDGER_PATH over the config value."""
        raw = os.environ.get(LEDGER_PATH_ENV, "").strip() or self.ledger.path
        path = Path(raw).expanduser()
        return path if path.is_absolute() else base / path


def _marker(guard: StrDict) -> str | None:
    """[guard] marker, which may be absent but never blank."""
    if "marker" not in guard:
        return None
    marker = get_str(guard, "marker")
    if marker is None:
        raise ValueError("[guard] marker must be a non-empty string")
    return marker


def resolve_config_path(explicit: Path | None, cwd: Path) -> Path:
    """Pick the config file: --config, then RK_CONFIG, then ./rk.toml."""
    if explicit is not None:
        return explicit.expanduser()
    env = os.environ.get(CONFIG_ENV, "").strip()
    if env:
        return Path(env).expanduser()
    return cwd / DEFAULT_CONFIG_NAME


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to rk.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))
