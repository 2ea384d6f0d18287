from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from rk.core.config import Config, load_config, resolve_config_path
from rk.core.errors import ErrorCode
from rk.core.result import Err
from rk.git.repository import Repository
from rk.guard import BUMP_MARKER
from rk.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    cwd: Path
    config: Config
    console: ConsoleProtocol
    repo: Repository

    @property
    def marker(self) -> str:
        marker = self.config.guard.marker
        return BUMP_MARKER if marker is None else marker

    def manifest_path(self, override: Path | None = None) -> Path:
        path = override if override is not None else Path(self.config.manifest.path)
        return path if path.is_absolute() else self.cwd / path

    @property
    def ledger_path(self) -> Path:
        return self.config.ledger_path(self.cwd)


def build_context() -> CLIContext:
    cwd = Path.cwd()
    config_path = resolve_config_path(None, cwd)

    config = Config()
    if config_path.exists():
        config_result = load_config(config_path)
        if isinstance(config_result, Err):
            typer.echo(f"error: {config_result.error.message}", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
        config = config_result.value

    return CLIContext(
        cwd=cwd,
        config=config,
        console=RichConsole(),
        repo=Repository(cwd),
    )
