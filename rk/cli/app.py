from __future__ import annotations

import os
from pathlib import Path

import typer

from rk import __version__
from rk.cli.commands.bump_cmd import bump
from rk.cli.commands.release_cmd import release_app
from rk.cli.commands.version_cmd import set_version, show
from rk.core.config import CONFIG_ENV
from rk.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(bump)
app.command("set-version")(set_version)
app.command()(show)

# Sub-apps
app.add_typer(release_app, name="release", help="Record and query releases.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Path to rk.toml (default: ./rk.toml or $RK_CONFIG)",
    ),
) -> None:
    del version
    if config is not None:
        path = config.expanduser()
        if not path.is_file():
            typer.echo(f"error: config file not found: {path}", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[CONFIG_ENV] = str(path.resolve())


def main() -> None:
    app()
