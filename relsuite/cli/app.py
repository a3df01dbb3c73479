from __future__ import annotations

import os
from pathlib import Path

import typer

from relsuite import __version__
from relsuite.cli.commands.changelog_cmd import changelog
from relsuite.cli.commands.draft_cmd import draft
from relsuite.cli.commands.notes_cmd import notes
from relsuite.cli.commands.version_cmd import version
from relsuite.cli.context import CONFIG_PATH_ENV, REPO_DIR_ENV
from relsuite.core.errors import ErrorCode

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.command()(version)
app.command()(changelog)
app.command()(notes)
app.command()(draft)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    show_version: bool = typer.Option(
        False, "--version", callback=_show_version, is_eager=True, help="Show version and exit."
    ),
    repo_dir: Path | None = typer.Option(
        None, "--repo-dir", help="Git checkout to release from (default: cwd)"
    ),
    config: Path | None = typer.Option(
        None, "--config", help="Template config (default: <repo-dir>/relsuite.toml)"
    ),
) -> None:
    del show_version

    if repo_dir is not None:
        try:
            root = repo_dir.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --repo-dir: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not root.is_dir():
            typer.echo(f"error: --repo-dir '{root}' is not a directory", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        os.environ[REPO_DIR_ENV] = str(root)

    if config is not None:
        os.environ[CONFIG_PATH_ENV] = str(config.expanduser())


def main() -> None:
    app()
