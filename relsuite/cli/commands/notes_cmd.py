from __future__ import annotations

from pathlib import Path

import typer

from relsuite.cli.commands.release_common import exit_config_error, exit_release_error
from relsuite.cli.context import build_context
from relsuite.core.result import Err
from relsuite.git.repository import Repository
from relsuite.services.release.changelog import generate_changelog
from relsuite.services.release.config import load_notes_env
from relsuite.services.release.notes import render_release_body, write_release_body
from relsuite.services.release.pipeline import extract_stage, prepare_history


def notes(
    tag: str | None = typer.Option(None, "--tag", help="Release tag (default: from $GITHUB_REF)"),
    fetch: bool = typer.Option(True, "--fetch/--no-fetch", help="Fetch full history and tags"),
    out: Path | None = typer.Option(None, "--out", help="Write the body to a file"),
) -> None:
    """Render the release body without contacting GitHub."""
    cli = build_context(stderr=True)
    env = load_notes_env(cli.environ)
    if isinstance(env, Err):
        exit_config_error(env.error)

    ctx = extract_stage(tag=tag, tag_ref=env.value.tag_ref, console=cli.console)
    if isinstance(ctx, Err):
        exit_release_error(ctx.error)

    repo = Repository(cli.repo_dir)
    if fetch:
        prepared = prepare_history(repo=repo, console=cli.console)
        if isinstance(prepared, Err):
            exit_release_error(prepared.error)

    log = generate_changelog(repo=repo, version=ctx.value.version)
    if isinstance(log, Err):
        exit_release_error(log.error)

    body = render_release_body(
        version=ctx.value.version,
        changelog=log.value,
        repo_name=env.value.repo_name,
        image_name=env.value.image_name,
        suite=cli.suite,
    )
    if out is None:
        typer.echo(body, nl=False)
        return

    written = write_release_body(path=out, body=body)
    if isinstance(written, Err):
        exit_release_error(written.error)
    cli.console.success(f"wrote {written.value}")
