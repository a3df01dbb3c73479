from __future__ import annotations

import typer

from relsuite.cli.commands.release_common import exit_release_error
from relsuite.cli.context import build_context
from relsuite.core.result import Err
from relsuite.git.repository import Repository
from relsuite.services.release.changelog import generate_changelog
from relsuite.services.release.pipeline import extract_stage, prepare_history


def changelog(
    tag: str | None = typer.Option(None, "--tag", help="Release tag (default: from $GITHUB_REF)"),
    fetch: bool = typer.Option(True, "--fetch/--no-fetch", help="Fetch full history and tags"),
) -> None:
    """Print the changelog lines between the previous tag and the release tag."""
    cli = build_context(stderr=True)
    ctx = extract_stage(tag=tag, tag_ref=cli.environ.get("GITHUB_REF"), console=cli.console)
    if isinstance(ctx, Err):
        exit_release_error(ctx.error)

    repo = Repository(cli.repo_dir)
    if fetch:
        prepared = prepare_history(repo=repo, console=cli.console)
        if isinstance(prepared, Err):
            exit_release_error(prepared.error)

    result = generate_changelog(repo=repo, version=ctx.value.version)
    if isinstance(result, Err):
        exit_release_error(result.error)

    typer.echo(result.value.markdown())
